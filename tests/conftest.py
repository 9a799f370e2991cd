#!/usr/bin/env python3
"""
Pytest configuration and shared fixtures for fusion summary tests.
"""

import pytest
import sys
from pathlib import Path

# Add workflow/scripts to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "workflow" / "scripts"))


# =============================================================================
# SHARED TEST DATA
# =============================================================================

FUSION_TABLE_HEADER = [
    'Sample', 'FusionName', 'Gene1A', 'Gene2A', 'Gene1B', 'Gene2B',
    'Fusion_Type', 'Caller',
]

# Curated calls; extra columns mimic the real putative oncogenic table
TEST_FUSION_ROWS = [
    ['BS_EPN1', 'C11orf95--RELA', 'C11orf95', '', 'RELA', '', 'in-frame', 'STARFusion'],
    ['BS_EPN1', 'C11orf95--RELA', 'C11orf95', '', 'RELA', '', 'in-frame', 'Arriba'],
    ['BS_EPN2', 'YAP1--MAMLD1', 'YAP1', '', 'MAMLD1', '', 'in-frame', 'Arriba'],
    ['BS_EPN3', 'FOO--RELA', 'FOO', '', 'RELA', '', 'frameshift', 'STARFusion'],
    ['BS_ETMR1', 'TTYH1--C19MC', 'TTYH1', '', 'C19MC', '', 'other', 'Arriba'],
    ['BS_ETMR2', 'MN1--CXXC5', 'MN1', '', 'CXXC5', '', 'in-frame', 'STARFusion'],
    ['BS_HGG1', 'KIAA1549--BRAF', 'KIAA1549', '', 'BRAF', '', 'in-frame', 'STARFusion'],
]

STARFUSION_TUMOR_IDS = ['BS_EPN1', 'BS_EPN2', 'BS_ETMR1', 'BS_HGG1', 'BS_NOFUSION1']
ARRIBA_TUMOR_IDS = ['BS_EPN1', 'BS_EPN3', 'BS_ETMR2', 'BS_NOFUSION2']


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def write_tsv_rows(filepath, header, rows):
    """
    Write a tab-separated file with a header row.

    Args:
        filepath: Path to write
        header: Column names
        rows: List of row value lists
    """
    with open(filepath, 'w') as f:
        f.write('\t'.join(header) + '\n')
        for row in rows:
            f.write('\t'.join(str(v) for v in row) + '\n')


def write_caller_table(filepath, tumor_ids):
    """Write a minimal raw caller table with a tumor_id column."""
    rows = [[tumor_id, f'GENE{i}--GENE{i + 1}', 1] for i, tumor_id in enumerate(tumor_ids)]
    write_tsv_rows(filepath, ['tumor_id', 'FusionName', 'JunctionReadCount'], rows)


# =============================================================================
# TEST FILE FIXTURES
# =============================================================================

@pytest.fixture
def fusion_table_file(tmp_path):
    """Create a temporary putative oncogenic fusion table."""
    path = tmp_path / "putative_oncogenic.tsv"
    write_tsv_rows(path, FUSION_TABLE_HEADER, TEST_FUSION_ROWS)
    return path


@pytest.fixture
def starfusion_file(tmp_path):
    """Create a temporary raw STAR-Fusion table."""
    path = tmp_path / "starfusion.tsv"
    write_caller_table(path, STARFUSION_TUMOR_IDS)
    return path


@pytest.fixture
def arriba_file(tmp_path):
    """Create a temporary raw Arriba table."""
    path = tmp_path / "arriba.tsv"
    write_caller_table(path, ARRIBA_TUMOR_IDS)
    return path


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks integration tests"
    )


# =============================================================================
# TEST COLLECTION HOOKS
# =============================================================================

def pytest_collection_modifyitems(config, items):
    """
    Modify test collection to add markers based on test names/locations.
    """
    for item in items:
        # Mark tests in test_integration.py as integration tests
        if "integration" in item.fspath.basename:
            item.add_marker(pytest.mark.integration)
