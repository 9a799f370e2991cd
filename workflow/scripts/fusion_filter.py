"""
Select fusions of interest from the putative oncogenic fusion table.

A FusionSelector names the specimens, exact fusion names and constituent
genes to keep. Fusion names and genes are OR-combined: a row is kept when
its FusionName is listed, or when any of Gene1A/Gene2A/Gene1B/Gene2B is
listed. The result is projected down to (Sample, FusionName) pairs, which
is all the summary matrix needs.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import pandas as pd

# Handle both Snakemake and standalone execution
try:
    from utils import clean_ids, read_tsv
except ImportError:
    from workflow.scripts.utils import clean_ids, read_tsv


# =============================================================================
# CONSTANTS
# =============================================================================

SAMPLE_COLUMN = 'Sample'
FUSION_NAME_COLUMN = 'FusionName'
GENE_COLUMNS = ('Gene1A', 'Gene2A', 'Gene1B', 'Gene2B')
FUSION_TABLE_COLUMNS = (SAMPLE_COLUMN, FUSION_NAME_COLUMN) + GENE_COLUMNS
PAIR_COLUMNS = [SAMPLE_COLUMN, FUSION_NAME_COLUMN]


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class FusionRecord:
    """One fusion event called in one specimen."""
    sample: str
    fusion_name: str        # Conventionally GeneA--GeneB
    gene1a: str = ''
    gene2a: str = ''
    gene1b: str = ''
    gene2b: str = ''

    def to_dict(self) -> dict:
        """Convert to dictionary keyed by fusion table column names."""
        return {
            SAMPLE_COLUMN: self.sample,
            FUSION_NAME_COLUMN: self.fusion_name,
            'Gene1A': self.gene1a,
            'Gene2A': self.gene2a,
            'Gene1B': self.gene1b,
            'Gene2B': self.gene2b,
        }


@dataclass(frozen=True)
class FusionSelector:
    """
    Which fusions to keep.

    Each field is optional; None means "not supplied" and applies no
    restriction. A supplied empty set matches nothing.
    """
    specimens: frozenset[str] | None = None
    fusion_names: frozenset[str] | None = None
    genes: frozenset[str] | None = None

    @classmethod
    def create(
        cls,
        specimens: Iterable[str] | None = None,
        fusion_names: Iterable[str] | None = None,
        genes: Iterable[str] | None = None
    ) -> 'FusionSelector':
        """Build a selector from any iterables, freezing them."""
        return cls(
            specimens=None if specimens is None else frozenset(specimens),
            fusion_names=None if fusion_names is None else frozenset(fusion_names),
            genes=None if genes is None else frozenset(genes),
        )

    def mask(self, fusions: pd.DataFrame) -> pd.Series:
        """
        Boolean mask of the rows in a fusion table that this selector keeps.

        Args:
            fusions: Table with Sample, FusionName and the four gene columns

        Returns:
            Boolean Series aligned with fusions.index
        """
        keep = pd.Series(True, index=fusions.index)

        if self.specimens is not None:
            keep &= fusions[SAMPLE_COLUMN].isin(list(self.specimens))

        if self.fusion_names is not None and self.genes is not None:
            keep &= self._name_hits(fusions) | self._gene_hits(fusions)
        elif self.fusion_names is not None:
            keep &= self._name_hits(fusions)
        elif self.genes is not None:
            keep &= self._gene_hits(fusions)

        return keep

    def matches(self, record: FusionRecord) -> bool:
        """Whether a single record would be kept."""
        return bool(self.mask(records_to_frame([record])).iloc[0])

    def _name_hits(self, fusions: pd.DataFrame) -> pd.Series:
        return fusions[FUSION_NAME_COLUMN].isin(list(self.fusion_names))

    def _gene_hits(self, fusions: pd.DataFrame) -> pd.Series:
        return fusions[list(GENE_COLUMNS)].isin(list(self.genes)).any(axis=1)


# =============================================================================
# DATA LOADING
# =============================================================================

def load_fusion_table(filepath: str | Path) -> pd.DataFrame:
    """
    Load the putative oncogenic fusion table.

    Args:
        filepath: Path to TSV (plain or gzipped)

    Returns:
        DataFrame with Sample, FusionName, Gene1A, Gene2A, Gene1B, Gene2B

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If a required column is missing
    """
    return read_tsv(filepath, FUSION_TABLE_COLUMNS)


def records_to_frame(records: Iterable[FusionRecord]) -> pd.DataFrame:
    """Build a fusion table from FusionRecord objects."""
    return pd.DataFrame(
        [record.to_dict() for record in records],
        columns=list(FUSION_TABLE_COLUMNS),
    )


# =============================================================================
# FILTERING
# =============================================================================

def filter_fusions(
    fusions: pd.DataFrame,
    selector: FusionSelector,
    logger=None
) -> pd.DataFrame:
    """
    Keep the fusion rows a selector matches and project to (Sample, FusionName).

    Args:
        fusions: Putative oncogenic fusion table
        selector: Specimens, fusion names and genes to keep
        logger: Logger instance

    Returns:
        DataFrame with Sample and FusionName columns (may be empty)
    """
    # Same id normalization as the specimen universe
    fusions = fusions.assign(**{SAMPLE_COLUMN: clean_ids(fusions[SAMPLE_COLUMN])})

    pairs = fusions.loc[selector.mask(fusions), PAIR_COLUMNS].reset_index(drop=True)

    if logger:
        logger.info(
            f"Selected {len(pairs):,} of {len(fusions):,} fusion calls "
            f"({pairs[SAMPLE_COLUMN].nunique():,} specimens)"
        )

    return pairs
