"""
Build the set of specimens assayed by the fusion callers.

The universe is the union of tumor_id values from the raw (unfiltered)
STAR-Fusion and Arriba outputs. Every specimen in it gets a row in the
summary matrices, whether or not it carries a fusion of interest.
"""

from pathlib import Path

import pandas as pd

# Handle both Snakemake and standalone execution
try:
    from utils import clean_ids, read_tsv, validate_required_columns
except ImportError:
    from workflow.scripts.utils import clean_ids, read_tsv, validate_required_columns


TUMOR_ID_COLUMN = 'tumor_id'


def load_caller_table(filepath: str | Path) -> pd.DataFrame:
    """
    Load the specimen column of a raw fusion caller output.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the tumor_id column is missing
    """
    return read_tsv(filepath, [TUMOR_ID_COLUMN])


def specimen_universe(
    table_a: pd.DataFrame,
    table_b: pd.DataFrame,
    id_column: str = TUMOR_ID_COLUMN,
    logger=None
) -> frozenset[str]:
    """
    Union the specimen identifiers of two caller tables.

    Args:
        table_a: First caller table
        table_b: Second caller table
        id_column: Column holding the specimen identifier
        logger: Logger instance

    Returns:
        Deduplicated set of non-blank specimen identifiers
    """
    ids = set()
    for table in (table_a, table_b):
        validate_required_columns(table.columns, [id_column], source="caller table")
        ids.update(clean_ids(table[id_column].dropna()))

    # Blank ids carry no specimen
    ids.discard('')
    universe = frozenset(ids)

    if logger:
        logger.info(f"Specimen universe: {len(universe):,} specimens")

    return universe
