"""
Pivot filtered fusion calls into a specimen x fusion count matrix.

MATRIX SHAPE:
    Rows are every specimen in the specimen universe, sorted by identifier.
    Columns are Kids_First_Biospecimen_ID followed by fusion names, sorted.
    A cell holds the number of filtered calls of that fusion in that specimen.

    A pivot only creates columns for fusions that occur. Fusions declared as
    expected for a subtype but never observed are added as all-zero columns,
    and logged, so that downstream classifiers always see the same schema.
"""

import numpy as np
import pandas as pd

# Handle both Snakemake and standalone execution
try:
    from fusion_filter import SAMPLE_COLUMN, FUSION_NAME_COLUMN
except ImportError:
    from workflow.scripts.fusion_filter import SAMPLE_COLUMN, FUSION_NAME_COLUMN


BIOSPECIMEN_ID_COLUMN = 'Kids_First_Biospecimen_ID'


# =============================================================================
# RECONCILIATION CHECKS
# =============================================================================

def zero_filled_fusions(
    pairs: pd.DataFrame,
    expected_fusion_names: list[str] | tuple[str, ...]
) -> list[str]:
    """
    Expected fusion names with no filtered call in any specimen.

    Args:
        pairs: Filtered (Sample, FusionName) pairs
        expected_fusion_names: Fixed column list declared for the subtype

    Returns:
        Names needing a zero column, in declared order
    """
    observed = set(pairs[FUSION_NAME_COLUMN])
    return [name for name in expected_fusion_names if name not in observed]


def check_specimens_in_universe(
    pairs: pd.DataFrame,
    universe: frozenset[str] | set[str]
) -> None:
    """
    Fail if a filtered call belongs to a specimen outside the universe.

    The curated table is derived from the caller outputs, so such a
    specimen means the inputs do not belong together.

    Raises:
        ValueError: If any specimen is unknown
    """
    unknown = sorted(set(pairs[SAMPLE_COLUMN]) - set(universe))
    if unknown:
        preview = ', '.join(unknown[:5])
        more = f" (and {len(unknown) - 5} more)" if len(unknown) > 5 else ""
        raise ValueError(
            f"{len(unknown)} specimen(s) in the fusion table are absent from "
            f"the caller outputs: {preview}{more}"
        )


# =============================================================================
# MATRIX
# =============================================================================

def count_pairs(pairs: pd.DataFrame) -> pd.DataFrame:
    """
    Pivot (Sample, FusionName) pairs to a wide table of call counts.

    Returns:
        DataFrame indexed by Sample with one column per observed fusion
    """
    if pairs.empty:
        return pd.DataFrame(index=pd.Index([], name=SAMPLE_COLUMN, dtype=object))

    return (
        pairs.groupby([SAMPLE_COLUMN, FUSION_NAME_COLUMN])
        .size()
        .unstack(fill_value=0)
    )


def build_summary_matrix(
    pairs: pd.DataFrame,
    universe: frozenset[str] | set[str],
    expected_fusion_names: list[str] | tuple[str, ...],
    logger=None
) -> pd.DataFrame:
    """
    Build the specimen x fusion count matrix for one subtype.

    Args:
        pairs: Filtered (Sample, FusionName) pairs
        universe: Specimen identifiers that must each get one row
        expected_fusion_names: Fusion names that must each get a column
        logger: Logger instance

    Returns:
        DataFrame with Kids_First_Biospecimen_ID and one int column per fusion

    Raises:
        ValueError: If a pair's specimen is not in the universe
    """
    check_specimens_in_universe(pairs, universe)

    counts = count_pairs(pairs)

    # Right join onto the universe; specimens with no calls become zero rows
    counts = counts.reindex(sorted(universe), fill_value=0)

    missing = zero_filled_fusions(pairs, expected_fusion_names)
    if missing and logger:
        logger.warning(
            f"No calls for {len(missing)} expected fusion(s), "
            f"adding zero columns: {', '.join(missing)}"
        )

    columns = sorted(set(counts.columns) | set(expected_fusion_names))
    counts = counts.reindex(columns=columns, fill_value=0).astype(np.int64)
    counts.columns.name = None

    counts.index.name = BIOSPECIMEN_ID_COLUMN
    matrix = counts.reset_index()

    if logger:
        logger.info(
            f"Summary matrix: {len(matrix):,} specimens x {len(columns)} fusions"
        )
        if len(matrix) and not counts.to_numpy().any():
            logger.warning(
                "Every cell is zero; check that the fusion table and caller "
                "outputs come from the same run"
            )

    return matrix
