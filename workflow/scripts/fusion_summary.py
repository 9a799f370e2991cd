#!/usr/bin/env python3
"""
Summarize fusions of interest per specimen for molecular subtyping.

This script turns the putative oncogenic fusion table into one count
matrix per tumor subtype, covering every specimen the fusion callers
assayed:

1. UNIVERSE: Union the tumor_id values of the raw STAR-Fusion and Arriba
   outputs
2. FILTER: Keep curated calls matching the subtype's fusion names or genes
3. MATRIX: Pivot to specimen x fusion counts, zero-filling specimens
   without calls and expected fusions without hits

OUTPUT FILES:
    1. fusion_summary_ependymoma_foi.tsv - skipped when running for subtyping
    2. fusion_summary_embryonal_foi.tsv

USAGE:
    # Via Snakemake (automatic parameter passing)
    script: "scripts/fusion_summary.py"

    # Standalone
    python fusion_summary.py \\
        --putative-oncogenic data/pbta-fusion-putative-oncogenic.tsv \\
        --starfusion data/pbta-fusion-starfusion.tsv.gz \\
        --arriba data/pbta-fusion-arriba.tsv.gz \\
        --output-dir results
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

# Handle both Snakemake and standalone execution
try:
    from utils import setup_logging, resolve_run_for_subtyping, write_tsv
    from fusion_filter import FusionSelector, load_fusion_table, filter_fusions
    from specimen_universe import load_caller_table, specimen_universe
    from summary_matrix import build_summary_matrix
except ImportError:
    from workflow.scripts.utils import setup_logging, resolve_run_for_subtyping, write_tsv
    from workflow.scripts.fusion_filter import (
        FusionSelector,
        load_fusion_table,
        filter_fusions,
    )
    from workflow.scripts.specimen_universe import load_caller_table, specimen_universe
    from workflow.scripts.summary_matrix import build_summary_matrix


# =============================================================================
# SUBTYPES
# =============================================================================

@dataclass(frozen=True)
class SubtypeSummary:
    """Fusions of interest for one tumor subtype."""
    name: str
    selector: FusionSelector
    expected_fusions: tuple[str, ...]   # Always present as columns
    output_name: str


# Every name listed here is also an output column, zero-filled when unobserved
EPENDYMOMA_FUSIONS = (
    'C11orf95--MAML2',
    'C11orf95--RELA',
    'C11orf95--YAP1',
    'LTBP3--RELA',
    'PTEN--TAS2R1',
    'YAP1--FAM118B',
    'YAP1--MAMLD1',
    'YAP1--MAMLD2',
)
EPENDYMOMA_GENES = ('RELA',)

# Every name listed here is also an output column, zero-filled when unobserved
EMBRYONAL_FUSIONS = (
    'CIC--NUTM1',
    'MN1--BEND2',
    'MN1--CXXC5',
)
EMBRYONAL_GENES = ('FOXR2', 'MN1', 'TTYH1')

EPENDYMOMA = SubtypeSummary(
    name='ependymoma',
    selector=FusionSelector.create(fusion_names=EPENDYMOMA_FUSIONS, genes=EPENDYMOMA_GENES),
    expected_fusions=EPENDYMOMA_FUSIONS,
    output_name='fusion_summary_ependymoma_foi.tsv',
)
EMBRYONAL = SubtypeSummary(
    name='embryonal',
    selector=FusionSelector.create(fusion_names=EMBRYONAL_FUSIONS, genes=EMBRYONAL_GENES),
    expected_fusions=EMBRYONAL_FUSIONS,
    output_name='fusion_summary_embryonal_foi.tsv',
)

SUBTYPES = (EPENDYMOMA, EMBRYONAL)


def enabled_subtypes(run_for_subtyping: bool) -> tuple[SubtypeSummary, ...]:
    """Subtypes to summarize; the ependymoma summary is skipped when subtyping."""
    if run_for_subtyping:
        return tuple(s for s in SUBTYPES if s is not EPENDYMOMA)
    return SUBTYPES


def summarize_subtype(
    fusions: pd.DataFrame,
    universe: frozenset[str],
    subtype: SubtypeSummary,
    logger=None
) -> pd.DataFrame:
    """Filter, pivot and reconcile the fusions of one subtype."""
    if logger:
        logger.info(f"Summarizing {subtype.name} fusions")

    pairs = filter_fusions(fusions, subtype.selector, logger=logger)
    return build_summary_matrix(pairs, universe, subtype.expected_fusions, logger=logger)


# =============================================================================
# MAIN
# =============================================================================

def main_snakemake(snakemake) -> None:
    """Entry point when called from Snakemake."""
    # Input files
    putative_oncogenic_file = snakemake.input.putative_oncogenic
    starfusion_file = snakemake.input.starfusion
    arriba_file = snakemake.input.arriba

    # Parameters
    output_dir = snakemake.params.output_dir
    run_for_subtyping = resolve_run_for_subtyping(snakemake.params.get('run_for_subtyping'))

    # Logging
    log_file = snakemake.log[0] if snakemake.log else None
    logger = setup_logging(log_file, name='fusion_summary')

    run_summary(
        putative_oncogenic_file=putative_oncogenic_file,
        starfusion_file=starfusion_file,
        arriba_file=arriba_file,
        output_dir=output_dir,
        run_for_subtyping=run_for_subtyping,
        logger=logger
    )


def main_cli(argv=None) -> None:
    """Entry point for command-line usage."""
    parser = argparse.ArgumentParser(
        description='Summarize fusions of interest per specimen',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    # Input files
    parser.add_argument(
        '-f', '--putative-oncogenic',
        required=True,
        help='Putative oncogenic fusion TSV (Sample, FusionName, Gene1A..Gene2B)'
    )
    parser.add_argument(
        '-s', '--starfusion',
        required=True,
        help='Raw STAR-Fusion TSV (tumor_id column)'
    )
    parser.add_argument(
        '-a', '--arriba',
        required=True,
        help='Raw Arriba TSV (tumor_id column)'
    )

    # Output
    parser.add_argument(
        '-o', '--output-dir',
        required=True,
        help='Directory for the summary TSV files'
    )

    # Options
    parser.add_argument(
        '--run-for-subtyping',
        action='store_true',
        default=resolve_run_for_subtyping(),
        help='Skip the ependymoma summary (default: $RUN_FOR_SUBTYPING)'
    )

    # Logging
    parser.add_argument(
        '--log',
        help='Log file path'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    args = parser.parse_args(argv)

    # Setup logging
    level = 'DEBUG' if args.verbose else 'INFO'
    logger = setup_logging(args.log, level=level, name='fusion_summary')

    run_summary(
        putative_oncogenic_file=args.putative_oncogenic,
        starfusion_file=args.starfusion,
        arriba_file=args.arriba,
        output_dir=args.output_dir,
        run_for_subtyping=args.run_for_subtyping,
        logger=logger
    )


def run_summary(
    putative_oncogenic_file: str,
    starfusion_file: str,
    arriba_file: str,
    output_dir: str,
    run_for_subtyping: bool = False,
    logger=None
) -> dict[str, Path]:
    """
    Core summary logic.

    All matrices are built before any file is written, so a failure
    leaves no partial output.

    Returns:
        Dict mapping subtype name to the written file
    """
    # Load inputs
    if logger:
        logger.info(f"Loading putative oncogenic fusions from: {putative_oncogenic_file}")
    fusions = load_fusion_table(putative_oncogenic_file)

    if logger:
        logger.info(f"Loading STAR-Fusion calls from: {starfusion_file}")
    starfusion = load_caller_table(starfusion_file)

    if logger:
        logger.info(f"Loading Arriba calls from: {arriba_file}")
    arriba = load_caller_table(arriba_file)

    universe = specimen_universe(starfusion, arriba, logger=logger)

    subtypes = enabled_subtypes(run_for_subtyping)
    if logger and run_for_subtyping:
        logger.info("Running for subtyping: skipping ependymoma summary")

    matrices = {
        subtype.name: summarize_subtype(fusions, universe, subtype, logger=logger)
        for subtype in subtypes
    }

    # Write outputs
    written = {}
    for subtype in subtypes:
        output_file = Path(output_dir) / subtype.output_name
        if logger:
            logger.info(f"Writing {subtype.name} summary to: {output_file}")
        write_tsv(output_file, matrices[subtype.name])
        written[subtype.name] = output_file

    if logger:
        logger.info("Done!")

    return written


# Entry point
if __name__ == '__main__':
    # Check if running under Snakemake
    try:
        snakemake
    except NameError:
        main_cli()
    else:
        main_snakemake(snakemake)
