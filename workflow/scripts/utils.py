"""
Shared utility functions for the fusion summary workflow.

This module provides common functionality used across the workflow:
- Logging setup
- Tabular I/O (TSV, optionally gzipped)
- Column validation
"""

import logging
import os
import sys
from pathlib import Path

import pandas as pd


# =============================================================================
# CONSTANTS
# =============================================================================

TRUE_VALUES = ('1', 'true', 'yes')
RUN_FOR_SUBTYPING_ENV = 'RUN_FOR_SUBTYPING'


# =============================================================================
# LOGGING
# =============================================================================

def setup_logging(
    log_file: str | Path | None = None,
    level: str = "INFO",
    name: str = "fusion_summary"
) -> logging.Logger:
    """
    Configure logging for workflow scripts.

    Args:
        log_file: Path to log file. If None, logs to stderr only.
        level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR')
        name: Logger name

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Clear any existing handlers
    logger.handlers.clear()

    # Console handler (stderr)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_format = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


def parse_flag(value) -> bool:
    """Interpret a config/env value ('1', 'true', 'yes', True) as a boolean."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUE_VALUES


def resolve_run_for_subtyping(config_value=None) -> bool:
    """
    Decide whether the run is for subtyping.

    An explicit config value wins; None falls back to $RUN_FOR_SUBTYPING.
    """
    if config_value is None:
        return parse_flag(os.environ.get(RUN_FOR_SUBTYPING_ENV))
    return parse_flag(config_value)


def clean_ids(ids: pd.Series) -> pd.Series:
    """Normalize specimen identifiers: text with surrounding whitespace removed."""
    return ids.astype(str).str.strip()


# =============================================================================
# TABLE I/O
# =============================================================================

def validate_required_columns(
    columns,
    required_columns: list[str] | tuple[str, ...],
    source: str = "table"
) -> None:
    """
    Check that every required column is present.

    Raises:
        ValueError: If any required column is missing
    """
    missing = set(required_columns) - set(columns)
    if missing:
        raise ValueError(
            f"Missing required columns in {source}: {sorted(missing)}"
        )


def read_tsv(
    filepath: str | Path,
    required_columns: list[str] | tuple[str, ...]
) -> pd.DataFrame:
    """
    Read the required columns of a tab-separated file into a DataFrame.

    All values are read as strings; empty fields become ''. Compression is
    inferred from the file extension.

    Args:
        filepath: Path to TSV file (plain or gzipped)
        required_columns: Columns that must be present

    Returns:
        DataFrame holding only the required columns, in the given order

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If a required column is missing
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Table not found: {filepath}")

    wanted = set(required_columns)
    df = pd.read_csv(
        filepath,
        sep='\t',
        dtype=str,
        keep_default_na=False,
        usecols=lambda col: col in wanted,
    )
    validate_required_columns(df.columns, required_columns, source=str(filepath))

    return df[list(required_columns)]


def write_tsv(filepath: str | Path, df: pd.DataFrame) -> None:
    """
    Write a DataFrame to a tab-separated file without the index.

    Args:
        filepath: Output file path
        df: Table to write
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(filepath, sep='\t', index=False, lineterminator='\n')
