"""
Fusion Summary - per-specimen counts of subtype-defining gene fusions

This package contains the analysis scripts for the fusion summary workflow:
- fusion_filter: Select fusions of interest from the curated fusion table
- specimen_universe: Collect the specimens assayed by the fusion callers
- summary_matrix: Pivot and reconcile fusion calls into count matrices
- fusion_summary: Run the summaries for each tumor subtype
- utils: Shared utility functions
"""

__version__ = "1.0.0"
