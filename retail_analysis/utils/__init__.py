"""
Shared utilities for the analysis pipeline.

Keep helpers here small and dependency-free so DAG parsing stays reliable.
"""

from .report_paths import build_report_filename, build_report_path

__all__ = ["build_report_filename", "build_report_path"]
