"""
Report path helpers.

Report file names carry the query's catalog position so the files sort in
catalog order (01_..., 02_..., ...).
"""

from pathlib import Path


def build_report_filename(position: int, name: str) -> str:
    """
    Build the CSV file name for one report.

    Example:
        build_report_filename(3, "category_sales_summary")
        -> "03_category_sales_summary.csv"
    """

    if position < 1:
        raise ValueError(f"Report position must be positive, got {position}")
    if not name:
        raise ValueError("Report name must not be empty")
    return f"{position:02d}_{name}.csv"


def build_report_path(output_folder: str | Path, filename: str) -> Path:
    """
    Build the full path of a report inside the output folder.

    Example:
        build_report_path("reports/", "03_category_sales_summary.csv")
        -> Path("reports/03_category_sales_summary.csv")
    """

    return Path(output_folder) / filename
