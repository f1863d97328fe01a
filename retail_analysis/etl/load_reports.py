from pathlib import Path
from typing import Dict, List

import pandas as pd

from retail_analysis.analytics.catalog import get_query
from retail_analysis.logger import setup_logger
from retail_analysis.utils.report_paths import build_report_filename, build_report_path

logger = setup_logger("etl.load_reports")


def _format_time_of_day(value) -> str | None:
    if pd.isna(value):
        return None
    seconds = int(value.total_seconds())
    hours, remainder = divmod(seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def prepare_report_for_csv(df: pd.DataFrame) -> pd.DataFrame:
    """
    Render date and time-of-day columns the way the source file spells them.
    """
    df = df.copy()
    for column in df.columns:
        if pd.api.types.is_datetime64_any_dtype(df[column]):
            df[column] = df[column].dt.strftime("%Y-%m-%d")
        elif pd.api.types.is_timedelta64_dtype(df[column]):
            df[column] = df[column].map(_format_time_of_day)
    return df


def write_reports(results: Dict[str, pd.DataFrame], output_folder) -> List[Path]:
    """
    Write each report to <output_folder>/<NN>_<name>.csv.
    Returns the written paths in catalog order.
    """
    if not output_folder:
        raise ValueError("Output folder must not be empty")

    folder = Path(output_folder)
    logger.info(f"Writing {len(results)} reports to {folder}")

    try:
        folder.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create output folder {folder}: {e}")
        raise

    queries = sorted((get_query(name) for name in results), key=lambda query: query.position)
    written = []
    for query in queries:
        path = build_report_path(folder, build_report_filename(query.position, query.name))
        report = prepare_report_for_csv(results[query.name])
        try:
            report.to_csv(path, index=False)
        except OSError as e:
            logger.error(f"Failed to write report {path}: {e}")
            raise
        logger.info(f"Report written: {path} ({len(report)} rows)")
        written.append(path)

    logger.info(f"{len(written)} reports successfully written to {folder}")
    return written
