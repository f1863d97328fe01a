"""
In-process run of the whole analysis: load, validate, clean, analyse, write.

The Airflow DAG runs the same stages as separate tasks.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from retail_analysis.analytics.catalog import AnalyticsRun, run_catalog
from retail_analysis.etl.clean import clean_sales
from retail_analysis.etl.extract_csv import load_sales_csv
from retail_analysis.etl.load_reports import write_reports
from retail_analysis.logger import set_log_level, setup_logger
from retail_analysis.validations.validate_inputs import validate_sales
from retail_analysis.validations.validate_outputs import validate_sales_clean

logger = setup_logger("pipeline")


@dataclass
class PipelineResult:
    loaded_rows: int
    clean_rows: int
    analytics: AnalyticsRun
    report_paths: List[Path]


def run_pipeline(config: Dict[str, Any], output_folder: Optional[str | Path] = None) -> PipelineResult:
    """
    Run every stage with the given configuration (see config.load_config).

    A LoadError aborts the run; a query with invalid arguments is reported
    in the result and its report is not written.
    """
    set_log_level(config.get("logging", {}).get("level", "INFO"))
    analytics_config = config.get("analytics", {})

    logger.info("Starting retail sales analysis")
    sales_df = load_sales_csv(
        config["source"]["path"],
        date_format=config["source"].get("date_format", "%Y-%m-%d"),
        column_aliases=config["source"].get("column_aliases"),
    )
    loaded_rows = len(sales_df)

    sales_df = validate_sales(sales_df)
    clean_df = validate_sales_clean(clean_sales(sales_df))

    analytics = run_catalog(
        clean_df,
        analytics_config.get("queries"),
        max_workers=analytics_config.get("max_workers", 1),
    )
    if analytics.failures:
        logger.warning(f"⚠ {len(analytics.failures)} queries failed: {sorted(analytics.failures)}")

    report_paths = write_reports(analytics.results, output_folder or config["output"]["folder"])

    logger.info(f"✓ Pipeline SUCCESS: {len(clean_df)} of {loaded_rows} rows analysed, {len(report_paths)} reports written")
    return PipelineResult(
        loaded_rows=loaded_rows,
        clean_rows=len(clean_df),
        analytics=analytics,
        report_paths=report_paths,
    )
