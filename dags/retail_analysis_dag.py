from datetime import datetime, timedelta
from typing import Any

from airflow.decorators import dag, task
from airflow.exceptions import AirflowException

from retail_analysis.config import load_config
from retail_analysis.logger import setup_logger

config = load_config()

SOURCE_CONFIG = config["source"]
OUTPUT_FOLDER = config["output"]["folder"]
ANALYTICS_CONFIG = config["analytics"]

# Default arguments for DAG
DEFAULT_ARGS = {
    "owner": "data-analytics",
    "email_on_failure": False,
    "email_on_retry": False,
    "retries": 0,  # Load errors are deterministic; retrying cannot fix a malformed file
    "execution_timeout": timedelta(hours=1),
}


@dag(
    dag_id="retail_sales_analysis",
    description="""
    Retail Sales Analysis - Loads the retail sales CSV, removes incomplete
    transactions and produces the catalog of analytic reports.

    Data Flow:
    1. Load: Read and type the sales CSV (fatal on malformed rows)
    2. Clean: Drop rows with null required fields, validate with Pandera
    3. Analyse: Run the 20 analytic queries on the cleaned table
    4. Write: Save each report as CSV in the output folder
    """,
    start_date=datetime(2026, 1, 1),
    schedule=None,
    catchup=False,
    max_active_runs=1,
    default_args=DEFAULT_ARGS,
    tags=["retail", "analytics", "reporting"],
)
def retail_sales_analysis():
    """
    Main Retail Sales Analysis DAG

    Each stage wraps a library function from retail_analysis; failures are
    surfaced as AirflowException with the underlying message.
    """
    from retail_analysis.analytics.catalog import run_catalog
    from retail_analysis.errors import InvalidArgumentError, LoadError
    from retail_analysis.etl.clean import clean_sales
    from retail_analysis.etl.extract_csv import load_sales_csv
    from retail_analysis.etl.load_reports import write_reports
    from retail_analysis.validations.validate_inputs import validate_sales
    from retail_analysis.validations.validate_outputs import validate_sales_clean

    logger = setup_logger("dags.retail_sales_analysis")

    @task(
        task_id="load_sales_data",
        doc_md="""
        Loads the sales CSV into a typed DataFrame.

        **Column Normalization:**
        - Converts all column names to lowercase
        - Replaces spaces with underscores
        - Applies configured header aliases

        **Failure:**
        - Any malformed value aborts the run with its row index
        """,
    )
    def load():
        """Load and type the sales source file"""
        try:
            sales_df = load_sales_csv(
                SOURCE_CONFIG["path"],
                date_format=SOURCE_CONFIG["date_format"],
                column_aliases=SOURCE_CONFIG["column_aliases"],
            )
            sales_df = validate_sales(sales_df)
            logger.info(f"✓ Loaded {len(sales_df)} sales records")
            return sales_df
        except (LoadError, FileNotFoundError) as e:
            logger.error(f"✗ Load failed: {str(e)}")
            raise AirflowException(f"Sales load failed: {str(e)}")

    @task(
        task_id="validate_and_clean",
        doc_md="""
        Removes transactions with a null in any required field
        (transaction_id, sale_date, sale_time, gender, category,
        quantity, cogs, total_sale) and validates the result.
        """,
    )
    def clean(sales_df):
        """Drop incomplete rows and validate the cleaned table"""
        try:
            clean_df = validate_sales_clean(clean_sales(sales_df))
            if clean_df.empty:
                raise AirflowException("Cleaning resulted in empty dataset")
            logger.info(f"✓ Cleaning passed: {len(clean_df)} of {len(sales_df)} rows retained")
            return clean_df
        except ValueError as e:
            logger.error(f"✗ Cleaning failed: {str(e)}")
            raise AirflowException(f"Cleaned data failed validation: {str(e)}")

    @task(
        task_id="run_analytics",
        doc_md="""
        Runs the analytic query catalog on the cleaned table.

        A query with invalid parameters is logged and skipped; the
        remaining reports are still produced.
        """,
    )
    def analyse(clean_df) -> Any:
        """Run every analytic query"""
        try:
            analytics = run_catalog(
                clean_df,
                ANALYTICS_CONFIG["queries"],
                max_workers=ANALYTICS_CONFIG["max_workers"],
            )
        except InvalidArgumentError as e:
            logger.error(f"✗ Analytics failed: {str(e)}")
            raise AirflowException(f"Analytics configuration invalid: {str(e)}")
        for name, error in analytics.failures.items():
            logger.warning(f"  ⚠ {name} skipped: {error}")
        if not analytics.results:
            raise AirflowException("Every analytic query failed")
        return analytics.results

    @task(
        task_id="write_reports",
        doc_md=f"""
        Writes each report as CSV.

        **Output Location:**
        - {OUTPUT_FOLDER}NN_<report_name>.csv
        """,
    )
    def write(results):
        """Write report CSVs"""
        try:
            paths = write_reports(results, OUTPUT_FOLDER)
            success_msg = f"✓ Pipeline SUCCESS: {len(paths)} reports written"
            logger.info(success_msg)
            return success_msg
        except (ValueError, OSError) as e:
            logger.error(f"✗ Report writing failed: {str(e)}")
            raise AirflowException(f"Report writing failed: {str(e)}")

    # Define task dependencies
    loaded = load()
    cleaned = clean(loaded)
    results = analyse(cleaned)
    write(results)


# Instantiate DAG
retail_sales_analysis()
