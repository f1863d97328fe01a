from pandera.errors import SchemaError, SchemaErrors

from retail_analysis.logger import setup_logger
from .output_schemas import report_schemas, sales_clean_schema

logger = setup_logger("validation.output")


def validate_sales_clean(df):
    """
    Validate the cleaned sales table before any query reads it.
    """
    logger.info(f"Starting output validation on {len(df)} records")

    try:
        validated_df = sales_clean_schema.validate(df, lazy=True)
        logger.info("Output validation passed")
        return validated_df

    except SchemaErrors as err:
        failed = err.failure_cases
        logger.error(
            f"Output validation failed with {len(failed)} issues"
        )
        logger.error(
            f"Failure summary:\n{failed.groupby(['column', 'check']).size()}"
        )
        raise ValueError(
            f"Cleaned sales table violates its schema ({len(failed)} issues)"
        ) from err


def validate_report(name, df):
    """
    Check that a report carries exactly the published columns, in order.
    """
    try:
        schema = report_schemas[name]
    except KeyError:
        raise ValueError(f"No report schema registered for '{name}'") from None

    try:
        return schema.validate(df)
    except SchemaError as err:
        logger.error(f"Report '{name}' does not match its column contract: {err}")
        raise ValueError(
            f"Report '{name}' columns {list(df.columns)} do not match {list(schema.columns)}"
        ) from err
