from pandera.errors import SchemaErrors

from retail_analysis.errors import LoadError
from retail_analysis.logger import setup_logger
from .input_schemas import raw_sales_schema

logger = setup_logger("validation.input")


def validate_sales(df):
    """
    Validate the loaded sales table against the raw schema.

    Unlike cleaning, any failure here is fatal: the run aborts with the
    first offending row.
    """
    logger.info(f"Starting sales validation on {len(df)} rows")
    try:
        validated_df = raw_sales_schema.validate(df, lazy=True)
        logger.info("Sales validation passed")
        return validated_df

    except SchemaErrors as err:
        failed = err.failure_cases
        logger.error(f"Sales validation failed: {len(failed)} issues")
        logger.error(f"Errors summary:\n{failed.groupby(['column', 'check']).size()}")

        row_failures = failed.dropna(subset=["index"])
        if len(row_failures) > 0:
            first = row_failures.sort_values("index", kind="mergesort").iloc[0]
            raise LoadError(
                f"{first['column']} failed check {first['check']} with value {first['failure_case']!r}",
                row_index=int(first["index"]),
                column=first["column"],
                value=first["failure_case"],
            ) from err

        # Column-level failures (missing column, wrong dtype) carry no row index
        first = failed.iloc[0]
        raise LoadError(f"{first['column']} failed check {first['check']}", column=first["column"]) from err
