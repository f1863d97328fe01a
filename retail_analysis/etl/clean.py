import pandas as pd

from retail_analysis.logger import setup_logger
from retail_analysis.validations.input_schemas import REQUIRED_COLUMNS

logger = setup_logger("etl.clean")


def clean_sales(sales_df: pd.DataFrame) -> pd.DataFrame:
    """
    Drop every row with a null in a required field.

    Retained rows keep their order and index labels; nothing else changes.
    Cleaning an already-clean table returns an equal table.
    """
    logger.info(f"Starting cleaning on {len(sales_df)} rows")

    complete = sales_df[REQUIRED_COLUMNS].notna().all(axis=1)
    clean_df = sales_df.loc[complete].copy()

    dropped = len(sales_df) - len(clean_df)
    if dropped > 0:
        null_counts = sales_df.loc[~complete, REQUIRED_COLUMNS].isna().sum()
        logger.warning(f"Removed {dropped} rows with null required fields")
        logger.warning(f"Null summary:\n{null_counts[null_counts > 0]}")

    logger.info(f"Cleaning completed: {len(clean_df)} rows retained")
    return clean_df
