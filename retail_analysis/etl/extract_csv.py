from pathlib import Path
from typing import Mapping, Optional

import numpy as np
import pandas as pd

from retail_analysis.errors import LoadError
from retail_analysis.logger import setup_logger
from retail_analysis.validations.input_schemas import SALES_COLUMNS

logger = setup_logger("etl.extract_csv")

INTEGER_COLUMNS = ("transaction_id", "customer_id", "age", "quantity")
FLOAT_COLUMNS = ("price_per_unit", "cogs", "total_sale")
TEXT_COLUMNS = ("gender", "category")

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def normalize_columns(df: pd.DataFrame, column_aliases: Optional[Mapping[str, str]] = None) -> pd.DataFrame:
    """
    Normalize headers to lowercase with underscores, then apply aliases.
    """
    df = df.copy()
    df.columns = df.columns.str.strip().str.lower().str.replace(" ", "_")
    if column_aliases:
        df = df.rename(columns=dict(column_aliases))
    return df


def _blank_to_null(raw: pd.Series) -> pd.Series:
    stripped = raw.map(lambda value: value.strip() if isinstance(value, str) else value)
    return stripped.replace("", np.nan).astype(object)


def _raise_first_failure(raw: pd.Series, bad: pd.Series, kind: str) -> None:
    if not bad.any():
        return
    row_index = bad[bad].index[0]
    value = raw.loc[row_index]
    logger.error(f"Cannot parse {raw.name}={value!r} as {kind} at row {row_index}")
    raise LoadError(
        f"cannot parse {raw.name}={value!r} as {kind}",
        row_index=int(row_index),
        column=raw.name,
        value=value,
    )


def _coerce_integer(raw: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(raw, errors="coerce")
    bad = raw.notna() & (numeric.isna() | (numeric % 1 != 0))
    _raise_first_failure(raw, bad, "integer")
    return numeric.astype("Int64")


def _coerce_float(raw: pd.Series) -> pd.Series:
    numeric = pd.to_numeric(raw, errors="coerce")
    _raise_first_failure(raw, raw.notna() & numeric.isna(), "number")
    return numeric.astype("float64")


def _coerce_date(raw: pd.Series, date_format: str) -> pd.Series:
    parsed = pd.to_datetime(raw, format=date_format, errors="coerce")
    _raise_first_failure(raw, raw.notna() & parsed.isna(), "date")
    return parsed.dt.normalize().astype("datetime64[ns]")


def _coerce_time(raw: pd.Series) -> pd.Series:
    parsed = pd.to_timedelta(raw, errors="coerce")
    bad = raw.notna() & (parsed.isna() | (parsed < pd.Timedelta(0)) | (parsed >= pd.Timedelta(days=1)))
    _raise_first_failure(raw, bad, "time of day")
    return parsed.astype("timedelta64[ns]")


def coerce_sales(raw_df: pd.DataFrame, date_format: str = DEFAULT_DATE_FORMAT) -> pd.DataFrame:
    """
    Coerce raw (string) sales columns into the typed sales table.

    Blank cells become nulls. A non-blank cell that cannot be coerced raises
    LoadError naming its row index.
    """
    missing = [column for column in SALES_COLUMNS if column not in raw_df.columns]
    if missing:
        raise LoadError(f"Missing required columns: {missing}")

    extra = [column for column in raw_df.columns if column not in SALES_COLUMNS]
    if extra:
        logger.warning(f"Dropping unexpected columns: {extra}")

    typed = {}
    for column in SALES_COLUMNS:
        raw = _blank_to_null(raw_df[column])
        if column in INTEGER_COLUMNS:
            typed[column] = _coerce_integer(raw)
        elif column in FLOAT_COLUMNS:
            typed[column] = _coerce_float(raw)
        elif column == "sale_date":
            typed[column] = _coerce_date(raw, date_format)
        elif column == "sale_time":
            typed[column] = _coerce_time(raw)
        else:
            typed[column] = raw

    return pd.DataFrame(typed, index=raw_df.index)[SALES_COLUMNS]


def load_sales_csv(
    path,
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
    column_aliases: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """
    Load the retail sales CSV into a typed DataFrame, preserving source order.

    The index is the 0-based data row position in the file, which is the row
    index reported by LoadError.
    """
    path = Path(path)
    logger.info(f"Extracting sales from {path}")

    if not path.exists():
        logger.error(f"Source file not found: {path}")
        raise FileNotFoundError(f"Sales source file not found: {path}")

    try:
        raw_df = pd.read_csv(path, dtype=str, skipinitialspace=True)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        logger.error(f"Could not parse {path}: {e}")
        raise LoadError(f"Could not read sales file {path}: {e}") from e

    logger.info(f"Successfully extracted {len(raw_df)} rows from sales")

    raw_df = normalize_columns(raw_df, column_aliases)
    logger.info(f"Normalized sales columns: {list(raw_df.columns)}")

    sales_df = coerce_sales(raw_df, date_format=date_format)
    logger.info(f"Coerced {len(sales_df)} rows to the sales schema")

    return sales_df
