"""
Time-based and customer-value reports: month-over-month growth, monthly
category leaders and RFM segmentation.
"""

import pandas as pd

from .arguments import parse_date, parse_positive_int
from .windows import competition_rank, month_label, ntile

RFM_BUCKETS = 4


def month_over_month_growth(sales: pd.DataFrame) -> pd.DataFrame:
    """
    Monthly sales with growth against the previous month in the data.

    The first month has a previous value of 0. Growth is null whenever the
    previous month's sales are 0.
    """
    columns = ["sales_month", "current_month_sales", "previous_month_sales", "month_over_month_growth"]
    if sales.empty:
        return pd.DataFrame(columns=columns)

    monthly = (
        sales.groupby(sales["sale_date"].dt.to_period("M"))["total_sale"]
        .sum()
        .sort_index()
    )
    previous = monthly.shift(1, fill_value=0.0)
    growth = (monthly - previous) / previous.where(previous != 0)

    return pd.DataFrame({
        "sales_month": monthly.index.strftime("%Y-%m"),
        "current_month_sales": monthly.to_numpy(dtype="float64"),
        "previous_month_sales": previous.to_numpy(dtype="float64"),
        "month_over_month_growth": growth.to_numpy(dtype="float64"),
    })


def top_categories_per_month(sales: pd.DataFrame, top_n=3) -> pd.DataFrame:
    """Best-selling categories per month, ranked with ties sharing a rank."""
    top_n = parse_positive_int(top_n, "top_n")

    monthly = (
        sales.assign(sales_month=month_label(sales["sale_date"]))
        .groupby(["sales_month", "category"], as_index=False)
        .agg(total_sales=("total_sale", "sum"))
    )
    monthly["sales_rank"] = competition_rank(monthly["total_sales"], groups=monthly["sales_month"])

    ranked = monthly.loc[monthly["sales_rank"] <= top_n]
    return ranked.sort_values(["sales_month", "sales_rank", "category"], kind="mergesort").reset_index(drop=True)


def rfm_segmentation(sales: pd.DataFrame, reference_date="2023-01-01") -> pd.DataFrame:
    """
    Recency / frequency / monetary scoring per customer.

    recency is days from the customer's last purchase to `reference_date`,
    frequency the number of distinct transactions and monetary the summed
    sales. Each metric is split into quartiles (NTILE(4)); 4 is always the
    best score, so recency is bucketed in descending order.
    """
    reference = parse_date(reference_date, "reference_date")
    columns = [
        "customer_id",
        "recency",
        "frequency",
        "monetary",
        "recency_score",
        "frequency_score",
        "monetary_score",
    ]

    base = (
        sales.dropna(subset=["customer_id"])
        .groupby("customer_id", as_index=False, sort=False)
        .agg(
            last_purchase=("sale_date", "max"),
            frequency=("transaction_id", "nunique"),
            monetary=("total_sale", "sum"),
        )
    )
    if base.empty:
        return pd.DataFrame(columns=columns)

    base["recency"] = (reference - base["last_purchase"]).dt.days.astype("int64")

    base["recency_score"] = ntile(base["recency"], RFM_BUCKETS, ascending=False)
    base["frequency_score"] = ntile(base["frequency"], RFM_BUCKETS, ascending=True)
    base["monetary_score"] = ntile(base["monetary"], RFM_BUCKETS, ascending=True)

    return (
        base[columns]
        .sort_values(
            ["frequency_score", "monetary_score", "recency_score"],
            ascending=False,
            kind="mergesort",
        )
        .reset_index(drop=True)
    )
