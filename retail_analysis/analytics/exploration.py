"""
Exploratory reports over the cleaned sales table.

Filters, per-category aggregates and simple customer rankings. Every
function takes the cleaned sales DataFrame and returns a new DataFrame.
"""

from decimal import ROUND_HALF_UP, Decimal

import numpy as np
import pandas as pd

from .arguments import parse_date, parse_label, parse_month, parse_number, parse_positive_int
from .windows import competition_rank

SHIFTS = ["Morning", "Afternoon", "Evening"]


def sales_on_date(sales: pd.DataFrame, sale_date="2022-11-05") -> pd.DataFrame:
    """All transactions made on one calendar date."""
    day = parse_date(sale_date, "sale_date")
    return sales.loc[sales["sale_date"] == day].reset_index(drop=True)


def category_month_bulk_orders(
    sales: pd.DataFrame,
    category="Clothing",
    month="2022-11",
    min_quantity=4,
) -> pd.DataFrame:
    """Transactions in one category and year-month with at least `min_quantity` units."""
    category = parse_label(category, "category")
    period = parse_month(month, "month")
    min_quantity = parse_number(min_quantity, "min_quantity")

    in_month = (sales["sale_date"].dt.year == period.year) & (sales["sale_date"].dt.month == period.month)
    mask = (sales["category"] == category) & in_month & (sales["quantity"] >= min_quantity)
    return sales.loc[mask].reset_index(drop=True)


def category_sales_summary(sales: pd.DataFrame) -> pd.DataFrame:
    return (
        sales.groupby("category", as_index=False)
        .agg(net_sale=("total_sale", "sum"), total_orders=("transaction_id", "size"))
    )


def average_customer_age(sales: pd.DataFrame, category="Beauty") -> pd.DataFrame:
    """
    Average customer age in one category; null ages are ignored.

    The mean is exact and rounded half away from zero to 2 decimals.
    """
    category = parse_label(category, "category")
    ages = sales.loc[sales["category"] == category, "age"].dropna()
    avg_age = None
    if len(ages):
        mean = Decimal(int(ages.sum())) / Decimal(len(ages))
        avg_age = float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    return pd.DataFrame({"avg_age": [avg_age]})


def high_value_sales(sales: pd.DataFrame, threshold=1000) -> pd.DataFrame:
    threshold = parse_number(threshold, "threshold")
    return sales.loc[sales["total_sale"] > threshold].reset_index(drop=True)


def category_gender_transactions(sales: pd.DataFrame) -> pd.DataFrame:
    return (
        sales.groupby(["category", "gender"], as_index=False)
        .agg(total_transactions=("transaction_id", "count"))
        .sort_values(["category", "gender"], kind="mergesort")
        .reset_index(drop=True)
    )


def best_month_per_year(sales: pd.DataFrame) -> pd.DataFrame:
    """
    Month with the highest average sale in each year.

    Months tied on the average share rank 1 and are all returned.
    """
    monthly = (
        sales.assign(year=sales["sale_date"].dt.year, month=sales["sale_date"].dt.month)
        .groupby(["year", "month"], as_index=False)
        .agg(avg_sale=("total_sale", "mean"))
    )
    monthly["rank"] = competition_rank(monthly["avg_sale"], groups=monthly["year"])

    best = monthly.loc[monthly["rank"] == 1, ["year", "month", "avg_sale"]]
    return best.sort_values(["year", "month"], kind="mergesort").reset_index(drop=True)


def top_customers(sales: pd.DataFrame, limit=5) -> pd.DataFrame:
    """
    Customers with the highest summed sales.

    Ties keep the order in which customers first appear in the table.
    """
    limit = parse_positive_int(limit, "limit")
    totals = (
        sales.dropna(subset=["customer_id"])
        .groupby("customer_id", as_index=False, sort=False)
        .agg(total_sales=("total_sale", "sum"))
    )
    return (
        totals.sort_values("total_sales", ascending=False, kind="mergesort")
        .head(limit)
        .reset_index(drop=True)
    )


def unique_customers_per_category(sales: pd.DataFrame) -> pd.DataFrame:
    return (
        sales.groupby("category", as_index=False)
        .agg(unique_customers=("customer_id", "nunique"))
    )


def classify_shift(sale_time: pd.Series) -> pd.Series:
    """Morning before 12:00, Afternoon for hours 12-16, Evening otherwise."""
    hour = sale_time.dt.seconds // 3600
    shift = np.select([hour < 12, (hour >= 12) & (hour <= 16)], SHIFTS[:2], default=SHIFTS[2])
    return pd.Series(shift, index=sale_time.index, name="shift")


def orders_by_shift(sales: pd.DataFrame) -> pd.DataFrame:
    counts = classify_shift(sales["sale_time"]).value_counts()
    present = [shift for shift in SHIFTS if shift in counts.index]
    return pd.DataFrame({
        "shift": present,
        "total_orders": [int(counts[shift]) for shift in present],
    })
