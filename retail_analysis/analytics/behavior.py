"""
Customer behaviour and demographic reports.
"""

import numpy as np
import pandas as pd

from .windows import month_label

AGE_GROUPS = ["Under 18", "18-24", "25-34", "35-44", "45-54", "55+"]
UNKNOWN_AGE_GROUP = "Unknown"


def sales_by_weekday(sales: pd.DataFrame) -> pd.DataFrame:
    return (
        sales.assign(day_of_week=sales["sale_date"].dt.day_name())
        .groupby("day_of_week", as_index=False, sort=False)
        .agg(
            total_sales=("total_sale", "sum"),
            average_sale=("total_sale", "mean"),
            number_of_transactions=("transaction_id", "count"),
        )
        .sort_values("total_sales", ascending=False, kind="mergesort")
        .reset_index(drop=True)
    )


def cohort_retention(sales: pd.DataFrame) -> pd.DataFrame:
    """
    Active customers per (cohort month, activity month).

    A customer's cohort is the month of their first purchase. Sales without
    a customer_id belong to no cohort.
    """
    customers = sales.dropna(subset=["customer_id"])
    activity = pd.DataFrame({
        "customer_id": customers["customer_id"],
        "activity_month": month_label(customers["sale_date"]),
    }).drop_duplicates()

    cohorts = activity.groupby("customer_id")["activity_month"].min().rename("cohort_month")
    activity = activity.join(cohorts, on="customer_id")

    return (
        activity.groupby(["cohort_month", "activity_month"], as_index=False)
        .agg(active_customers=("customer_id", "nunique"))
        .sort_values(["cohort_month", "activity_month"], kind="mergesort")
        .reset_index(drop=True)
    )


def price_point_analysis(sales: pd.DataFrame) -> pd.DataFrame:
    """Sales count and units sold per (category, unit price); a null price is its own price point."""
    return (
        sales.groupby(["category", "price_per_unit"], as_index=False, dropna=False)
        .agg(
            number_of_sales=("transaction_id", "count"),
            total_quantity_sold=("quantity", "sum"),
        )
        .sort_values(
            ["category", "number_of_sales", "price_per_unit"],
            ascending=[True, False, True],
            kind="mergesort",
            na_position="last",
        )
        .reset_index(drop=True)
    )


def classify_age_group(age: pd.Series) -> pd.Series:
    """
    Age band of each customer. Every integer age falls in a band, so
    'Unknown' is reached only for a null age.
    """
    age = age.astype("float64")
    conditions = [
        age < 18,
        (age >= 18) & (age <= 24),
        (age >= 25) & (age <= 34),
        (age >= 35) & (age <= 44),
        (age >= 45) & (age <= 54),
        age >= 55,
    ]
    groups = np.select(conditions, AGE_GROUPS, default=UNKNOWN_AGE_GROUP)
    return pd.Series(groups, index=age.index, name="age_group")


def sales_by_age_group(sales: pd.DataFrame) -> pd.DataFrame:
    return (
        sales.assign(age_group=classify_age_group(sales["age"]))
        .groupby("age_group", as_index=False)
        .agg(
            total_sales=("total_sale", "sum"),
            unique_customers=("customer_id", "nunique"),
            average_spend_per_transaction=("total_sale", "mean"),
        )
        .sort_values("age_group", kind="mergesort")
        .reset_index(drop=True)
    )
