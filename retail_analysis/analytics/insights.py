"""
Category-level business insights: profitability, co-purchase pairs and
ABC revenue segmentation.
"""

from collections import Counter
from itertools import combinations

import numpy as np
import pandas as pd

from .arguments import parse_positive_int

# Cumulative revenue share limits for the A and B segments
ABC_THRESHOLDS = (0.7, 0.9)


def category_profitability(sales: pd.DataFrame) -> pd.DataFrame:
    """Revenue, cost, profit and margin per category, most profitable first."""
    profit = (
        sales.assign(profit=sales["total_sale"] - sales["cogs"])
        .groupby("category", as_index=False)
        .agg(
            total_revenue=("total_sale", "sum"),
            total_cost=("cogs", "sum"),
            total_profit=("profit", "sum"),
        )
    )
    revenue = profit["total_revenue"].where(profit["total_revenue"] != 0)
    profit["profit_margin_percentage"] = profit["total_profit"] / revenue * 100

    return profit.sort_values("total_profit", ascending=False, kind="mergesort").reset_index(drop=True)


def category_copurchase(sales: pd.DataFrame, limit=10) -> pd.DataFrame:
    """
    Number of distinct customers who bought from both categories of a pair.

    Pairs are enumerated from each customer's distinct category set, with
    category_1 < category_2. Ties are ordered by the pair itself.
    """
    limit = parse_positive_int(limit, "limit")

    baskets = (
        sales.dropna(subset=["customer_id"])
        .groupby("customer_id")["category"]
        .unique()
    )

    pair_counts = Counter()
    for categories in baskets:
        pair_counts.update(combinations(sorted(categories), 2))

    pairs = pd.DataFrame(
        [(first, second, count) for (first, second), count in pair_counts.items()],
        columns=["category_1", "category_2", "number_of_customers"],
    )
    return (
        pairs.sort_values(
            ["number_of_customers", "category_1", "category_2"],
            ascending=[False, True, True],
            kind="mergesort",
        )
        .head(limit)
        .reset_index(drop=True)
    )


def abc_segmentation(sales: pd.DataFrame) -> pd.DataFrame:
    """
    ABC analysis of category revenue.

    Categories are ordered by revenue, highest first. Cumulative revenue
    includes every category tied with the current one, as a SQL running
    SUM() over ORDER BY revenue DESC does. Segment A covers the first 70%
    of revenue, B the next 20% and C the rest.
    """
    revenue = (
        sales.groupby("category", as_index=False)
        .agg(revenue=("total_sale", "sum"))
        .sort_values(["revenue", "category"], ascending=[False, True], kind="mergesort")
        .reset_index(drop=True)
    )

    running = revenue["revenue"].cumsum()
    revenue["cumulative_revenue"] = running.groupby(revenue["revenue"]).transform("last")

    total = running.iloc[-1] if len(running) else 0.0
    share = revenue["cumulative_revenue"] / total if total != 0 else revenue["cumulative_revenue"] * np.nan
    revenue["cumulative_percentage"] = share * 100

    low, high = ABC_THRESHOLDS
    revenue["abc_segment"] = np.select([share <= low, share <= high], ["A", "B"], default="C")

    return revenue
