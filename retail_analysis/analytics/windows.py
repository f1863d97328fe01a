"""
Window-function equivalents used by the analytic queries.

These reproduce the SQL semantics the reports were defined with:
RANK() for ranking with ties and NTILE(n) for equal-population buckets.
"""

import numpy as np
import pandas as pd


def competition_rank(values: pd.Series, groups=None, ascending: bool = False) -> pd.Series:
    """
    Standard competition ranking (RANK()): ties share a rank and the next
    rank skips accordingly, e.g. 1, 1, 3.
    """
    if groups is None:
        ranks = values.rank(method="min", ascending=ascending)
    else:
        ranks = values.groupby(groups).rank(method="min", ascending=ascending)
    return ranks.astype("int64")


def ntile(values: pd.Series, buckets: int, ascending: bool = True) -> pd.Series:
    """
    NTILE(buckets) over the values in the given order.

    Rows are sorted stably by value and split into contiguous groups whose
    sizes differ by at most one; the earliest groups take the extra rows.
    Returns the 1-based bucket of each row, aligned to the input index.
    """
    if buckets < 1:
        raise ValueError("buckets must be a positive integer")

    count = len(values)
    if count == 0:
        return pd.Series([], index=values.index, dtype="int64")

    order = values.sort_values(ascending=ascending, kind="mergesort").index
    position = np.arange(count)

    size, remainder = divmod(count, buckets)
    # The first `remainder` buckets hold size + 1 rows
    boundary = remainder * (size + 1)
    large = position // (size + 1) + 1
    small = remainder + (position - boundary) // max(size, 1) + 1
    bucket = np.where(position < boundary, large, small)

    return pd.Series(bucket, index=order, dtype="int64").reindex(values.index)


def month_label(dates: pd.Series) -> pd.Series:
    """Render dates as 'YYYY-MM' month labels."""
    return dates.dt.strftime("%Y-%m")
