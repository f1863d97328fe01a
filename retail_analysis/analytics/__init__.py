"""
Analytic reports over the cleaned retail sales table.
"""

from .catalog import QUERY_CATALOG, AnalyticQuery, AnalyticsRun, get_query, run_catalog, run_query

__all__ = [
    "QUERY_CATALOG",
    "AnalyticQuery",
    "AnalyticsRun",
    "get_query",
    "run_catalog",
    "run_query",
]
