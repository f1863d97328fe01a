"""
The catalog of analytic reports and the runner that executes it.

Each query reads the same cleaned, read-only sales table and fills its own
result slot, so one failing query never affects another.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, Tuple

import pandas as pd

from retail_analysis.errors import InvalidArgumentError
from retail_analysis.logger import setup_logger
from retail_analysis.validations.validate_outputs import validate_report
from . import behavior, exploration, insights, trends

logger = setup_logger("analytics.catalog")


@dataclass(frozen=True)
class AnalyticQuery:
    position: int
    name: str
    title: str
    function: Callable[..., pd.DataFrame]
    parameters: Tuple[str, ...] = ()


@dataclass
class AnalyticsRun:
    results: Dict[str, pd.DataFrame] = field(default_factory=dict)
    failures: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.failures


QUERY_CATALOG = (
    AnalyticQuery(1, "sales_on_date", "Sales made on a given date",
                  exploration.sales_on_date, ("sale_date",)),
    AnalyticQuery(2, "category_month_bulk_orders", "Bulk orders in a category for one month",
                  exploration.category_month_bulk_orders, ("category", "month", "min_quantity")),
    AnalyticQuery(3, "category_sales_summary", "Total sales and orders per category",
                  exploration.category_sales_summary),
    AnalyticQuery(4, "average_customer_age", "Average customer age in a category",
                  exploration.average_customer_age, ("category",)),
    AnalyticQuery(5, "high_value_sales", "Transactions above a sale threshold",
                  exploration.high_value_sales, ("threshold",)),
    AnalyticQuery(6, "category_gender_transactions", "Transactions per category and gender",
                  exploration.category_gender_transactions),
    AnalyticQuery(7, "best_month_per_year", "Best-selling month of each year",
                  exploration.best_month_per_year),
    AnalyticQuery(8, "top_customers", "Top customers by total sales",
                  exploration.top_customers, ("limit",)),
    AnalyticQuery(9, "unique_customers_per_category", "Unique customers per category",
                  exploration.unique_customers_per_category),
    AnalyticQuery(10, "orders_by_shift", "Orders per shift",
                  exploration.orders_by_shift),
    AnalyticQuery(11, "month_over_month_growth", "Month-over-month sales growth",
                  trends.month_over_month_growth),
    AnalyticQuery(12, "top_categories_per_month", "Top categories per month",
                  trends.top_categories_per_month, ("top_n",)),
    AnalyticQuery(13, "rfm_segmentation", "RFM customer segmentation",
                  trends.rfm_segmentation, ("reference_date",)),
    AnalyticQuery(14, "category_profitability", "Profitability per category",
                  insights.category_profitability),
    AnalyticQuery(15, "category_copurchase", "Categories bought by the same customers",
                  insights.category_copurchase, ("limit",)),
    AnalyticQuery(16, "abc_segmentation", "ABC revenue segmentation",
                  insights.abc_segmentation),
    AnalyticQuery(17, "sales_by_weekday", "Sales by day of week",
                  behavior.sales_by_weekday),
    AnalyticQuery(18, "cohort_retention", "Customer cohort retention",
                  behavior.cohort_retention),
    AnalyticQuery(19, "price_point_analysis", "Price points per category",
                  behavior.price_point_analysis),
    AnalyticQuery(20, "sales_by_age_group", "Sales by customer age group",
                  behavior.sales_by_age_group),
)

QUERIES_BY_NAME = {query.name: query for query in QUERY_CATALOG}


def get_query(name: str) -> AnalyticQuery:
    try:
        return QUERIES_BY_NAME[name]
    except KeyError:
        raise InvalidArgumentError(f"Unknown analytic query '{name}'") from None


def run_query(
    query: AnalyticQuery,
    sales: pd.DataFrame,
    parameters: Optional[Mapping[str, object]] = None,
) -> pd.DataFrame:
    """
    Execute one catalog query and check the result's column contract.
    """
    parameters = dict(parameters or {})
    unknown = sorted(set(parameters) - set(query.parameters))
    if unknown:
        raise InvalidArgumentError(
            f"Query '{query.name}' does not accept parameters {unknown}; "
            f"expected a subset of {list(query.parameters)}"
        )

    result = query.function(sales, **parameters)
    return validate_report(query.name, result)


def run_catalog(
    sales: pd.DataFrame,
    query_parameters: Optional[Mapping[str, Mapping[str, object]]] = None,
    max_workers: int = 1,
) -> AnalyticsRun:
    """
    Run every catalog query against the cleaned sales table.

    Invalid arguments fail only the query that received them; that failure
    is recorded in AnalyticsRun.failures and the other queries still run.
    """
    query_parameters = query_parameters or {}
    unknown = sorted(set(query_parameters) - set(QUERIES_BY_NAME))
    if unknown:
        raise InvalidArgumentError(f"Parameters given for unknown queries: {unknown}")

    logger.info(f"Running {len(QUERY_CATALOG)} analytic queries on {len(sales)} rows")
    run = AnalyticsRun()

    def execute(query: AnalyticQuery):
        try:
            return query, run_query(query, sales, query_parameters.get(query.name)), None
        except InvalidArgumentError as e:
            return query, None, str(e)

    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(execute, QUERY_CATALOG))
    else:
        outcomes = [execute(query) for query in QUERY_CATALOG]

    for query, result, error in outcomes:
        if error is not None:
            logger.error(f"✗ Q{query.position} {query.name} failed: {error}")
            run.failures[query.name] = error
        else:
            logger.info(f"✓ Q{query.position} {query.name}: {len(result)} rows")
            run.results[query.name] = result

    logger.info(
        f"Analytics completed: {len(run.results)} succeeded, {len(run.failures)} failed"
    )
    return run
