from pandera.pandas import Column, DataFrameSchema

from .input_schemas import SALES_COLUMNS


sales_clean_schema = DataFrameSchema(
    {
        # Identifier
        "transaction_id": Column("Int64", nullable=False, unique=True),

        # Timestamp parts
        "sale_date": Column("datetime64[ns]", nullable=False),
        "sale_time": Column("timedelta64[ns]", nullable=False),

        # Customer (customer_id and age are optional in the source)
        "customer_id": Column("Int64", nullable=True),
        "gender": Column(str, nullable=False),
        "age": Column("Int64", nullable=True),

        # Order info
        "category": Column(str, nullable=False),
        "quantity": Column("Int64", nullable=False),
        "price_per_unit": Column(float, nullable=True),
        "cogs": Column(float, nullable=False),
        "total_sale": Column(float, nullable=False),
    },
    strict=True,
    ordered=True,
)


# Column contract for every report produced by the analytics catalog
REPORT_COLUMNS = {
    "sales_on_date": SALES_COLUMNS,
    "category_month_bulk_orders": SALES_COLUMNS,
    "category_sales_summary": ["category", "net_sale", "total_orders"],
    "average_customer_age": ["avg_age"],
    "high_value_sales": SALES_COLUMNS,
    "category_gender_transactions": ["category", "gender", "total_transactions"],
    "best_month_per_year": ["year", "month", "avg_sale"],
    "top_customers": ["customer_id", "total_sales"],
    "unique_customers_per_category": ["category", "unique_customers"],
    "orders_by_shift": ["shift", "total_orders"],
    "month_over_month_growth": [
        "sales_month",
        "current_month_sales",
        "previous_month_sales",
        "month_over_month_growth",
    ],
    "top_categories_per_month": ["sales_month", "category", "total_sales", "sales_rank"],
    "rfm_segmentation": [
        "customer_id",
        "recency",
        "frequency",
        "monetary",
        "recency_score",
        "frequency_score",
        "monetary_score",
    ],
    "category_profitability": [
        "category",
        "total_revenue",
        "total_cost",
        "total_profit",
        "profit_margin_percentage",
    ],
    "category_copurchase": ["category_1", "category_2", "number_of_customers"],
    "abc_segmentation": [
        "category",
        "revenue",
        "cumulative_revenue",
        "cumulative_percentage",
        "abc_segment",
    ],
    "sales_by_weekday": ["day_of_week", "total_sales", "average_sale", "number_of_transactions"],
    "cohort_retention": ["cohort_month", "activity_month", "active_customers"],
    "price_point_analysis": ["category", "price_per_unit", "number_of_sales", "total_quantity_sold"],
    "sales_by_age_group": [
        "age_group",
        "total_sales",
        "unique_customers",
        "average_spend_per_transaction",
    ],
}


report_schemas = {
    name: DataFrameSchema(
        {column: Column(nullable=True) for column in columns},
        strict=True,
        ordered=True,
        name=name,
    )
    for name, columns in REPORT_COLUMNS.items()
}
