from pandera.pandas import Check, Column, DataFrameSchema


SALES_COLUMNS = [
    "transaction_id",
    "sale_date",
    "sale_time",
    "customer_id",
    "gender",
    "age",
    "category",
    "quantity",
    "price_per_unit",
    "cogs",
    "total_sale",
]

# Fields that must be present for a row to survive cleaning
REQUIRED_COLUMNS = [
    "transaction_id",
    "sale_date",
    "sale_time",
    "gender",
    "category",
    "quantity",
    "cogs",
    "total_sale",
]


def _unique_when_present(series):
    return ~series.duplicated(keep="first") | series.isna()


raw_sales_schema = DataFrameSchema(
    {
        # Identifier (nulls are removed later by the cleaner)
        "transaction_id": Column(
            "Int64",
            Check(_unique_when_present, name="unique_transaction_id"),
            nullable=True,
        ),

        # Timestamp parts
        "sale_date": Column("datetime64[ns]", nullable=True),
        "sale_time": Column("timedelta64[ns]", nullable=True),

        # Customer
        "customer_id": Column("Int64", nullable=True),
        "gender": Column(str, nullable=True),
        "age": Column("Int64", nullable=True),

        # Order info
        "category": Column(str, nullable=True),
        "quantity": Column("Int64", nullable=True),
        "price_per_unit": Column(float, nullable=True),
        "cogs": Column(float, nullable=True),
        "total_sale": Column(float, nullable=True),
    },
    strict=True,
    ordered=True,
)
