"""Domain models for the churn extract and its star schema."""

from churn_analytics.models.customer import CustomerRecord
from churn_analytics.models.enums import (
    AgeBracket,
    AttritionFlag,
    CardCategory,
    Gender,
    IncomeCategory,
    RiskLevel,
)
from churn_analytics.models.schema import (
    AccountDimension,
    ActivityDimension,
    ChurnStatusDimension,
    CustomerDimension,
    TransactionFact,
)

__all__ = [
    "AccountDimension",
    "ActivityDimension",
    "AgeBracket",
    "AttritionFlag",
    "CardCategory",
    "ChurnStatusDimension",
    "CustomerDimension",
    "CustomerRecord",
    "Gender",
    "IncomeCategory",
    "RiskLevel",
    "TransactionFact",
]
