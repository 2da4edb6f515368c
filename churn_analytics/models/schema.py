"""Star schema rows: one fact table and four dimensions keyed by client id."""

from dataclasses import dataclass
from decimal import Decimal

from churn_analytics.models.enums import AttritionFlag, CardCategory, Gender, IncomeCategory


@dataclass(frozen=True)
class TransactionFact:
    """Row of the ``Transactions`` fact table (primary key ``client_id``)."""

    client_id: str
    credit_limit: Decimal
    revolving_balance: Decimal
    avg_open_to_buy: Decimal
    amount_change_q4_q1: float
    total_trans_amount: Decimal
    total_trans_count: int
    count_change_q4_q1: float
    utilization_ratio: float


@dataclass(frozen=True)
class CustomerDimension:
    """Row of the ``Customers`` dimension."""

    client_id: str
    age: int
    gender: Gender
    dependent_count: int
    education_level: str
    marital_status: str


@dataclass(frozen=True)
class ActivityDimension:
    """Row of the ``Activities`` dimension."""

    client_id: str
    relationship_count: int
    months_inactive: int
    contacts_count: int


@dataclass(frozen=True)
class ChurnStatusDimension:
    """Row of the ``Churn Status`` dimension."""

    client_id: str
    attrition_flag: AttritionFlag


@dataclass(frozen=True)
class AccountDimension:
    """Row of the ``Account`` dimension."""

    client_id: str
    income_category: IncomeCategory
    card_category: CardCategory
    months_on_book: int
