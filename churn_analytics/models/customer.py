"""Flat customer record as delivered by the source extract."""

from dataclasses import dataclass
from decimal import Decimal

from churn_analytics.models.enums import AttritionFlag, CardCategory, Gender, IncomeCategory


@dataclass(frozen=True)
class CustomerRecord:
    """One row of the denormalized customer extract."""

    client_id: str
    attrition_flag: AttritionFlag

    # Demographic
    age: int
    gender: Gender
    dependent_count: int
    education_level: str
    marital_status: str

    # Account
    income_category: IncomeCategory
    card_category: CardCategory
    months_on_book: int

    # Behavioural
    relationship_count: int
    months_inactive: int  # trailing 12 months
    contacts_count: int  # trailing 12 months

    # Transactional
    credit_limit: Decimal
    revolving_balance: Decimal
    avg_open_to_buy: Decimal
    amount_change_q4_q1: float
    total_trans_amount: Decimal
    total_trans_count: int
    count_change_q4_q1: float
    utilization_ratio: float

    @property
    def is_attrited(self) -> bool:
        """Whether the customer has churned."""
        return self.attrition_flag == AttritionFlag.ATTRITED
