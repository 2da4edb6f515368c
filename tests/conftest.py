"""Pytest configuration and fixtures."""

from decimal import Decimal
from typing import Any, Callable

import pytest

from churn_analytics.models import (
    AttritionFlag,
    CardCategory,
    CustomerRecord,
    Gender,
    IncomeCategory,
)
from churn_analytics.store import StarSchemaStore, load_star_schema


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def make_record() -> Callable[..., CustomerRecord]:
    """Factory for customer records with overridable fields."""
    counter = {"n": 0}

    def _make(**overrides: Any) -> CustomerRecord:
        counter["n"] += 1
        values: dict[str, Any] = {
            "client_id": f"7{counter['n']:08d}",
            "attrition_flag": AttritionFlag.EXISTING,
            "age": 45,
            "gender": Gender.FEMALE,
            "dependent_count": 2,
            "education_level": "Graduate",
            "marital_status": "Married",
            "income_category": IncomeCategory.FROM_40K_TO_60K,
            "card_category": CardCategory.BLUE,
            "months_on_book": 36,
            "relationship_count": 4,
            "months_inactive": 2,
            "contacts_count": 3,
            "credit_limit": Decimal("5000.0"),
            "revolving_balance": Decimal("1200"),
            "avg_open_to_buy": Decimal("3800.0"),
            "amount_change_q4_q1": 0.75,
            "total_trans_amount": Decimal("4200"),
            "total_trans_count": 65,
            "count_change_q4_q1": 0.7,
            "utilization_ratio": 0.24,
        }
        values.update(overrides)
        return CustomerRecord(**values)

    return _make


@pytest.fixture
def ten_customers(make_record: Callable[..., CustomerRecord]) -> list[CustomerRecord]:
    """Ten customers, two of them attrited."""
    records = []
    for i in range(10):
        records.append(
            make_record(
                attrition_flag=AttritionFlag.ATTRITED if i < 2 else AttritionFlag.EXISTING,
                age=30 + i * 4,
                income_category=IncomeCategory.LESS_THAN_40K if i % 2 else IncomeCategory.ABOVE_120K,
                card_category=CardCategory.SILVER if i == 0 else CardCategory.BLUE,
                months_inactive=i % 4,
                total_trans_amount=Decimal(1000 + i * 100),
                total_trans_count=20 + i,
                credit_limit=Decimal("3000") + i,
                revolving_balance=Decimal(i * 250),
            )
        )
    return records


@pytest.fixture
def store(ten_customers: list[CustomerRecord]) -> StarSchemaStore:
    """Star schema loaded from the ten customers."""
    return load_star_schema(ten_customers)
