"""Result rows returned by the churn analyses."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from churn_analytics.models.enums import AttritionFlag, RiskLevel


@dataclass(frozen=True)
class AttritionShare:
    """Customer count per attrition flag and its share of all customers."""

    attrition_flag: AttritionFlag
    customers: int
    share: Decimal | None


@dataclass(frozen=True)
class ChurnBreakdown:
    """Churn figures for one group, optionally with a measure split by attrition flag."""

    group: Any
    customers: int
    attrited: int
    existing: int
    churn_rate: Decimal | None  # None for an empty group
    measure: str | None = None
    attrited_total: Decimal | int | None = None
    existing_total: Decimal | int | None = None


@dataclass(frozen=True)
class RiskSegment:
    """Existing customers per risk level."""

    risk_level: RiskLevel
    customers: int
    share: Decimal | None
    total_revolving_balance: Decimal


@dataclass(frozen=True)
class RiskAssignment:
    client_id: str
    risk_level: RiskLevel
