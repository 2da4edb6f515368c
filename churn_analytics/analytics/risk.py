"""Rule-based risk labels for existing customers.

The thresholds are fixed business rules. They are asymmetric between the
top and bottom income tiers and are evaluated in priority order, first
match wins:

- High Risk:   income ``$120K +``, no inactive months, revolving balance above 1500
- Medium Risk: income ``Less than $40K``, 4+ inactive months, revolving balance 1000-1500
- Low Risk:    everything else
"""

from decimal import Decimal
from typing import Iterable

from churn_analytics.analytics.results import RiskAssignment
from churn_analytics.models import CustomerRecord, IncomeCategory, RiskLevel

HIGH_RISK_INCOME = IncomeCategory.ABOVE_120K
HIGH_RISK_MONTHS_INACTIVE = 0
HIGH_RISK_MIN_BALANCE = Decimal("1500")  # exclusive

MEDIUM_RISK_INCOME = IncomeCategory.LESS_THAN_40K
MEDIUM_RISK_MIN_MONTHS_INACTIVE = 4
MEDIUM_RISK_BALANCE_RANGE = (Decimal("1000"), Decimal("1500"))  # inclusive


def classify_risk(record: CustomerRecord) -> RiskLevel:
    """Assign a risk level to a single customer."""
    if (
        record.income_category == HIGH_RISK_INCOME
        and record.months_inactive == HIGH_RISK_MONTHS_INACTIVE
        and record.revolving_balance > HIGH_RISK_MIN_BALANCE
    ):
        return RiskLevel.HIGH

    low, high = MEDIUM_RISK_BALANCE_RANGE
    if (
        record.income_category == MEDIUM_RISK_INCOME
        and record.months_inactive >= MEDIUM_RISK_MIN_MONTHS_INACTIVE
        and low <= record.revolving_balance <= high
    ):
        return RiskLevel.MEDIUM

    return RiskLevel.LOW


def classify_existing_customers(records: Iterable[CustomerRecord]) -> list[RiskAssignment]:
    """Label every existing (non-attrited) customer, keeping input order."""
    return [
        RiskAssignment(client_id=record.client_id, risk_level=classify_risk(record))
        for record in records
        if not record.is_attrited
    ]
