"""The eight churn analyses run against a loaded star schema."""

import logging
from decimal import Decimal
from typing import Any, Callable

from churn_analytics.analytics.aggregation import churn_by, natural_key, percentage
from churn_analytics.analytics.results import AttritionShare, ChurnBreakdown, RiskSegment
from churn_analytics.analytics.risk import classify_risk
from churn_analytics.models import AttritionFlag
from churn_analytics.store.star_schema import StarSchemaStore

logger = logging.getLogger(__name__)


def attrition_overview(store: StarSchemaStore, places: int = 2) -> list[AttritionShare]:
    """Customers per attrition flag with their share of the whole base."""
    counts: dict[AttritionFlag, int] = {}
    for status in store.churn_status.values():
        counts[status.attrition_flag] = counts.get(status.attrition_flag, 0) + 1

    total = sum(counts.values())
    rows = [
        AttritionShare(attrition_flag=flag, customers=n, share=percentage(n, total, places))
        for flag, n in counts.items()
    ]
    return sorted(rows, key=lambda r: (-r.customers, natural_key(r.attrition_flag)))


def churn_by_age_bracket(store: StarSchemaStore, places: int = 2) -> list[ChurnBreakdown]:
    return churn_by(store.records(), "age_bracket", order="churn_rate", places=places)


def churn_by_income_category(store: StarSchemaStore, places: int = 2) -> list[ChurnBreakdown]:
    """Churn rate per income bracket with credit limit split by attrition flag."""
    return churn_by(
        store.records(), "income_category", measure="credit_limit", order="churn_rate", places=places
    )


def churn_by_months_inactive(store: StarSchemaStore, places: int = 2) -> list[ChurnBreakdown]:
    return churn_by(store.records(), "months_inactive", order="churn_rate", places=places)


def churn_by_card_category(store: StarSchemaStore, places: int = 2) -> list[ChurnBreakdown]:
    """Card tiers by population with transaction amount split by attrition flag."""
    return churn_by(
        store.records(), "card_category", measure="total_trans_amount", order="population", places=places
    )


def transaction_count_by_income_category(
    store: StarSchemaStore, places: int = 2
) -> list[ChurnBreakdown]:
    """Income brackets by population with transaction count split by attrition flag."""
    return churn_by(
        store.records(), "income_category", measure="total_trans_count", order="population", places=places
    )


def revolving_balance_by_card_category(
    store: StarSchemaStore, places: int = 2
) -> list[ChurnBreakdown]:
    """Churn rate per card tier with revolving balance split by attrition flag."""
    return churn_by(
        store.records(), "card_category", measure="revolving_balance", order="churn_rate", places=places
    )


def risk_segments(store: StarSchemaStore, places: int = 2) -> list[RiskSegment]:
    """Existing customers per risk level.

    Only risk levels that have at least one customer are returned. Shares are
    relative to the existing customer base.
    """
    counts: dict = {}
    balances: dict = {}
    for record in store.records():
        if record.is_attrited:
            continue
        level = classify_risk(record)
        counts[level] = counts.get(level, 0) + 1
        balances[level] = balances.get(level, Decimal("0")) + record.revolving_balance

    total = sum(counts.values())
    rows = [
        RiskSegment(
            risk_level=level,
            customers=n,
            share=percentage(n, total, places),
            total_revolving_balance=balances[level],
        )
        for level, n in counts.items()
    ]
    return sorted(rows, key=lambda r: (-r.customers, natural_key(r.risk_level)))


ANALYSES: dict[str, Callable[..., list[Any]]] = {
    "attrition_overview": attrition_overview,
    "churn_by_age_bracket": churn_by_age_bracket,
    "churn_by_income_category": churn_by_income_category,
    "churn_by_months_inactive": churn_by_months_inactive,
    "churn_by_card_category": churn_by_card_category,
    "transaction_count_by_income_category": transaction_count_by_income_category,
    "revolving_balance_by_card_category": revolving_balance_by_card_category,
    "risk_segments": risk_segments,
}


def run_all(store: StarSchemaStore, places: int = 2) -> dict[str, list[Any]]:
    """Run every analysis against ``store``.

    Returns
    -------
    dict[str, list]
        Analysis name -> result rows, in ``ANALYSES`` order.
    """
    results: dict[str, list[Any]] = {}
    for name, analysis in ANALYSES.items():
        results[name] = analysis(store, places=places)
        logger.info("Analysis %s: %d rows", name, len(results[name]))
    return results
