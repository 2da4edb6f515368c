"""Churn aggregations and risk classification over the star schema."""

from churn_analytics.analytics.aggregation import (
    GROUPING_KEYS,
    MEASURES,
    age_bracket,
    churn_by,
    churn_rate,
    percentage,
)
from churn_analytics.analytics.queries import (
    ANALYSES,
    attrition_overview,
    churn_by_age_bracket,
    churn_by_card_category,
    churn_by_income_category,
    churn_by_months_inactive,
    revolving_balance_by_card_category,
    risk_segments,
    run_all,
    transaction_count_by_income_category,
)
from churn_analytics.analytics.results import (
    AttritionShare,
    ChurnBreakdown,
    RiskAssignment,
    RiskSegment,
)
from churn_analytics.analytics.risk import classify_existing_customers, classify_risk

__all__ = [
    "ANALYSES",
    "AttritionShare",
    "ChurnBreakdown",
    "GROUPING_KEYS",
    "MEASURES",
    "RiskAssignment",
    "RiskSegment",
    "age_bracket",
    "attrition_overview",
    "churn_by",
    "churn_by_age_bracket",
    "churn_by_card_category",
    "churn_by_income_category",
    "churn_by_months_inactive",
    "churn_rate",
    "classify_existing_customers",
    "classify_risk",
    "percentage",
    "revolving_balance_by_card_category",
    "risk_segments",
    "run_all",
    "transaction_count_by_income_category",
]
