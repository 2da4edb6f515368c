"""Grouping and rate primitives shared by the churn analyses."""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Callable, Iterable

from churn_analytics.analytics.results import ChurnBreakdown
from churn_analytics.exceptions import InvalidQueryError
from churn_analytics.models import AgeBracket, CustomerRecord

ORDERINGS = ("churn_rate", "population", "group")


def percentage(part: int, total: int, places: int = 2) -> Decimal | None:
    """Return ``part / total * 100`` rounded half-up, or None when ``total`` is 0."""
    if total == 0:
        return None
    exponent = Decimal(1).scaleb(-places)
    return (Decimal(part) * 100 / Decimal(total)).quantize(exponent, rounding=ROUND_HALF_UP)


def churn_rate(attrited: int, total: int, places: int = 2) -> Decimal | None:
    """Percentage of attrited members in a group; None for an empty group."""
    return percentage(attrited, total, places)


def age_bracket(age: int) -> AgeBracket:
    """Map an age onto its bracket.

    Ages below 26 are folded into the youngest bracket and anything from 59
    upwards lands in ``59+``, so every integer age has exactly one bracket.
    """
    if age <= 36:
        return AgeBracket.AGE_26_36
    if age <= 47:
        return AgeBracket.AGE_37_47
    if age <= 58:
        return AgeBracket.AGE_48_58
    return AgeBracket.AGE_59_PLUS


GROUPING_KEYS: dict[str, Callable[[CustomerRecord], Any]] = {
    "attrition_flag": lambda r: r.attrition_flag,
    "age_bracket": lambda r: age_bracket(r.age),
    "gender": lambda r: r.gender,
    "education_level": lambda r: r.education_level,
    "marital_status": lambda r: r.marital_status,
    "income_category": lambda r: r.income_category,
    "card_category": lambda r: r.card_category,
    "months_inactive": lambda r: r.months_inactive,
    "dependent_count": lambda r: r.dependent_count,
    "relationship_count": lambda r: r.relationship_count,
    "contacts_count": lambda r: r.contacts_count,
}

# Measure name -> (getter, zero value of the measure's type)
MEASURES: dict[str, tuple[Callable[[CustomerRecord], Any], Any]] = {
    "credit_limit": (lambda r: r.credit_limit, Decimal("0")),
    "revolving_balance": (lambda r: r.revolving_balance, Decimal("0")),
    "avg_open_to_buy": (lambda r: r.avg_open_to_buy, Decimal("0")),
    "total_trans_amount": (lambda r: r.total_trans_amount, Decimal("0")),
    "total_trans_count": (lambda r: r.total_trans_count, 0),
}


def natural_key(group: Any) -> tuple:
    """Sort key following enum declaration order, numeric order, then text."""
    if isinstance(group, Enum):
        return (0, list(type(group)).index(group))
    if isinstance(group, (int, float, Decimal)):
        return (0, group)
    return (1, str(group))


def churn_by(
    records: Iterable[CustomerRecord],
    key: str,
    measure: str | None = None,
    order: str = "churn_rate",
    places: int = 2,
) -> list[ChurnBreakdown]:
    """Group records by ``key`` and compute churn figures per group.

    Parameters
    ----------
    records : Iterable[CustomerRecord]
        Records to aggregate.
    key : str
        Name of a grouping in ``GROUPING_KEYS``.
    measure : str | None
        Name of a measure in ``MEASURES`` to sum separately for attrited and
        existing members.
    order : str
        ``churn_rate`` (descending), ``population`` (descending) or ``group``.
    places : int
        Decimal places of the churn rate.

    Returns
    -------
    list[ChurnBreakdown]
        One row per observed group.

    Raises
    ------
    InvalidQueryError
        If ``key``, ``measure`` or ``order`` is unknown.
    """
    if key not in GROUPING_KEYS:
        raise InvalidQueryError(f"Unknown grouping key: {key!r}")
    if measure is not None and measure not in MEASURES:
        raise InvalidQueryError(f"Unknown measure: {measure!r}")
    if order not in ORDERINGS:
        raise InvalidQueryError(f"Unknown ordering: {order!r}")

    group_of = GROUPING_KEYS[key]
    value_of, zero = MEASURES[measure] if measure else (None, None)

    # group -> [customers, attrited, attrited_total, existing_total]
    groups: dict[Any, list] = {}
    for record in records:
        acc = groups.setdefault(group_of(record), [0, 0, zero, zero])
        acc[0] += 1
        if record.is_attrited:
            acc[1] += 1
            if value_of:
                acc[2] += value_of(record)
        elif value_of:
            acc[3] += value_of(record)

    rows = [
        ChurnBreakdown(
            group=group,
            customers=customers,
            attrited=attrited,
            existing=customers - attrited,
            churn_rate=churn_rate(attrited, customers, places),
            measure=measure,
            attrited_total=attrited_total,
            existing_total=existing_total,
        )
        for group, (customers, attrited, attrited_total, existing_total) in groups.items()
    ]
    return sort_breakdown(rows, order)


def sort_breakdown(rows: list[ChurnBreakdown], order: str) -> list[ChurnBreakdown]:
    """Order breakdown rows; ties fall back to the group's natural order."""
    if order == "churn_rate":
        return sorted(
            rows,
            key=lambda r: (r.churn_rate is None, -(r.churn_rate or 0), natural_key(r.group)),
        )
    if order == "population":
        return sorted(rows, key=lambda r: (-r.customers, natural_key(r.group)))
    if order == "group":
        return sorted(rows, key=lambda r: natural_key(r.group))
    raise InvalidQueryError(f"Unknown ordering: {order!r}")
