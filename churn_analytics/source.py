"""Reading and writing the flat customer extract (CSV)."""

import csv
import logging
import math
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from churn_analytics.exceptions import NullKeyError, SourceSchemaError
from churn_analytics.models import (
    AttritionFlag,
    CardCategory,
    CustomerRecord,
    Gender,
    IncomeCategory,
)

logger = logging.getLogger(__name__)

KEY_COLUMN = "CLIENTNUM"

# Record field -> (source column, parser)
SOURCE_COLUMNS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "client_id": (KEY_COLUMN, str),
    "attrition_flag": ("Attrition_Flag", AttritionFlag),
    "age": ("Customer_Age", int),
    "gender": ("Gender", Gender),
    "dependent_count": ("Dependent_count", int),
    "education_level": ("Education_Level", str),
    "marital_status": ("Marital_Status", str),
    "income_category": ("Income_Category", IncomeCategory),
    "card_category": ("Card_Category", CardCategory),
    "months_on_book": ("Months_on_book", int),
    "relationship_count": ("Total_Relationship_Count", int),
    "months_inactive": ("Months_Inactive_12_mon", int),
    "contacts_count": ("Contacts_Count_12_mon", int),
    "credit_limit": ("Credit_Limit", Decimal),
    "revolving_balance": ("Total_Revolving_Bal", Decimal),
    "avg_open_to_buy": ("Avg_Open_To_Buy", Decimal),
    "amount_change_q4_q1": ("Total_Amt_Chng_Q4_Q1", float),
    "total_trans_amount": ("Total_Trans_Amt", Decimal),
    "total_trans_count": ("Total_Trans_Ct", int),
    "count_change_q4_q1": ("Total_Ct_Chng_Q4_Q1", float),
    "utilization_ratio": ("Avg_Utilization_Ratio", float),
}


def read_extract(path: str | Path) -> list[CustomerRecord]:
    """Read the customer extract from a CSV file.

    Parameters
    ----------
    path : str | Path
        CSV file with a header row using the source column names.

    Returns
    -------
    list[CustomerRecord]
        One record per data row, in file order.

    Raises
    ------
    SourceSchemaError
        If a required column is missing or a value cannot be parsed.
    NullKeyError
        If a row has an empty client id.
    """
    path = Path(path)
    with open(path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames:
            reader.fieldnames = [name.strip() for name in reader.fieldnames]
        _check_header(reader.fieldnames)
        records = records_from_rows(reader)

    logger.info("Read %d rows from %s", len(records), path)
    return records


def records_from_rows(rows: Iterable[Mapping[str, str]]) -> list[CustomerRecord]:
    """Parse rows keyed by source column name into records."""
    records = []
    # Line 1 is the header
    for line, row in enumerate(rows, start=2):
        records.append(_parse_row(row, line))
    return records


def write_extract(records: Iterable[CustomerRecord], path: str | Path) -> int:
    """Write records back out in the source CSV layout.

    Returns
    -------
    int
        Number of rows written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow([column for column, _ in SOURCE_COLUMNS.values()])
        for record in records:
            writer.writerow([_format_value(getattr(record, name)) for name in SOURCE_COLUMNS])
            count += 1

    logger.info("Wrote %d rows to %s", count, path)
    return count


def _check_header(fieldnames: list[str] | None) -> None:
    if not fieldnames:
        raise SourceSchemaError("Extract is empty or has no header row")
    present = {name.strip() for name in fieldnames}
    missing = [column for column, _ in SOURCE_COLUMNS.values() if column not in present]
    if missing:
        raise SourceSchemaError(f"Extract is missing required column(s): {', '.join(missing)}")


def _parse_row(row: Mapping[str, str], line: int) -> CustomerRecord:
    values: dict[str, Any] = {}
    for name, (column, parser) in SOURCE_COLUMNS.items():
        raw = row.get(column)
        raw = raw.strip() if raw is not None else ""

        if column == KEY_COLUMN:
            if not raw:
                raise NullKeyError(f"Null client id at line {line}")
            values[name] = raw
            continue

        try:
            values[name] = parser(raw)
        except (ValueError, InvalidOperation) as e:
            raise SourceSchemaError(f"Line {line}: invalid {column} value {raw!r}") from e
        if not _is_finite(values[name]):
            raise SourceSchemaError(f"Line {line}: invalid {column} value {raw!r} (not a finite number)")

    return CustomerRecord(**values)


def _is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, float):
        return math.isfinite(value)
    return True


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        return value.value
    return str(value)
