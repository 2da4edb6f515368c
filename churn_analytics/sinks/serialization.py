"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from decimal import Decimal
from enum import Enum
from typing import Any


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": serialize_value(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a flat dataclass to a dict with serialized values.

    Uses ``dataclasses.fields()`` + ``getattr`` rather than ``asdict()``;
    result rows and schema rows are flat so no deep copy is needed.
    """
    return {f.name: serialize_value(getattr(obj, f.name)) for f in fields(obj)}


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value
