"""In-memory star schema store."""

from churn_analytics.store.star_schema import (
    StarSchemaStore,
    find_duplicate_keys,
    load_star_schema,
    split_record,
)

__all__ = ["StarSchemaStore", "find_duplicate_keys", "load_star_schema", "split_record"]
