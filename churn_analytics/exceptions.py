"""Custom exception hierarchy for churn-analytics."""


class ChurnAnalyticsError(Exception):
    """Base exception for all churn-analytics errors."""


class SourceSchemaError(ChurnAnalyticsError):
    """Raised when the source extract is malformed."""


class KeyIntegrityError(ChurnAnalyticsError):
    """Raised when client identifiers violate the primary key."""


class DuplicateKeyError(KeyIntegrityError):
    """Raised when a client identifier appears more than once."""

    def __init__(self, client_ids: list[str]) -> None:
        self.client_ids = list(client_ids)
        shown = ", ".join(self.client_ids[:10])
        more = f" (+{len(self.client_ids) - 10} more)" if len(self.client_ids) > 10 else ""
        super().__init__(f"Duplicate client id(s): {shown}{more}")


class NullKeyError(KeyIntegrityError):
    """Raised when a client identifier is missing."""


class EntityNotFoundError(ChurnAnalyticsError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidQueryError(ChurnAnalyticsError):
    """Raised when an aggregation is asked for an unknown key, measure or ordering."""


class ConfigurationError(ChurnAnalyticsError):
    """Raised when configuration is invalid or missing."""


class SinkError(ChurnAnalyticsError):
    """Raised when a sink operation fails."""
