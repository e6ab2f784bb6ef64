"""Custom exception hierarchy for urban-insights."""


class UrbanInsightsError(Exception):
    """Base exception for all urban-insights errors."""


class ConfigurationError(UrbanInsightsError):
    """Raised when configuration or generation parameters are invalid."""


class InsufficientDataError(UrbanInsightsError):
    """Raised when an insight is requested over an empty record set."""


class ValidationError(UrbanInsightsError):
    """Raised when a record fails a cleaning invariant.

    The cleaner recovers from it locally by dropping the record.
    """

    def __init__(self, record_id: str | None, reason: str) -> None:
        super().__init__(f"Record {record_id}: {reason}")
        self.record_id = record_id
        self.reason = reason


class SinkError(UrbanInsightsError):
    """Raised when an export operation fails."""
