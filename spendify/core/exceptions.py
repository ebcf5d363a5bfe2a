"""Exception classes raised by the insights pipeline."""


class InsightsError(Exception):
    """Base exception for expense insights."""


class ValidationError(InsightsError):
    """Malformed or missing request parameters, or an inverted date range."""


class FetchError(InsightsError):
    """The expense store was unreachable or returned an error."""
