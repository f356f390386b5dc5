class ClauseExtractionError(Exception):
    """Raised when an extraction strategy cannot produce a result."""


class ClauseResponseParseError(ClauseExtractionError):
    """Raised when the model response is not a parseable JSON object."""


class ClauseExtractionNetworkError(ClauseExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
