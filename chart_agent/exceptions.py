"""Custom exceptions for the chart agent."""

from .charts.exceptions import ChartGenerationError, ValidationError, ChartRenderingError


class ParseError(Exception):
    """Raised when a spreadsheet cannot be turned into chart data."""

    def __init__(self, message: str, details: str = None):
        super().__init__(message)
        self.details = details


class UploadRejectedError(ParseError):
    """Raised when an upload is refused before parsing (type or size)."""
    pass


class TransportError(Exception):
    """Raised when the model provider is unreachable or returns unusable output."""
    pass


class ConfigurationError(Exception):
    """Raised when there is a configuration error."""
    pass


__all__ = [
    'ChartGenerationError',
    'ValidationError',
    'ChartRenderingError',
    'ParseError',
    'UploadRejectedError',
    'TransportError',
    'ConfigurationError',
]
