"""
Chart Generation Exceptions

Custom exceptions for the chart generation system.
Messages are Dutch because they are narrated back to the user by the assistant.
"""


class ChartGenerationError(Exception):
    """Base exception for chart generation errors."""

    def __init__(self, message: str, chart_type: str = None):
        super().__init__(message)
        self.message = message
        self.chart_type = chart_type


class ValidationError(ChartGenerationError):
    """Raised when a chart specification is malformed or uses an unknown enum value."""

    def __init__(self, message: str, field: str = None, chart_type: str = None):
        super().__init__(message, chart_type=chart_type)
        self.field = field


class ChartRenderingError(ChartGenerationError):
    """Raised when chart rendering fails."""

    def __init__(self, message: str, chart_type: str = None):
        super().__init__(f"Fout bij het renderen van de grafiek: {message}", chart_type=chart_type)
