from fastapi import HTTPException
from openai import RateLimitError, APIError, APIStatusError
from typing import Optional

from ..exceptions import ParseError, TransportError, ValidationError


def handle_error(error: Exception) -> HTTPException:
    """Map application errors to HTTP exceptions."""
    if isinstance(error, HTTPException):
        return error
    elif isinstance(error, ParseError):
        return HTTPException(
            status_code=400,
            detail=str(error)
        )
    elif isinstance(error, ValidationError):
        return HTTPException(
            status_code=422,
            detail=str(error)
        )
    elif isinstance(error, RateLimitError):
        return HTTPException(
            status_code=429,
            detail="Rate limit exceeded"
        )
    elif isinstance(error, (APIError, APIStatusError)):
        if getattr(error, 'status_code', 500) == 429:
            return HTTPException(
                status_code=429,
                detail="Rate limit exceeded"
            )
        return HTTPException(
            status_code=502,
            detail=f"OpenAI API error: {str(error)}"
        )
    elif isinstance(error, TransportError):
        return HTTPException(
            status_code=502,
            detail=str(error)
        )
    else:
        return HTTPException(
            status_code=500,
            detail=f"Unexpected error: {str(error)}"
        )


def validate_message(message: Optional[str]) -> None:
    """Reject empty chat messages."""
    if not message or not isinstance(message, str) or not message.strip():
        raise HTTPException(
            status_code=400,
            detail="Bericht is verplicht"
        )
