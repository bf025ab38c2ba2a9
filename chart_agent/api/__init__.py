"""
API Package - FastAPI Route Modules

Chat and spreadsheet upload endpoints.
"""

from .chat import router as chat_router
from .upload import router as upload_router

__all__ = ['chat_router', 'upload_router']
