"""
Services package for the AI PDF Reader Backend.
"""

from .pdf_processor import PDFProcessor
from .session_store import SessionStore
from .chat_service import ChatService
from .document_service import DocumentService

__all__ = [
    "PDFProcessor",
    "SessionStore",
    "ChatService",
    "DocumentService"
]
