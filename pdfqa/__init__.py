"""
AI PDF Reader Backend

Upload one PDF, then ask questions about it. Answers are generated by
Google Gemini, grounded in the text extracted from the uploaded document.

Features:
- In-memory PDF processing (no file storage)
- Single current document, replaced by each upload
- English/Spanish answer language detection
- Structured error codes
- Structured logging
- Health monitoring
"""

__version__ = "1.0.0"
__author__ = "AI PDF Reader Team"
__description__ = "Single-document PDF question answering backend"
