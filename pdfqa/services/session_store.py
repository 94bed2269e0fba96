"""
In-memory single-document session store.
"""

import threading
from typing import Optional
import logging

from ..models import SessionDocument
from ..utils import format_timestamp, log_processing_info

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Holds the one document the service answers questions about, plus the
    most recent answer.

    Both slots are last-write-wins. Documents are immutable snapshots: a
    reader that called ``get()`` keeps its snapshot even if another request
    replaces the document afterwards.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._document: Optional[SessionDocument] = None
        self._last_answer: Optional[str] = None
        self._version = 0

    def replace(self, text: str, filename: str, page_count: int) -> SessionDocument:
        """Swap in a new document and return the stored snapshot."""
        with self._lock:
            self._version += 1
            document = SessionDocument(
                text=text,
                filename=filename,
                page_count=page_count,
                version=self._version,
                loaded_at=format_timestamp()
            )
            previous = self._document
            self._document = document

        log_processing_info("Session document replaced", {
            "filename": filename,
            "version": document.version,
            "text_length": document.text_length,
            "previous_version": previous.version if previous else None
        })
        return document

    def get(self) -> Optional[SessionDocument]:
        with self._lock:
            return self._document

    def has_document(self) -> bool:
        document = self.get()
        return document is not None and bool(document.text.strip())

    def set_last_answer(self, answer: str) -> None:
        with self._lock:
            self._last_answer = answer

    def get_last_answer(self) -> Optional[str]:
        with self._lock:
            return self._last_answer
