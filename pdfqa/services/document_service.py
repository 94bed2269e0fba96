"""
Main document service that orchestrates PDF ingestion and question answering.
"""

import asyncio
from typing import Any, Dict, Optional
from starlette.concurrency import run_in_threadpool

from .pdf_processor import PDFProcessor
from .chat_service import ChatService
from .session_store import SessionStore
from ..config import Settings, settings as default_settings
from ..errors import (
    DocumentStateError,
    ExtractionError,
    InputError,
    InternalError,
    PDFQAError,
    ProviderError
)
from ..language import Language, detect_language
from ..models import AnswerResult, IngestResult
from ..utils import (
    validate_file_type,
    validate_file_size,
    sanitize_filename,
    measure_time,
    log_processing_info,
    handle_processing_error
)
import logging

logger = logging.getLogger(__name__)


QUICK_ACTIONS: Dict[str, str] = {
    "summary": "Give me a clear structured summary of this PDF.",
    "key_insights": "Give me the key insights of this PDF.",
    "explain_like_10": "Explain the main ideas of this PDF like I am 10 years old.",
    "action_items": "Extract actionable items and next steps from this PDF.",
}


class DocumentService:
    """Main service for document ingestion and question answering."""

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        pdf_processor: Optional[PDFProcessor] = None,
        chat_service: Optional[ChatService] = None,
        settings: Optional[Settings] = None
    ):
        """Initialize the document service."""
        self.settings = settings or default_settings
        self.store = store or SessionStore()
        self.pdf_processor = pdf_processor or PDFProcessor()
        self.chat_service = chat_service or ChatService()

    def _validate_upload(self, file_content: Optional[bytes], filename: Optional[str]) -> None:
        """
        Validate an uploaded file before parsing it.

        Raises:
            InputError: If the file is missing, empty, of the wrong type or too large
        """
        if file_content is None or not filename:
            raise InputError("No PDF file provided.", code="NO_FILE")

        if not validate_file_type(filename, self.settings.allowed_file_types):
            raise InputError(
                f"Invalid file type: {filename}. Only PDF files are allowed.",
                code="INVALID_FILE_TYPE"
            )

        if len(file_content) == 0:
            raise InputError(f"File {filename} is empty.", code="EMPTY_FILE")

        self.check_upload_size(len(file_content), filename)

    def check_upload_size(self, file_size: Optional[int], filename: Optional[str]) -> None:
        """
        Reject uploads above the size cap. An unknown size passes.

        Raises:
            InputError: FILE_TOO_LARGE
        """
        if file_size is None:
            return

        if not validate_file_size(file_size, self.settings.max_file_size_mb):
            file_size_mb = file_size / (1024 * 1024)
            raise InputError(
                f"File {filename} is too large: {file_size_mb:.1f}MB. "
                f"Maximum size is {self.settings.max_file_size_mb}MB.",
                code="FILE_TOO_LARGE"
            )

    @measure_time
    async def ingest(self, file_content: Optional[bytes], filename: Optional[str]) -> IngestResult:
        """
        Extract the text of an uploaded PDF and make it the current document.

        The current document is only replaced when extraction yields readable
        text; on any failure the previous document stays loaded.

        Args:
            file_content: PDF file content as bytes
            filename: Name of the uploaded file

        Returns:
            IngestResult with document metadata and a text preview
        """
        self._validate_upload(file_content, filename)
        filename = sanitize_filename(filename)

        log_processing_info("Document ingestion started", {
            "filename": filename,
            "file_size": len(file_content)
        })

        try:
            extracted = await asyncio.wait_for(
                run_in_threadpool(self.pdf_processor.extract_text, file_content, filename),
                timeout=self.settings.request_timeout_seconds
            )
        except asyncio.TimeoutError as e:
            handle_processing_error("document_ingestion", e, {"filename": filename})
            raise ProviderError(
                f"Text extraction did not finish within {self.settings.request_timeout_seconds:g} seconds.",
                code="PROVIDER_UNAVAILABLE"
            ) from e
        except PDFQAError:
            raise
        except Exception as e:
            error_info = handle_processing_error("document_ingestion", e, {"filename": filename})
            raise InternalError(
                f"Failed to process {filename}.",
                code="INTERNAL_ERROR",
                details=error_info if self.settings.debug else None
            ) from e

        if not extracted.text.strip():
            logger.warning(f"No readable text in {filename}; keeping the current document")
            raise ExtractionError(
                "The PDF contains no readable text. It may be a scanned or image-only document.",
                code="NO_READABLE_TEXT"
            )

        document = self.store.replace(
            text=extracted.text,
            filename=filename,
            page_count=extracted.page_count
        )

        result = IngestResult(
            filename=document.filename,
            page_count=document.page_count,
            text_length=document.text_length,
            preview_text=document.text[:self.settings.preview_chars],
            version=document.version
        )

        log_processing_info("Document ingestion completed", {
            "filename": result.filename,
            "page_count": result.page_count,
            "text_length": result.text_length,
            "version": result.version
        })

        return result

    @measure_time
    async def answer(self, question: Optional[str], language: Optional[Language] = None) -> AnswerResult:
        """
        Answer a question about the current document.

        Args:
            question: User's question
            language: Answer language; detected from the question when omitted

        Returns:
            AnswerResult with the answer text
        """
        question = (question or "").strip()
        if not question:
            raise InputError("Question must not be empty.", code="EMPTY_QUESTION")

        # The snapshot pins this request to one document version
        document = self.store.get()
        if document is None or not document.text.strip():
            raise DocumentStateError("Upload a PDF first.", code="NO_DOCUMENT_LOADED")

        if language is None or language == Language.UNKNOWN:
            language = detect_language(question)

        log_processing_info("Question received", {
            "question_length": len(question),
            "language": language.value,
            "document_version": document.version,
            "document_length": document.text_length
        })

        try:
            answer = await self.chat_service.generate_answer(
                question=question,
                document_text=document.text,
                language=language
            )
        except PDFQAError:
            raise
        except Exception as e:
            error_info = handle_processing_error("question_answering", e, {
                "document_version": document.version,
                "question_length": len(question)
            })
            raise InternalError(
                "An unexpected error occurred while answering the question.",
                code="INTERNAL_ERROR",
                details=error_info if self.settings.debug else None
            ) from e

        self.store.set_last_answer(answer)

        return AnswerResult(
            answer=answer,
            language=language,
            document_version=document.version
        )

    async def quick_action(self, mode: str) -> AnswerResult:
        """Run one of the predefined questions against the current document."""
        question = QUICK_ACTIONS.get(mode)
        if question is None:
            raise InputError(
                f"Unknown quick action: {mode}. Available: {', '.join(QUICK_ACTIONS)}.",
                code="UNKNOWN_MODE"
            )
        return await self.answer(question)

    def last_answer(self) -> Optional[str]:
        return self.store.get_last_answer()

    def health_check(self) -> Dict[str, Any]:
        """
        Report whether a document is loaded.

        Returns:
            Dictionary with health status information
        """
        document = self.store.get()
        info = None
        if document is not None:
            info = {
                "filename": document.filename,
                "pages": document.page_count,
                "characters": document.text_length,
                "version": document.version,
                "loaded_at": document.loaded_at
            }

        return {
            "status": "healthy",
            "document_loaded": self.store.has_document(),
            "document": info
        }
