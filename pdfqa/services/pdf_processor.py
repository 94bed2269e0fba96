"""
PDF processing service for extracting text from PDF files.
"""

import PyPDF2
from io import BytesIO

from ..errors import ExtractionError
from ..models import ExtractedPDF
from ..utils import (
    measure_time,
    log_processing_info,
    handle_processing_error
)
import logging

logger = logging.getLogger(__name__)


class PDFProcessor:
    """Service for processing PDF files and extracting text."""

    @measure_time
    def extract_text(self, file_content: bytes, filename: str) -> ExtractedPDF:
        """
        Extract the full text of a PDF.

        Args:
            file_content: PDF file content as bytes
            filename: Name of the PDF file

        Returns:
            ExtractedPDF with the page texts joined by newlines

        Raises:
            ExtractionError: If the bytes are not a readable PDF
        """
        try:
            pdf_reader = PyPDF2.PdfReader(BytesIO(file_content))
            total_pages = len(pdf_reader.pages)
        except Exception as e:
            error_info = handle_processing_error(
                "pdf_open",
                e,
                {"filename": filename, "file_size": len(file_content)}
            )
            raise ExtractionError(
                f"Could not read {filename} as a PDF file.",
                code="INVALID_PDF",
                details={"error_type": error_info["error_type"]}
            ) from e

        log_processing_info("PDF extraction started", {
            "filename": filename,
            "total_pages": total_pages,
            "file_size": len(file_content)
        })

        page_texts = []
        skipped_pages = 0
        for page_num, page in enumerate(pdf_reader.pages):
            try:
                page_text = page.extract_text()
            except Exception as page_error:
                error_info = handle_processing_error(
                    "page_extraction",
                    page_error,
                    {"filename": filename, "page": page_num + 1}
                )
                logger.warning(f"Skipping page {page_num + 1}: {error_info}")
                skipped_pages += 1
                continue

            if page_text:
                page_texts.append(page_text)

        text = "\n".join(page_texts)

        log_processing_info("PDF extraction completed", {
            "filename": filename,
            "total_pages": total_pages,
            "pages_with_text": len(page_texts),
            "skipped_pages": skipped_pages,
            "text_length": len(text)
        })

        return ExtractedPDF(text=text, page_count=total_pages)
