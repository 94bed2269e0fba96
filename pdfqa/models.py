"""
Pydantic models for request/response validation.
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .language import Language


class SessionDocument(BaseModel):
    """The currently loaded PDF. Instances are never mutated, only replaced."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Full extracted text")
    filename: str = Field(..., description="Original upload filename")
    page_count: int = Field(..., ge=0, description="Number of pages in the PDF")
    version: int = Field(default=0, ge=0, description="Store-assigned version, increases on every replace")
    loaded_at: Optional[str] = Field(default=None, description="ISO timestamp of the upload")

    @property
    def text_length(self) -> int:
        return len(self.text)


class ExtractedPDF(BaseModel):
    """Raw result of PDF text extraction."""
    text: str
    page_count: int


class IngestResult(BaseModel):
    """Metadata returned after a successful ingestion."""
    filename: str
    page_count: int
    text_length: int
    preview_text: str
    version: int


class AnswerResult(BaseModel):
    """Answer produced for a single question."""
    answer: str
    language: Language
    document_version: int


class AskRequest(BaseModel):
    """Request model for questions."""
    question: Optional[str] = Field(default=None, description="User's question")
    language: Optional[Language] = Field(default=None, description="Force the answer language instead of detecting it")

    @field_validator("language", mode="before")
    @classmethod
    def ignore_unsupported_language(cls, v):
        """Treat "auto" and other unsupported values as no preference."""
        if isinstance(v, str):
            v = v.strip().lower()
            if v not in {language.value for language in Language}:
                return None
        return v


class AskResponse(BaseModel):
    """Response model for questions."""
    ok: bool = Field(default=True)
    answer: str = Field(..., description="Generated answer")
    language: Language = Field(..., description="Language the answer was requested in")
    document_version: int = Field(..., description="Version of the document the answer is grounded on")


class UploadResponse(BaseModel):
    """Response model for PDF upload."""
    ok: bool = Field(default=True)
    message: str = Field(default="PDF uploaded and processed successfully")
    filename: str = Field(..., description="Uploaded filename")
    pages: int = Field(..., description="Number of pages")
    characters: int = Field(..., description="Length of the extracted text")
    preview: str = Field(default="", description="Start of the extracted text")


class LastAnswerResponse(BaseModel):
    """Response model for the most recent answer."""
    ok: bool
    answer: Optional[str] = None
    message: Optional[str] = None


class DocumentInfo(BaseModel):
    """Summary of the loaded document, without its text."""
    filename: str
    pages: int
    characters: int
    version: int
    loaded_at: Optional[str] = None


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str = Field(..., description="Health status")
    document_loaded: bool = Field(..., description="Whether a document is loaded")
    document: Optional[DocumentInfo] = Field(default=None, description="Loaded document metadata")
    version: str = Field(..., description="Application version")
    timestamp: str = Field(..., description="Current timestamp")


class ErrorResponse(BaseModel):
    """Response model for errors."""
    ok: bool = Field(default=False)
    error: str = Field(..., description="Machine readable error code")
    message: str = Field(..., description="Human readable error message")
    details: Optional[Any] = Field(default=None, description="Diagnostic payload, when available")
