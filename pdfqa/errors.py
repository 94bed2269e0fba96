"""
Error taxonomy for the AI PDF Reader Backend.

Every failure the service reports carries a stable machine-readable code and
the HTTP status it maps to. Route handlers never build error bodies by hand;
they let these exceptions propagate to the handlers registered in ``main``.
"""

from typing import Any, Dict, Optional


class PDFQAError(Exception):
    """Base class for all errors reported to API callers."""

    status_code: int = 500
    default_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details

    def to_dict(self, include_details: bool = True) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "ok": False,
            "error": self.code,
            "message": self.message,
        }
        if include_details and self.details is not None:
            body["details"] = self.details
        return body

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class InputError(PDFQAError):
    """Missing or invalid input: file, question, quick action mode."""

    status_code = 400
    default_code = "INVALID_REQUEST"


class DocumentStateError(PDFQAError):
    """A question was asked while no document is loaded."""

    status_code = 400
    default_code = "NO_DOCUMENT_LOADED"


class ExtractionError(PDFQAError):
    """The upload could not be parsed or holds no readable text."""

    status_code = 400
    default_code = "NO_READABLE_TEXT"


class ProviderError(PDFQAError):
    """The text generation provider failed or answered with garbage."""

    status_code = 503
    default_code = "PROVIDER_UNAVAILABLE"

    def __init__(self, message: str, code: Optional[str] = None, details: Any = None):
        super().__init__(message, code=code, details=details)
        if self.code == "INVALID_RESPONSE":
            self.status_code = 502


class InternalError(PDFQAError):
    """Unexpected failure inside the service."""

    status_code = 500
    default_code = "INTERNAL_ERROR"
