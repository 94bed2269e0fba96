"""
FastAPI application for the AI PDF Reader Backend.
"""

from typing import Optional
from fastapi import Body, Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .config import settings, validate_required_settings
from .errors import InputError, PDFQAError
from .models import (
    AskRequest, AskResponse, UploadResponse, LastAnswerResponse,
    HealthResponse, DocumentInfo, ErrorResponse
)
from .services import DocumentService
from .utils import format_timestamp

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Validate required settings on startup
try:
    validate_required_settings()
except ValueError as e:
    logger.error(f"Configuration validation failed: {e}")
    raise

# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Upload a PDF and ask questions about it",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.allowed_origin],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services
document_service = DocumentService()


def get_document_service() -> DocumentService:
    return document_service


@app.exception_handler(PDFQAError)
async def pdfqa_exception_handler(request: Request, exc: PDFQAError):
    """Translate service errors into the JSON error body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r} details={exc.details}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc!r}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies with the service's error shape."""
    error = InputError("Malformed request.", code="INVALID_REQUEST", details=_jsonable_errors(exc))
    logger.warning(f"{request.method} {request.url.path} rejected: {error!r}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="INTERNAL_ERROR",
            message=str(exc) if settings.debug else "An unexpected error occurred"
        ).model_dump()
    )


def _jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


@app.get("/", response_model=dict)
async def root():
    """Root endpoint."""
    return {
        "message": "AI PDF Reader API is running",
        "version": settings.app_version,
        "timestamp": format_timestamp()
    }


@app.get("/api/health", response_model=HealthResponse)
async def health_check(service: DocumentService = Depends(get_document_service)):
    """Report service status and whether a document is loaded."""
    health_info = service.health_check()
    document = health_info.get("document")

    return HealthResponse(
        status=health_info.get("status", "unknown"),
        document_loaded=health_info.get("document_loaded", False),
        document=DocumentInfo(**document) if document else None,
        version=settings.app_version,
        timestamp=format_timestamp()
    )


@app.post("/api/upload", response_model=UploadResponse)
async def upload_pdf(
    pdf: Optional[UploadFile] = File(default=None),
    service: DocumentService = Depends(get_document_service)
):
    """
    Upload a PDF and make it the current document.

    The PDF is processed directly from memory without storing it on disk.
    """
    if pdf is None:
        raise InputError("No PDF file provided.", code="NO_FILE")

    # Multipart parsing already knows the size; skip reading oversized files
    service.check_upload_size(pdf.size, pdf.filename)

    content = await pdf.read()
    result = await service.ingest(content, pdf.filename)

    return UploadResponse(
        filename=result.filename,
        pages=result.page_count,
        characters=result.text_length,
        preview=result.preview_text
    )


@app.post("/api/ask", response_model=AskResponse)
async def ask_question(
    request: AskRequest = Body(..., description="Question payload"),
    service: DocumentService = Depends(get_document_service)
):
    """Answer a question about the current document."""
    result = await service.answer(request.question, language=request.language)

    return AskResponse(
        answer=result.answer,
        language=result.language,
        document_version=result.document_version
    )


@app.post("/api/quick-action/{mode}", response_model=AskResponse)
async def quick_action(mode: str, service: DocumentService = Depends(get_document_service)):
    """Run a predefined question such as a summary or key insights."""
    result = await service.quick_action(mode)

    return AskResponse(
        answer=result.answer,
        language=result.language,
        document_version=result.document_version
    )


@app.get("/api/last-answer", response_model=LastAnswerResponse, response_model_exclude_none=True)
async def last_answer(service: DocumentService = Depends(get_document_service)):
    """Return the most recent answer."""
    answer = service.last_answer()
    if not answer:
        return LastAnswerResponse(ok=False, message="No answer yet.")

    return LastAnswerResponse(ok=True, answer=answer)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "pdfqa.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
