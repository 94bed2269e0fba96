"""
Shared fixtures: fake chat model, fake PDF extractor and a PDF builder.
"""

import asyncio
import os

os.environ.setdefault("GOOGLE_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from pdfqa.config import QAConfig, Settings
from pdfqa.models import ExtractedPDF
from pdfqa.services import ChatService, DocumentService, SessionStore


class RecordingChatModel:
    """Stands in for the Gemini chat model and records every prompt."""

    def __init__(self, reply="This document is a contract between A and B."):
        self.reply = reply
        self.calls = []
        self.error = None
        self.delay = 0.0
        self.on_call = None

    async def ainvoke(self, messages, **kwargs):
        self.calls.append(messages)
        if self.on_call:
            self.on_call()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        if isinstance(self.reply, str):
            return AIMessage(content=self.reply)
        return self.reply

    @property
    def last_system_prompt(self):
        return self.calls[-1][0].content

    @property
    def last_user_prompt(self):
        return self.calls[-1][1].content


class FakePDFProcessor:
    """Returns registered extraction results keyed by file content."""

    def __init__(self):
        self.results = {}

    def register(self, content: bytes, text: str, page_count: int = 1) -> bytes:
        self.results[content] = ExtractedPDF(text=text, page_count=page_count)
        return content

    def extract_text(self, file_content: bytes, filename: str) -> ExtractedPDF:
        return self.results[file_content]


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def make_pdf(pages):
    """
    Build a minimal PDF with one line of Helvetica text per page.

    A page given as None or "" gets no content stream at all.
    """
    objects = []
    page_count = len(pages)
    font_id = 3
    first_page_id = 4

    kids = []
    page_objects = []
    next_id = first_page_id
    for text in pages:
        page_id = next_id
        kids.append(f"{page_id} 0 R")
        if text:
            content_id = page_id + 1
            stream = f"BT /F1 12 Tf 72 720 Td ({_escape_pdf_text(text)}) Tj ET"
            page_objects.append((page_id, (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 {font_id} 0 R >> >> /Contents {content_id} 0 R >>"
            )))
            page_objects.append((content_id, (
                f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream"
            )))
            next_id += 2
        else:
            page_objects.append((page_id, (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Resources << >> >>"
            )))
            next_id += 1

    objects.append((1, "<< /Type /Catalog /Pages 2 0 R >>"))
    objects.append((2, f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {page_count} >>"))
    objects.append((font_id, "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"))
    objects.extend(page_objects)
    objects.sort()

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for obj_id, body in objects:
        offsets[obj_id] = len(out)
        out += f"{obj_id} 0 obj\n{body}\nendobj\n".encode("latin-1")

    size = max(offsets) + 1
    xref_offset = len(out)
    out += f"xref\n0 {size}\n".encode("latin-1")
    out += b"0000000000 65535 f \n"
    for obj_id in range(1, size):
        out += f"{offsets[obj_id]:010d} 00000 n \n".encode("latin-1")
    out += f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n".encode("latin-1")
    return bytes(out)


@pytest.fixture
def test_settings():
    return Settings(
        google_api_key="test-key",
        truncation_budget=100,
        preview_chars=50,
        max_file_size_mb=1,
        request_timeout_seconds=2.0
    )


@pytest.fixture
def qa_config(test_settings):
    return QAConfig.from_settings(test_settings)


@pytest.fixture
def fake_llm():
    return RecordingChatModel()


@pytest.fixture
def fake_pdf_processor():
    return FakePDFProcessor()


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def service(store, fake_pdf_processor, fake_llm, qa_config, test_settings):
    return DocumentService(
        store=store,
        pdf_processor=fake_pdf_processor,
        chat_service=ChatService(config=qa_config, llm=fake_llm),
        settings=test_settings
    )


@pytest.fixture
def client(service):
    from pdfqa.main import app, get_document_service

    app.dependency_overrides[get_document_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def pdf_builder():
    return make_pdf
