"""
Tests for the single-document session store.
"""

import threading

import pytest
from pydantic import ValidationError

from pdfqa.services import SessionStore


def test_empty_store():
    store = SessionStore()
    assert store.get() is None
    assert store.has_document() is False
    assert store.get_last_answer() is None


def test_replace_sets_all_fields_together():
    store = SessionStore()
    document = store.replace(text="Contract between A and B", filename="a.pdf", page_count=3)

    assert store.get() is document
    assert document.filename == "a.pdf"
    assert document.page_count == 3
    assert document.text_length == len("Contract between A and B")
    assert document.version == 1
    assert document.loaded_at is not None


def test_second_replace_supersedes_first():
    store = SessionStore()
    first = store.replace(text="first", filename="first.pdf", page_count=1)
    second = store.replace(text="second", filename="second.pdf", page_count=2)

    assert store.get() is second
    assert second.version == first.version + 1
    # Earlier snapshots are untouched
    assert first.text == "first"
    assert first.filename == "first.pdf"


def test_snapshot_is_immutable():
    store = SessionStore()
    document = store.replace(text="text", filename="a.pdf", page_count=1)
    with pytest.raises(ValidationError):
        document.text = "changed"
    assert store.get().text == "text"


def test_whitespace_document_is_not_loaded():
    store = SessionStore()
    store.replace(text="   \n", filename="blank.pdf", page_count=1)
    assert store.has_document() is False


def test_last_answer_last_write_wins():
    store = SessionStore()
    store.set_last_answer("one")
    store.set_last_answer("two")
    assert store.get_last_answer() == "two"


def test_concurrent_replaces_produce_unique_versions():
    store = SessionStore()
    versions = []
    lock = threading.Lock()

    def worker(i):
        document = store.replace(text=f"doc {i}", filename=f"{i}.pdf", page_count=1)
        with lock:
            versions.append(document.version)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(versions) == list(range(1, 21))
    assert store.get().version in versions
