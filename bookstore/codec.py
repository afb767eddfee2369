"""Encode and decode catalog snapshots (JSON)."""
import json
import logging
from typing import Any, Dict, Mapping

from bookstore.errors import DecodeError
from bookstore.models import Book

logger = logging.getLogger(__name__)

FIELDS = ("id", "title", "author", "copies")


def book_to_dict(book: Book) -> Dict[str, Any]:
    """Serialize a book, keeping field order stable."""
    return {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "copies": book.copies,
    }


def encode(books: Mapping[str, Book]) -> bytes:
    """
    Encode a full ID -> Book mapping.

    Keys are written in sorted order and every entry repeats its ID
    inside the object, so the same mapping always yields the same bytes.

    Args:
        books: Mapping of book ID to Book

    Returns:
        UTF-8 encoded JSON, newline terminated
    """
    data = {book_id: book_to_dict(books[book_id]) for book_id in sorted(books)}
    return (json.dumps(data, ensure_ascii=False, separators=(",", ":")) + "\n").encode("utf-8")


def _fold_keys(item: Dict[str, Any]) -> Dict[str, Any]:
    # Historical files use ID/Title/Author/Copies; an exact-case name wins
    folded = {}
    exact = set()
    for name, value in item.items():
        lowered = name.lower()
        if lowered not in FIELDS:
            continue
        if name == lowered:
            folded[lowered] = value
            exact.add(lowered)
        elif lowered not in exact:
            folded[lowered] = value
    return folded


def parse_book(book_id: str, item: Any) -> Book:
    """
    Parse one entry of a persisted catalog.

    The outer key is authoritative: an embedded ``id`` that disagrees
    with it is overwritten.

    Args:
        book_id: Outer mapping key
        item: Decoded JSON value stored under that key

    Returns:
        Book object

    Raises:
        DecodeError: If the entry does not have the expected shape
    """
    if not isinstance(item, dict):
        raise DecodeError(f"entry {book_id!r}: expected object, got {type(item).__name__}")

    fields = _fold_keys(item)

    for name in ("id", "title", "author"):
        value = fields.get(name, "")
        if not isinstance(value, str):
            raise DecodeError(f"entry {book_id!r}: field {name!r} must be a string")

    copies = fields.get("copies", 0)
    if isinstance(copies, bool) or not isinstance(copies, int):
        raise DecodeError(f"entry {book_id!r}: field 'copies' must be an integer")
    if copies < 0:
        raise DecodeError(f"entry {book_id!r}: negative copies ({copies})")

    embedded_id = fields.get("id")
    if embedded_id is not None and embedded_id != book_id:
        logger.warning(f"Entry {book_id!r} carries id {embedded_id!r}; using {book_id!r}")

    return Book(
        id=book_id,
        title=fields.get("title", ""),
        author=fields.get("author", ""),
        copies=copies
    )


def decode(data: bytes) -> Dict[str, Book]:
    """
    Decode a persisted catalog.

    Args:
        data: Raw file content

    Returns:
        Mapping of book ID to Book

    Raises:
        DecodeError: If the content is not a well-formed catalog
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DecodeError(f"catalog is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise DecodeError(f"catalog is not valid JSON: {e}") from e

    if not isinstance(raw, dict):
        raise DecodeError(f"expected object at top level, got {type(raw).__name__}")

    return {book_id: parse_book(book_id, item) for book_id, item in raw.items()}
