"""Bookstore - a small thread-safe book catalog with JSON persistence."""
from bookstore.catalog import Catalog
from bookstore.errors import (
    CatalogError,
    CatalogIOError,
    DecodeError,
    DuplicateIDError,
    NegativeCopiesError,
    NoPathError,
    NotFoundError,
)
from bookstore.models import Book

__all__ = [
    "Book",
    "Catalog",
    "CatalogError",
    "CatalogIOError",
    "DecodeError",
    "DuplicateIDError",
    "NegativeCopiesError",
    "NoPathError",
    "NotFoundError",
]
