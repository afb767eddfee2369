"""Shared fixtures."""
from pathlib import Path

import pytest

from bookstore.catalog import Catalog
from bookstore.models import Book

TESTDATA = Path(__file__).resolve().parent.parent / "testdata"

TEST_BOOKS = [
    Book("abc", "In the Company of Cheerful Ladies", "Alexander McCall Smith", 1),
    Book("xyz", "White Heat", "Dominic Sandbrook", 2),
]


@pytest.fixture
def catalog():
    """Catalog holding the two reference books."""
    catalog = Catalog.create_empty()
    for book in TEST_BOOKS:
        catalog.add(book)
    return catalog


@pytest.fixture
def catalog_file(tmp_path):
    """Writable copy of the reference catalog file."""
    path = tmp_path / "catalog.json"
    path.write_bytes((TESTDATA / "catalog.json").read_bytes())
    return path
