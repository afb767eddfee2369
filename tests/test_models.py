"""Tests for the Book model."""
import pytest

from bookstore.errors import NegativeCopiesError
from bookstore.models import Book


def test_render_formats_book_info():
    """Test rendering title, author and copies."""
    book = Book(id="", title="Sea Room", author="Adam Nicolson", copies=2)
    
    assert book.render() == "Sea Room by Adam Nicolson (copies: 2)"
    assert str(book) == "Sea Room by Adam Nicolson (copies: 2)"


def test_set_copies_updates_count():
    book = Book("test", copies=5)
    
    book.set_copies(12)
    
    assert book.copies == 12


def test_set_copies_accepts_zero():
    book = Book("test", copies=5)
    
    book.set_copies(0)
    
    assert book.copies == 0


def test_set_copies_rejects_negative():
    """Test that a negative count is refused and nothing changes."""
    book = Book("test", copies=1)
    
    with pytest.raises(NegativeCopiesError) as excinfo:
        book.set_copies(-1)
    
    assert excinfo.value.copies == -1
    assert book.copies == 1


def test_negative_copies_error_is_value_error():
    with pytest.raises(ValueError):
        Book("test").set_copies(-3)
