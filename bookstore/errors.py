"""Exceptions raised by the catalog."""


class CatalogError(Exception):
    """Base exception for catalog errors."""


class NotFoundError(CatalogError):
    """Requested book ID does not exist in the catalog."""
    
    def __init__(self, book_id: str):
        super().__init__(f"ID {book_id!r} not found")
        self.book_id = book_id


class DuplicateIDError(CatalogError):
    """Trying to add a book whose ID is already taken."""
    
    def __init__(self, book_id: str):
        super().__init__(f"book already exists: {book_id!r}")
        self.book_id = book_id


class NegativeCopiesError(CatalogError, ValueError):
    """Copy count below zero."""
    
    def __init__(self, copies: int):
        super().__init__(f"cannot set copies to negative number: {copies}")
        self.copies = copies


class DecodeError(CatalogError, ValueError):
    """Persisted catalog content is malformed."""


class NoPathError(CatalogError):
    """Sync requested but no file path is known."""
    
    def __init__(self):
        super().__init__("no path given and catalog has no path")


class CatalogIOError(CatalogError):
    """Reading or writing the catalog file failed."""
    
    def __init__(self, path, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
