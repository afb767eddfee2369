"""Catalog of books with thread-safe access and file persistence."""
import logging
import os
import stat
import tempfile
from dataclasses import replace
from typing import Dict, List, Optional, Union

from bookstore import codec
from bookstore.errors import (
    CatalogIOError,
    DuplicateIDError,
    NegativeCopiesError,
    NoPathError,
    NotFoundError,
)
from bookstore.locking import create_locks
from bookstore.models import Book

logger = logging.getLogger(__name__)

PathType = Union[str, os.PathLike]

# Mode for newly created catalog files, as open() would apply it
_UMASK = os.umask(0)
os.umask(_UMASK)


class Catalog:
    """
    In-memory table of books keyed by ID.

    Reads (``get``, ``get_all``, ``get_copies``, ``sync``) share the lock;
    writes (``add``, ``set_copies``) hold it exclusively. Books handed in
    or out are copies, so callers never touch stored entries directly.
    """

    def __init__(self, books: Optional[Dict[str, Book]] = None, path: Optional[PathType] = None):
        """
        Initialize a catalog.

        Args:
            books: Initial ID -> Book mapping (keys must match book IDs)
            path: File the catalog was loaded from / syncs to by default

        Raises:
            ValueError: If a key differs from its book's ID
        """
        self._read_lock, self._write_lock = create_locks()
        self._data: Dict[str, Book] = {}
        for book_id, book in (books or {}).items():
            if book_id != book.id:
                raise ValueError(f"key {book_id!r} does not match book id {book.id!r}")
            self._data[book_id] = replace(book)
        self._path = os.fspath(path) if path is not None else None

    @classmethod
    def create_empty(cls) -> "Catalog":
        """Return a catalog with no books and no path."""
        return cls()

    @classmethod
    def load(cls, path: PathType) -> "Catalog":
        """
        Load a catalog from a file written by ``sync``.

        Args:
            path: Catalog file

        Returns:
            Catalog remembering ``path``

        Raises:
            CatalogIOError: If the file cannot be read
            DecodeError: If the content is malformed
        """
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise CatalogIOError(path, e.strerror or str(e)) from e

        books = codec.decode(data)
        logger.info(f"Loaded {len(books)} books from {path}")
        return cls(books, path=path)

    @property
    def path(self) -> Optional[str]:
        """File the catalog is associated with, if any."""
        return self._path

    def add(self, book: Book):
        """
        Add a new book.

        Args:
            book: Book to insert under ``book.id``

        Raises:
            DuplicateIDError: If the ID is already present
            NegativeCopiesError: If the book has a negative copy count
        """
        if book.copies < 0:
            raise NegativeCopiesError(book.copies)
        with self._write_lock:
            if book.id in self._data:
                raise DuplicateIDError(book.id)
            self._data[book.id] = replace(book)
        logger.debug(f"Added book {book.id!r}")

    def get(self, book_id: str) -> Optional[Book]:
        """Get a book by ID, or None if there is no such book."""
        with self._read_lock:
            book = self._data.get(book_id)
            return replace(book) if book is not None else None

    def get_all(self) -> List[Book]:
        """
        Get every book.

        Returns:
            Snapshot list of books in no particular order
        """
        with self._read_lock:
            return [replace(book) for book in self._data.values()]

    def get_copies(self, book_id: str) -> int:
        """
        Get the number of copies of a book.

        Raises:
            NotFoundError: If the ID is unknown
        """
        with self._read_lock:
            book = self._data.get(book_id)
            if book is None:
                raise NotFoundError(book_id)
            return book.copies

    def set_copies(self, book_id: str, copies: int):
        """
        Set the number of copies of a book.

        Negative counts are rejected before the ID is looked up.

        Args:
            book_id: Book to update
            copies: New copy count

        Raises:
            NegativeCopiesError: If copies is below zero
            NotFoundError: If the ID is unknown
        """
        if copies < 0:
            raise NegativeCopiesError(copies)
        with self._write_lock:
            book = self._data.get(book_id)
            if book is None:
                raise NotFoundError(book_id)
            updated = replace(book)
            updated.set_copies(copies)
            self._data[book_id] = updated
        logger.debug(f"Set copies of {book_id!r} to {copies}")

    def sync(self, path: Optional[PathType] = None):
        """
        Write the whole catalog to disk.

        The snapshot is taken under one lock acquisition, then written to a
        temporary file that replaces the destination.

        Args:
            path: Destination (defaults to the catalog's own path)

        Raises:
            NoPathError: If neither ``path`` nor the catalog's path is set
            CatalogIOError: If writing fails
        """
        target = os.fspath(path) if path is not None else self._path
        if target is None:
            raise NoPathError()

        with self._read_lock:
            data = codec.encode(self._data)
            count = len(self._data)

        _atomic_write(target, data)
        logger.info(f"Synced {count} books to {target}")

    def __len__(self) -> int:
        with self._read_lock:
            return len(self._data)

    def __contains__(self, book_id) -> bool:
        with self._read_lock:
            return book_id in self._data


def _atomic_write(path: str, data: bytes):
    # Write through symlinks and keep the existing file's permissions
    target = os.path.realpath(path)
    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        mode = 0o666 & ~_UMASK
    except OSError as e:
        raise CatalogIOError(path, e.strerror or str(e)) from e

    directory = os.path.dirname(target) or "."
    try:
        fd, tmp = tempfile.mkstemp(dir=directory, prefix=".catalog-", suffix=".tmp")
    except OSError as e:
        raise CatalogIOError(path, e.strerror or str(e)) from e
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, mode)
        os.replace(tmp, target)
    except OSError as e:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise CatalogIOError(path, e.strerror or str(e)) from e
