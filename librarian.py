#!/usr/bin/env python3
"""Librarian CLI - look up and update books in a catalog file."""
import argparse
import json
import logging
import sys
from typing import List

from tabulate import tabulate

from bookstore.catalog import Catalog
from bookstore.codec import book_to_dict
from bookstore.config import Config
from bookstore.errors import CatalogError
from bookstore.models import Book

logger = logging.getLogger(__name__)


def open_catalog(path: str):
    """Open the catalog, reporting failure to the user."""
    try:
        return Catalog.load(path)
    except CatalogError as e:
        logger.debug(f"Failed to open {path}", exc_info=True)
        print(f"Trouble getting catalog: {e}")
        return None


def find_book(args) -> int:
    """Print a single book."""
    catalog = open_catalog(args.catalog)
    if catalog is None:
        return 1

    book = catalog.get(args.id)
    if book is None:
        print("Sorry, I couldn't find that book in the catalog.")
        return 1

    print(book)
    return 0


def list_books(args) -> int:
    """Print every book."""
    catalog = open_catalog(args.catalog)
    if catalog is None:
        return 1

    books = sorted(catalog.get_all(), key=lambda b: b.id)
    display_books(books, args.format)
    return 0


def update_copies(args) -> int:
    """Set the copy count of a book and save the catalog."""
    catalog = open_catalog(args.catalog)
    if catalog is None:
        return 1

    try:
        catalog.set_copies(args.id, args.copies)
    except CatalogError as e:
        print(f"updating book: {e}")
        return 1

    try:
        catalog.sync()
    except CatalogError as e:
        print(f"writing catalog: {e}")
        return 1

    print(f"Updated book {args.id} to {args.copies} copies")
    return 0


def display_books(books: List[Book], format_type: str):
    """Display books in specified format."""
    if format_type == "table":
        headers = ["ID", "Title", "Author", "Copies"]
        rows = [[book.id, book.title, book.author, book.copies] for book in books]
        print(tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([book_to_dict(book) for book in books], indent=2, ensure_ascii=False))

    else:
        print("Books in stock: ...")
        for book in books:
            print(book)


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="librarian",
        description="Librarian - look up and update books in a catalog file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show one book
  %(prog)s find abc

  # List everything as a table
  %(prog)s list --format table

  # Set the copy count and save
  %(prog)s --catalog books.json copies abc 3
        """
    )
    parser.add_argument(
        "--catalog",
        default=config.CATALOG_PATH,
        help=f"Catalog file (default: {config.CATALOG_PATH})"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Find command
    find_parser = subparsers.add_parser("find", help="Show one book")
    find_parser.add_argument("id", help="Book ID")

    # List command
    list_parser = subparsers.add_parser("list", help="List all books")
    list_parser.add_argument(
        "--format",
        choices=["plain", "table", "json"],
        default=config.LIST_FORMAT,
        help="Output format"
    )

    # Copies command
    copies_parser = subparsers.add_parser("copies", help="Set the number of copies of a book")
    copies_parser.add_argument("id", help="Book ID")
    copies_parser.add_argument("copies", type=int, help="New number of copies")

    return parser


def resolve_log_level(name: str) -> int:
    """Map a level name to its number, falling back to WARNING."""
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {name!r}, using WARNING")
        return logging.WARNING
    return level


COMMANDS = {
    "find": find_book,
    "list": list_books,
    "copies": update_copies,
}


def main(argv=None) -> int:
    """Main CLI entry point."""
    config = Config()
    parser = build_parser(config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else resolve_log_level(config.LOG_LEVEL),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 2

    try:
        return COMMANDS[args.command](args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
