"""
Book creation service.

Books get a ULID id and reference their author by name; the repository
resolves the name to the author id embedded in the sort key.
"""

from ulid import ULID

from catalog_shared.clock import format_timestamp
from catalog_shared.types import Book, BookCreateRequest


class BookService:
    """Creates books in the catalog table."""

    def __init__(self, catalog):
        self.books = catalog.books
        self.clock = catalog.clock

    def create_book(self, request: BookCreateRequest) -> Book:
        """
        Raises:
            AuthorNotFoundError: If no author has the requested name
        """
        book: Book = {
            'id': str(ULID()),
            'title': request['title'].strip(),
            'author': request['author'].strip(),
            'createdAt': format_timestamp(self.clock.now()),
        }
        self.books.save(book)
        return book
