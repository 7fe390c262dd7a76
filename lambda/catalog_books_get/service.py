"""Book lookup service."""

from catalog_shared.errors import NotFoundError
from catalog_shared.types import Book


class BookLookupService:

    def __init__(self, catalog):
        self.books = catalog.books

    def get_book(self, book_id: str) -> Book:
        """
        Raises:
            NotFoundError: If no book has this id
        """
        book = self.books.find_by_id(book_id)
        if book is None:
            raise NotFoundError(f"Book '{book_id}' not found")
        return book
