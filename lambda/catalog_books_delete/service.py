"""Book deletion service."""

from catalog_shared.errors import NotFoundError
from catalog_shared.types import Book


class BookDeletionService:
    """Deletes books by id."""

    def __init__(self, catalog):
        self.books = catalog.books

    def delete_book(self, book_id: str) -> Book:
        """
        Delete a book and return what was deleted.

        Raises:
            NotFoundError: If no book has this id
        """
        book = self.books.find_by_id(book_id)
        if book is None:
            raise NotFoundError(f"Book '{book_id}' not found")

        self.books.delete(book_id)
        return book
