"""Book index service."""

from catalog_shared.types import BookList


class BookQueryService:
    """Lists every book in the catalog."""

    def __init__(self, catalog):
        self.books = catalog.books

    def list_books(self) -> BookList:
        # Sort key order: grouped by author id, then book id
        return {'books': self.books.find_all()}
