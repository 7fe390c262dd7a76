"""Author lookup service."""

from catalog_shared.errors import NotFoundError
from catalog_shared.types import Author


class AuthorLookupService:

    def __init__(self, catalog):
        self.authors = catalog.authors

    def get_author(self, author_id: str) -> Author:
        """
        Raises:
            NotFoundError: If no author has this id
        """
        author = self.authors.find_by_id(author_id)
        if author is None:
            raise NotFoundError(f"Author '{author_id}' not found")
        return author
