"""
Author deletion service.

Books keep their author name after the author item is gone; there is no
cascade across entities.
"""

from catalog_shared.errors import NotFoundError
from catalog_shared.types import Author


class AuthorDeletionService:
    """Deletes authors by id."""

    def __init__(self, catalog):
        self.authors = catalog.authors

    def delete_author(self, author_id: str) -> Author:
        """
        Delete an author and return what was deleted.

        Raises:
            NotFoundError: If no author has this id
        """
        author = self.authors.find_by_id(author_id)
        if author is None:
            raise NotFoundError(f"Author '{author_id}' not found")

        self.authors.delete(author_id)
        return author
