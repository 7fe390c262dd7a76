"""Author index service."""

from catalog_shared.types import AuthorList


class AuthorQueryService:
    """Lists every author in the catalog."""

    def __init__(self, catalog):
        self.authors = catalog.authors

    def list_authors(self) -> AuthorList:
        """
        All authors ordered by name, then id.

        The repository scan returns items in store order, which is not
        stable between calls.
        """
        authors = self.authors.find_all()
        authors.sort(key=lambda author: (author['name'], author['id']))
        return {'authors': authors}
