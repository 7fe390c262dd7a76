"""Author creation service."""

import uuid

from catalog_shared.clock import format_timestamp
from catalog_shared.types import Author, AuthorCreateRequest


class AuthorService:
    """Creates authors in the catalog table."""

    def __init__(self, catalog):
        self.authors = catalog.authors
        self.clock = catalog.clock

    def create_author(self, request: AuthorCreateRequest) -> Author:
        """
        Create an author with a UUID4 id.

        Names are not unique: a second author with the same name is a
        separate item.
        """
        author: Author = {
            'id': str(uuid.uuid4()),
            'name': request['name'].strip(),
            'createdAt': format_timestamp(self.clock.now()),
        }
        self.authors.save(author)
        return author
