"""
Book repository.

All books share one partition (PK=BOOK-METADATA). The sort key embeds the
owning author's id (AUTHOR#{authorId}#BOOK#{id}) while the item's author
attribute carries the author's name, so saving and deleting a book first
resolve the name back to an id through the author repository.

The single partition is a scalability boundary: partition throughput and
size limits apply to the whole catalog, not per author.
"""

from boto3.dynamodb.conditions import Attr
from collections import Counter
from typing import Dict, Any, List, Optional

from catalog_shared import keys
from catalog_shared.clock import parse_timestamp
from catalog_shared.errors import AuthorNotFoundError
from catalog_shared.repositories.author_repository import AuthorRepository
from catalog_shared.store import KeyValueStore
from catalog_shared.types import Book


RECENT_BOOKS_COUNT = 5
DEFAULT_RECENT_SCAN_LIMIT = 500


class BookRepository:
    """Persistence for Book items in the shared catalog table."""

    def __init__(
        self,
        store: KeyValueStore,
        author_repository: AuthorRepository,
        recent_scan_limit: int = DEFAULT_RECENT_SCAN_LIMIT
    ):
        """
        Args:
            store: Key-value store client
            author_repository: Used to resolve author names to ids
            recent_scan_limit: Maximum number of books read by find_last_five()
        """
        self.store = store
        self.author_repository = author_repository
        self.recent_scan_limit = recent_scan_limit

    def save(self, book: Book) -> None:
        """
        Create or overwrite a book.

        Raises:
            AuthorNotFoundError: If no author carries the book's author name
        """
        author_id = self._resolve_author_id(book['author'])

        self.store.put({
            **keys.book_key(author_id, book['id']),
            'id': book['id'],
            'title': book['title'],
            'author': book['author'],
            'createdAt': book['createdAt'],
        })

    def find_by_id(self, book_id: str) -> Optional[Book]:
        """
        Find a book without knowing its author.

        The author id segment of the sort key is unknown here, so this scans
        the table for a sort key containing #BOOK#{id}. The match must end
        with that segment so that 'B1' never resolves to 'B10'.
        """
        item = self._find_item(book_id)
        if item is None:
            return None
        return self._to_book(item)

    def find_all(self) -> List[Book]:
        """All books in sort key order (grouped by author id)."""
        return [self._to_book(item) for item in self.store.query(keys.BOOK_PK)]

    def find_last_five(self) -> List[Book]:
        """
        The five most recently created books, newest first.

        Reads at most recent_scan_limit books from the partition before
        sorting in memory. When the catalog holds more books than that,
        the result is only the newest of the books read.
        """
        items = self.store.query(keys.BOOK_PK, limit=self.recent_scan_limit)
        books = [self._to_book(item) for item in items]
        books.sort(key=lambda book: parse_timestamp(book['createdAt']), reverse=True)
        return books[:RECENT_BOOKS_COUNT]

    def delete(self, book_id: str) -> None:
        """Delete a book by id. No-op when the book does not exist."""
        item = self._find_item(book_id)
        if item is None:
            return

        # The stored sort key already carries the author id segment
        self.store.delete(item['PK'], item['SK'])

    def get_author_stats(self) -> Dict[str, int]:
        """Number of books per author name."""
        items = self.store.query(keys.BOOK_PK)
        return dict(Counter(item['author'] for item in items))

    def _find_item(self, book_id: str) -> Optional[Dict[str, Any]]:
        fragment = keys.book_id_fragment(book_id)
        return self.store.scan_first(
            Attr('PK').eq(keys.BOOK_PK) & Attr('SK').contains(fragment),
            predicate=lambda item: item['SK'].endswith(fragment)
        )

    def _resolve_author_id(self, author_name: str) -> str:
        author_id = self.author_repository.find_id_by_name(author_name)
        if author_id is None:
            raise AuthorNotFoundError(author_name)
        return author_id

    @staticmethod
    def _to_book(item: Dict[str, Any]) -> Book:
        return {
            'id': item['id'],
            'title': item['title'],
            'author': item['author'],
            'createdAt': item['createdAt'],
        }
