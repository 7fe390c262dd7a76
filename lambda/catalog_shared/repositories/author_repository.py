"""
Author repository.

Authors live one per partition (PK=AUTHOR#{id}, SK=METADATA), so listing
them needs a filtered table scan. Ids are caller-generated UUIDs and saves
overwrite unconditionally.
"""

from boto3.dynamodb.conditions import Attr
from collections import Counter
from typing import Dict, Any, List, Optional

from catalog_shared import keys
from catalog_shared.store import KeyValueStore
from catalog_shared.types import Author, AuthorWithBookCount


class AuthorRepository:
    """Persistence for Author items in the shared catalog table."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def save(self, author: Author) -> None:
        """Create or overwrite an author. No uniqueness check on the id."""
        self.store.put({
            **keys.author_key(author['id']),
            'id': author['id'],
            'name': author['name'],
            'createdAt': author['createdAt'],
        })

    def find_by_id(self, author_id: str) -> Optional[Author]:
        key = keys.author_key(author_id)
        item = self.store.get(key['PK'], key['SK'])
        if item is None:
            return None
        return self._to_author(item)

    def find_all(self) -> List[Author]:
        """All authors, in store-defined order."""
        return [self._to_author(item) for item in self._scan_authors()]

    def delete(self, author_id: str) -> None:
        key = keys.author_key(author_id)
        self.store.delete(key['PK'], key['SK'])

    def find_id_by_name(self, name: str) -> Optional[str]:
        """
        Resolve an author name to its id.

        Linear scan over all authors with exact string match; the first hit
        wins when several authors share a name. This is the only place the
        name->id resolution lives, so a secondary lookup partition can
        replace it without touching callers.
        """
        for author in self.find_all():
            if author['name'] == name:
                return author['id']
        return None

    def get_author_with_book_count(self) -> List[AuthorWithBookCount]:
        """
        Every author with the number of books carrying its name.

        Books reference authors by name, so the join is on the name string:
        authors sharing a name all report the combined count.
        """
        book_items = self.store.query(keys.BOOK_PK)
        counts = Counter(item.get('author') for item in book_items)

        return [
            {'author': author, 'bookCount': counts.get(author['name'], 0)}
            for author in self.find_all()
        ]

    def _scan_authors(self) -> List[Dict[str, Any]]:
        return self.store.scan(
            Attr('PK').begins_with(keys.AUTHOR_PK_PREFIX) & Attr('SK').eq(keys.AUTHOR_SK)
        )

    @staticmethod
    def _to_author(item: Dict[str, Any]) -> Author:
        return {
            'id': item['id'],
            'name': item['name'],
            'createdAt': item['createdAt'],
        }
