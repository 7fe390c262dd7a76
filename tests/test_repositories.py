"""
Unit tests for the entity repositories against an in-process DynamoDB.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import boto3
import pytest

from catalog_shared.errors import AlreadyExistsError, AuthorNotFoundError
from catalog_shared.repositories.user_repository import UserRepository
from catalog_shared.store import KeyValueStore


def make_author(author_id, name, created_at='2024-01-01T10:00:00Z'):
    return {'id': author_id, 'name': name, 'createdAt': created_at}


def make_book(book_id, title, author, created_at='2024-01-01T10:00:00Z'):
    return {'id': book_id, 'title': title, 'author': author, 'createdAt': created_at}


class TestAuthorRepository:
    """Author items: PK=AUTHOR#{id}, SK=METADATA."""

    def test_save_then_find_by_id(self, catalog):
        author = make_author('a-1', 'Jane Doe')
        catalog.authors.save(author)

        assert catalog.authors.find_by_id('a-1') == author

    def test_find_by_id_missing_returns_none(self, catalog):
        assert catalog.authors.find_by_id('nope') is None

    def test_item_layout(self, catalog, table):
        catalog.authors.save(make_author('a-1', 'Jane Doe'))

        item = table.get_item(Key={'PK': 'AUTHOR#a-1', 'SK': 'METADATA'})['Item']
        assert item['name'] == 'Jane Doe'
        assert item['createdAt'] == '2024-01-01T10:00:00Z'

    def test_save_overwrites(self, catalog):
        catalog.authors.save(make_author('a-1', 'Jane Doe'))
        catalog.authors.save(make_author('a-1', 'Jane Roe'))

        assert catalog.authors.find_by_id('a-1')['name'] == 'Jane Roe'

    def test_find_all_returns_only_authors(self, catalog):
        catalog.authors.save(make_author('a-1', 'Jane Doe'))
        catalog.authors.save(make_author('a-2', 'John Roe'))
        catalog.books.save(make_book('b-1', 'Book', 'Jane Doe'))
        catalog.users.create('reader@example.com', 'hash')

        authors = catalog.authors.find_all()

        assert sorted(a['id'] for a in authors) == ['a-1', 'a-2']

    def test_delete_is_idempotent(self, catalog):
        catalog.authors.save(make_author('a-1', 'Jane Doe'))

        catalog.authors.delete('a-1')
        catalog.authors.delete('a-1')

        assert catalog.authors.find_by_id('a-1') is None

    def test_find_id_by_name_exact_match(self, catalog):
        catalog.authors.save(make_author('a-1', 'Jane Doe'))

        assert catalog.authors.find_id_by_name('Jane Doe') == 'a-1'
        assert catalog.authors.find_id_by_name('jane doe') is None
        assert catalog.authors.find_id_by_name('Jane') is None

    def test_author_with_book_count(self, catalog):
        catalog.authors.save(make_author('a-1', 'Jane Doe'))
        catalog.authors.save(make_author('a-2', 'John Roe'))
        catalog.authors.save(make_author('a-3', 'No Books'))
        for book_id in ('b-1', 'b-2', 'b-3'):
            catalog.books.save(make_book(book_id, f'Title {book_id}', 'Jane Doe'))
        catalog.books.save(make_book('b-4', 'Other', 'John Roe'))

        counts = {
            row['author']['name']: row['bookCount']
            for row in catalog.authors.get_author_with_book_count()
        }

        assert counts == {'Jane Doe': 3, 'John Roe': 1, 'No Books': 0}

    def test_author_with_book_count_empty_catalog(self, catalog):
        assert catalog.authors.get_author_with_book_count() == []


class TestBookRepository:
    """Book items: PK=BOOK-METADATA, SK=AUTHOR#{authorId}#BOOK#{id}."""

    @pytest.fixture(autouse=True)
    def authors(self, catalog):
        catalog.authors.save(make_author('a-1', 'Jane Doe'))
        catalog.authors.save(make_author('a-2', 'John Roe'))

    def test_save_find_delete_round_trip(self, catalog, table):
        book = make_book('B1', 'Dune', 'Jane Doe')
        catalog.books.save(book)

        item = table.get_item(Key={'PK': 'BOOK-METADATA', 'SK': 'AUTHOR#a-1#BOOK#B1'})['Item']
        assert item['title'] == 'Dune'
        assert catalog.books.find_by_id('B1') == book

        catalog.books.delete('B1')

        assert catalog.books.find_by_id('B1') is None
        assert 'Item' not in table.get_item(Key={'PK': 'BOOK-METADATA', 'SK': 'AUTHOR#a-1#BOOK#B1'})

    def test_save_with_unknown_author_raises(self, catalog):
        with pytest.raises(AuthorNotFoundError) as exc_info:
            catalog.books.save(make_book('B1', 'Dune', 'Nobody'))

        assert exc_info.value.code == 'AUTHOR_NOT_FOUND'
        assert exc_info.value.details == {'author': 'Nobody'}
        assert catalog.books.find_all() == []

    def test_find_by_id_does_not_match_id_prefix(self, catalog):
        catalog.books.save(make_book('B10', 'Ten', 'Jane Doe'))

        assert catalog.books.find_by_id('B1') is None
        assert catalog.books.find_by_id('B10')['title'] == 'Ten'

    def test_delete_missing_book_is_noop(self, catalog):
        catalog.books.save(make_book('B1', 'Dune', 'Jane Doe'))

        catalog.books.delete('B2')

        assert len(catalog.books.find_all()) == 1

    def test_delete_after_author_renamed(self, catalog):
        catalog.books.save(make_book('B1', 'Dune', 'Jane Doe'))
        catalog.authors.save(make_author('a-1', 'Jane Q. Doe'))

        catalog.books.delete('B1')

        assert catalog.books.find_by_id('B1') is None

    def test_find_all(self, catalog):
        catalog.books.save(make_book('B1', 'One', 'Jane Doe'))
        catalog.books.save(make_book('B2', 'Two', 'John Roe'))

        assert sorted(b['id'] for b in catalog.books.find_all()) == ['B1', 'B2']

    def test_get_author_stats(self, catalog):
        for book_id in ('B1', 'B2', 'B3'):
            catalog.books.save(make_book(book_id, book_id, 'Jane Doe'))
        catalog.books.save(make_book('B4', 'B4', 'John Roe'))

        assert catalog.books.get_author_stats() == {'Jane Doe': 3, 'John Roe': 1}

    def test_get_author_stats_empty(self, catalog):
        assert catalog.books.get_author_stats() == {}

    def test_find_last_five_returns_all_when_few(self, catalog):
        catalog.books.save(make_book('B1', 'Old', 'Jane Doe', '2024-01-01T10:00:00Z'))
        catalog.books.save(make_book('B2', 'New', 'John Roe', '2024-03-01T10:00:00Z'))
        catalog.books.save(make_book('B3', 'Mid', 'Jane Doe', '2024-02-01T10:00:00Z'))

        recent = catalog.books.find_last_five()

        assert [b['id'] for b in recent] == ['B2', 'B3', 'B1']

    def test_find_last_five_keeps_newest(self, catalog):
        for day in range(1, 9):
            catalog.books.save(
                make_book(f'B{day}', f'Day {day}', 'Jane Doe', f'2024-01-0{day}T00:00:00Z')
            )

        recent = catalog.books.find_last_five()

        assert [b['id'] for b in recent] == ['B8', 'B7', 'B6', 'B5', 'B4']

    def test_find_last_five_empty(self, catalog):
        assert catalog.books.find_last_five() == []


class TestUserRepository:
    """User items: PK=USER, SK=EMAIL#{lowercased email}."""

    def test_create_then_find_case_insensitive(self, catalog):
        catalog.users.create('Test@Example.com', 'hash-1')

        user = catalog.users.find_by_email('test@EXAMPLE.com')

        assert user is not None
        assert user['email'] == 'test@example.com'
        assert user['passwordHash'] == 'hash-1'

    def test_created_at_is_epoch_seconds(self, catalog, clock):
        user = catalog.users.create('reader@example.com', 'hash')

        assert user['createdAt'] == clock.epoch_seconds()
        assert catalog.users.find_by_email('reader@example.com')['createdAt'] == clock.epoch_seconds()

    def test_duplicate_create_raises_and_keeps_first(self, catalog):
        catalog.users.create('reader@example.com', 'first')

        with pytest.raises(AlreadyExistsError) as exc_info:
            catalog.users.create('READER@example.com', 'second')

        assert exc_info.value.code == 'ALREADY_EXISTS'
        assert catalog.users.find_by_email('reader@example.com')['passwordHash'] == 'first'

    @pytest.mark.parametrize('email', ['race@example.com', 'Race.Two@Example.com'])
    def test_concurrent_creates_exactly_one_wins(self, dynamodb, table, clock, email):
        region = dynamodb.meta.client.meta.region_name
        barrier = threading.Barrier(2)

        def register(password_hash):
            # boto3 resources are not thread-safe, so each writer gets its own
            resource = boto3.session.Session().resource('dynamodb', region_name=region)
            users = UserRepository(KeyValueStore(table.name, dynamodb=resource), clock)
            barrier.wait()
            try:
                users.create(email, password_hash)
            except AlreadyExistsError:
                return None
            return password_hash

        with ThreadPoolExecutor(max_workers=2) as pool:
            outcomes = list(pool.map(register, ['hash-a', 'hash-b']))

        winners = [outcome for outcome in outcomes if outcome is not None]
        assert len(winners) == 1
        assert outcomes.count(None) == 1

        stored = UserRepository(KeyValueStore(table.name, dynamodb=dynamodb), clock).find_by_email(email)
        assert stored['passwordHash'] == winners[0]

    def test_find_missing_returns_none(self, catalog):
        assert catalog.users.find_by_email('nobody@example.com') is None

    def test_item_without_password_hash_is_ignored(self, catalog, table):
        table.put_item(Item={'PK': 'USER', 'SK': 'EMAIL#broken@example.com', 'email': 'broken@example.com'})

        assert catalog.users.find_by_email('broken@example.com') is None
