"""
Tests for CSRF token storage and the per-session token manager.
"""

import pytest

from catalog_shared.csrf import CsrfTokenManager, token_id_for
from catalog_shared.errors import CsrfTokenError


class TestCsrfTokenRepository:
    """Token items: PK=CSRF-TOKEN, SK=CSRF#{tokenId}."""

    def test_issue_then_get(self, catalog):
        catalog.csrf_tokens.issue('register', 'value-1')

        assert catalog.csrf_tokens.get('register') == 'value-1'
        assert catalog.csrf_tokens.has('register') is True

    def test_get_missing_is_empty_string(self, catalog):
        assert catalog.csrf_tokens.get('missing') == ''
        assert catalog.csrf_tokens.has('missing') is False

    def test_consume_returns_value_and_deletes(self, catalog):
        catalog.csrf_tokens.issue('register', 'value-1')

        assert catalog.csrf_tokens.consume('register') == 'value-1'
        assert catalog.csrf_tokens.get('register') == ''

    def test_consume_missing_has_no_side_effects(self, catalog, table):
        catalog.csrf_tokens.issue('other', 'value-1')

        assert catalog.csrf_tokens.consume('register') is None
        assert table.scan()['Count'] == 1

    def test_issue_replaces_token(self, catalog):
        catalog.csrf_tokens.issue('register', 'first')
        catalog.csrf_tokens.issue('register', 'second')

        assert catalog.csrf_tokens.get('register') == 'second'

    def test_item_layout(self, catalog, table, clock):
        catalog.csrf_tokens.issue('register', 'value-1')

        item = table.get_item(Key={'PK': 'CSRF-TOKEN', 'SK': 'CSRF#register'})['Item']
        assert item['token'] == 'value-1'
        assert int(item['expiresAt']) == clock.epoch_seconds() + 360

    def test_expired_token_reads_empty(self, catalog, clock):
        catalog.csrf_tokens.issue('register', 'value-1')

        clock.advance(360)

        assert catalog.csrf_tokens.get('register') == ''
        assert catalog.csrf_tokens.consume('register') is None

    def test_non_string_token_reads_empty(self, catalog, table):
        table.put_item(Item={'PK': 'CSRF-TOKEN', 'SK': 'CSRF#odd', 'token': 42})

        assert catalog.csrf_tokens.get('odd') == ''

    def test_clear_is_noop(self, catalog):
        catalog.csrf_tokens.issue('register', 'value-1')

        catalog.csrf_tokens.clear()

        assert catalog.csrf_tokens.get('register') == 'value-1'


class TestCsrfTokenManager:
    """Tokens scoped to a session and an intention."""

    @pytest.fixture
    def manager(self, catalog):
        return CsrfTokenManager(catalog.csrf_tokens)

    def test_get_token_is_stable_until_refreshed(self, manager):
        first = manager.get_token('sid-1', 'book_new')

        assert manager.get_token('sid-1', 'book_new') == first
        assert manager.refresh_token('sid-1', 'book_new') != first

    def test_token_is_stored_under_session_and_intention(self, manager, catalog):
        token = manager.get_token('sid-1', 'book_new')

        assert catalog.csrf_tokens.get(token_id_for('sid-1', 'book_new')) == token

    def test_tokens_are_scoped(self, manager):
        token = manager.get_token('sid-1', 'book_new')

        assert manager.is_token_valid('sid-1', 'book_new', token)
        assert not manager.is_token_valid('sid-2', 'book_new', token)
        assert not manager.is_token_valid('sid-1', 'book_delete', token)

    def test_invalid_values(self, manager):
        manager.get_token('sid-1', 'register')

        assert not manager.is_token_valid('sid-1', 'register', None)
        assert not manager.is_token_valid('sid-1', 'register', '')
        assert not manager.is_token_valid('sid-1', 'register', 'guess')

    def test_remove_token(self, manager):
        token = manager.get_token('sid-1', 'register')

        assert manager.remove_token('sid-1', 'register') == token
        assert not manager.is_token_valid('sid-1', 'register', token)

    def test_validate_consumes_when_asked(self, manager):
        token = manager.get_token('sid-1', 'authenticate')

        manager.validate('sid-1', 'authenticate', token, consume=True)

        with pytest.raises(CsrfTokenError):
            manager.validate('sid-1', 'authenticate', token)

    def test_validate_keeps_token_by_default(self, manager):
        token = manager.get_token('sid-1', 'book_new')

        manager.validate('sid-1', 'book_new', token)
        manager.validate('sid-1', 'book_new', token)

    def test_expired_token_is_reissued(self, manager, clock):
        token = manager.get_token('sid-1', 'book_new')

        clock.advance(400)

        assert not manager.is_token_valid('sid-1', 'book_new', token)
        assert manager.get_token('sid-1', 'book_new') != token
