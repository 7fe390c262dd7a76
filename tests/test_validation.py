"""
Unit tests for request validation functions.
Covers every Lambda function that accepts a request body.
"""

import pytest


@pytest.fixture
def register_validation(validation_module):
    return validation_module('catalog_register_create')


@pytest.fixture
def login_validation(validation_module):
    return validation_module('catalog_login_create')


@pytest.fixture
def author_validation(validation_module):
    return validation_module('catalog_authors_create')


@pytest.fixture
def book_validation(validation_module):
    return validation_module('catalog_books_create')


def fields(errors):
    return {e['field'] for e in errors}


class TestRegistrationValidation:
    """Registration: email, password (>= 6), passwordConfirm."""

    def valid_request(self, **overrides):
        request = {
            'email': 'reader@example.com',
            'password': 'secret1',
            'passwordConfirm': 'secret1',
        }
        request.update(overrides)
        return request

    def test_valid_request(self, register_validation):
        assert register_validation.validate_registration_request(self.valid_request()) == []

    def test_missing_email(self, register_validation):
        request = self.valid_request()
        del request['email']

        errors = register_validation.validate_registration_request(request)

        assert any(e['field'] == 'email' and 'required' in e['message'].lower() for e in errors)

    def test_whitespace_only_email(self, register_validation):
        errors = register_validation.validate_registration_request(self.valid_request(email='   '))

        assert 'email' in fields(errors)

    @pytest.mark.parametrize('email', ['plainaddress', 'no-at.example.com', 'a@b', 'a b@example.com', '@example.com'])
    def test_invalid_email_format(self, register_validation, email):
        errors = register_validation.validate_registration_request(self.valid_request(email=email))

        assert any(e['field'] == 'email' and 'format' in e['message'].lower() for e in errors)

    def test_password_too_short(self, register_validation):
        errors = register_validation.validate_registration_request(
            self.valid_request(password='12345', passwordConfirm='12345')
        )

        assert fields(errors) == {'password'}

    def test_password_exactly_minimum_length(self, register_validation):
        errors = register_validation.validate_registration_request(
            self.valid_request(password='123456', passwordConfirm='123456')
        )

        assert errors == []

    def test_passwords_must_match(self, register_validation):
        errors = register_validation.validate_registration_request(self.valid_request(passwordConfirm='other1'))

        assert errors == [{'field': 'passwordConfirm', 'message': 'The password fields must match.'}]

    def test_password_over_72_bytes(self, register_validation):
        errors = register_validation.validate_registration_request(
            self.valid_request(password='x' * 73, passwordConfirm='x' * 73)
        )

        assert errors == [{'field': 'password', 'message': 'Password must be at most 72 bytes'}]

    def test_password_limit_counts_utf8_bytes(self, register_validation):
        password = '\u00e9' * 37

        errors = register_validation.validate_registration_request(
            self.valid_request(password=password, passwordConfirm=password)
        )

        assert fields(errors) == {'password'}

    def test_password_exactly_72_bytes(self, register_validation):
        errors = register_validation.validate_registration_request(
            self.valid_request(password='x' * 72, passwordConfirm='x' * 72)
        )

        assert errors == []

    def test_password_with_lone_surrogate(self, register_validation):
        errors = register_validation.validate_registration_request(
            self.valid_request(password='secret\ud800', passwordConfirm='secret\ud800')
        )

        assert fields(errors) == {'password'}

    def test_missing_password(self, register_validation):
        request = self.valid_request()
        del request['password']

        errors = register_validation.validate_registration_request(request)

        assert 'password' in fields(errors)

    def test_non_string_password(self, register_validation):
        errors = register_validation.validate_registration_request(self.valid_request(password=123456))

        assert 'password' in fields(errors)

    def test_unexpected_field(self, register_validation):
        errors = register_validation.validate_registration_request(self.valid_request(role='admin'))

        assert errors == [{'field': 'role', 'message': 'Unexpected field in request'}]

    def test_email_format_helper(self, register_validation):
        assert register_validation.validate_email_format('reader@example.com')
        assert not register_validation.validate_email_format('reader@')
        assert not register_validation.validate_email_format(None)
        assert not register_validation.validate_email_format('a' * 250 + '@example.com')


class TestLoginValidation:

    def test_valid_request(self, login_validation):
        assert login_validation.validate_login_request({'email': 'a@example.com', 'password': 'x'}) == []

    def test_missing_fields(self, login_validation):
        errors = login_validation.validate_login_request({})

        assert fields(errors) == {'email', 'password'}

    def test_empty_fields(self, login_validation):
        errors = login_validation.validate_login_request({'email': ' ', 'password': ''})

        assert fields(errors) == {'email', 'password'}

    def test_password_over_72_bytes(self, login_validation):
        errors = login_validation.validate_login_request({'email': 'a@example.com', 'password': 'x' * 80})

        assert errors == [{'field': 'password', 'message': 'Password must be at most 72 bytes'}]

    def test_unexpected_field(self, login_validation):
        errors = login_validation.validate_login_request({'email': 'a@example.com', 'password': 'x', 'remember': True})

        assert fields(errors) == {'remember'}


class TestAuthorValidation:

    def test_valid_request(self, author_validation):
        assert author_validation.validate_author_request({'name': 'Jane Doe'}) == []

    def test_missing_name(self, author_validation):
        assert author_validation.validate_author_request({}) == [
            {'field': 'name', 'message': 'Field is required'}
        ]

    @pytest.mark.parametrize('name', ['', '   ', 42, None])
    def test_invalid_name(self, author_validation, name):
        assert 'name' in fields(author_validation.validate_author_request({'name': name}))

    def test_name_too_long(self, author_validation):
        errors = author_validation.validate_author_request({'name': 'x' * 256})

        assert 'name' in fields(errors)


class TestBookValidation:

    def test_valid_request(self, book_validation):
        assert book_validation.validate_book_request({'title': 'Dune', 'author': 'Frank Herbert'}) == []

    def test_missing_fields(self, book_validation):
        assert fields(book_validation.validate_book_request({})) == {'title', 'author'}

    def test_blank_title(self, book_validation):
        errors = book_validation.validate_book_request({'title': '  ', 'author': 'Frank Herbert'})

        assert fields(errors) == {'title'}

    def test_unexpected_field(self, book_validation):
        errors = book_validation.validate_book_request({'title': 'Dune', 'author': 'Frank Herbert', 'isbn': '1'})

        assert fields(errors) == {'isbn'}
