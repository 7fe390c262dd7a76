"""
Key scheme of the shared catalog table.

Every PK/SK string written by a repository is built here. Prefixes are
chosen so that no two entity types can collide in key space:

1. Author:      PK=AUTHOR#{id}        SK=METADATA
2. Book:        PK=BOOK-METADATA      SK=AUTHOR#{authorId}#BOOK#{id}
3. User:        PK=USER               SK=EMAIL#{lowercased email}
4. Session:     PK=SESSION            SK=SID#{sessionId}
5. CSRF token:  PK=CSRF-TOKEN         SK=CSRF#{tokenId}
"""

from typing import Dict

AUTHOR_PK_PREFIX = 'AUTHOR#'
AUTHOR_SK = 'METADATA'

BOOK_PK = 'BOOK-METADATA'
BOOK_SEGMENT = '#BOOK#'

USER_PK = 'USER'
USER_SK_PREFIX = 'EMAIL#'

SESSION_PK = 'SESSION'
SESSION_SK_PREFIX = 'SID#'

CSRF_PK = 'CSRF-TOKEN'
CSRF_SK_PREFIX = 'CSRF#'

# TTL attribute enabled on the table
EXPIRES_AT = 'expiresAt'


def author_key(author_id: str) -> Dict[str, str]:
    return {'PK': f'{AUTHOR_PK_PREFIX}{author_id}', 'SK': AUTHOR_SK}


def book_sort_key(author_id: str, book_id: str) -> str:
    return f'{AUTHOR_PK_PREFIX}{author_id}{BOOK_SEGMENT}{book_id}'


def book_key(author_id: str, book_id: str) -> Dict[str, str]:
    return {'PK': BOOK_PK, 'SK': book_sort_key(author_id, book_id)}


def book_id_fragment(book_id: str) -> str:
    """Trailing SK segment identifying a book regardless of its author."""
    return f'{BOOK_SEGMENT}{book_id}'


def normalize_email(email: str) -> str:
    return email.lower()


def user_key(email: str) -> Dict[str, str]:
    return {'PK': USER_PK, 'SK': f'{USER_SK_PREFIX}{normalize_email(email)}'}


def session_key(session_id: str) -> Dict[str, str]:
    return {'PK': SESSION_PK, 'SK': f'{SESSION_SK_PREFIX}{session_id}'}


def csrf_key(token_id: str) -> Dict[str, str]:
    return {'PK': CSRF_PK, 'SK': f'{CSRF_SK_PREFIX}{token_id}'}
