"""
Book creation validation.

Validates:
- title and author are present, non-blank strings of at most 255 characters
- No unexpected fields present

Whether the author name belongs to a known author is checked by the book
repository, not here.
"""

from typing import Dict, Any, List


MAX_FIELD_LENGTH = 255
REQUIRED_FIELDS = ('title', 'author')


def validate_book_request(request: Dict[str, Any]) -> List[Dict[str, str]]:
    """
    Validate a book creation request.

    Returns:
        List of {'field', 'message'} errors, empty when valid
    """
    errors: List[Dict[str, str]] = []

    unexpected_fields = set(request.keys()) - set(REQUIRED_FIELDS)
    for field in sorted(unexpected_fields, key=str):
        errors.append({'field': field, 'message': 'Unexpected field in request'})

    for field in REQUIRED_FIELDS:
        if field not in request:
            errors.append({'field': field, 'message': 'Field is required'})
            continue

        value = request[field]
        if not isinstance(value, str):
            errors.append({'field': field, 'message': f'{field.capitalize()} must be a string'})
        elif not value.strip():
            errors.append({'field': field, 'message': f'{field.capitalize()} cannot be empty'})
        elif len(value.strip()) > MAX_FIELD_LENGTH:
            errors.append({
                'field': field,
                'message': f'{field.capitalize()} must be at most {MAX_FIELD_LENGTH} characters'
            })

    return errors
