"""
Author creation validation.

Validates:
- name is present, a non-blank string, at most 255 characters
- No unexpected fields present
"""

from typing import Dict, Any, List


MAX_NAME_LENGTH = 255


def validate_author_request(request: Dict[str, Any]) -> List[Dict[str, str]]:
    """
    Validate an author creation request.

    Examples:
        >>> validate_author_request({'name': 'Jane Doe'})
        []

        >>> validate_author_request({})
        [{'field': 'name', 'message': 'Field is required'}]
    """
    errors: List[Dict[str, str]] = []

    unexpected_fields = set(request.keys()) - {'name'}
    for field in sorted(unexpected_fields, key=str):
        errors.append({'field': field, 'message': 'Unexpected field in request'})

    if 'name' not in request:
        errors.append({'field': 'name', 'message': 'Field is required'})
        return errors

    name = request['name']
    if not isinstance(name, str):
        errors.append({'field': 'name', 'message': 'Name must be a string'})
    elif not name.strip():
        errors.append({'field': 'name', 'message': 'Name cannot be empty'})
    elif len(name.strip()) > MAX_NAME_LENGTH:
        errors.append({
            'field': 'name',
            'message': f'Name must be at most {MAX_NAME_LENGTH} characters'
        })

    return errors
