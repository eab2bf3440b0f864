"""
Message catalog for rule violations.

Messages are looked up by ``"<field>.<kind>"`` in the request's own
overrides first and then by ``kind`` in :data:`DEFAULT_MESSAGES`.  All
strings go through Django's translation machinery.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from django.utils.translation import gettext_lazy as _

DEFAULT_MESSAGES = {
    'required': _('The %(attribute)s field is required.'),
    'string': _('The %(attribute)s must be a string.'),
    'min_length': _('The %(attribute)s must be at least %(min)s characters.'),
    'max_length': _('The %(attribute)s may not be greater than %(max)s characters.'),
    'email': _('The %(attribute)s must be a valid email address.'),
    'numeric': _('The %(attribute)s must be a number.'),
    'integer': _('The %(attribute)s must be an integer.'),
    'min': _('The %(attribute)s must be at least %(min)s.'),
    'max': _('The %(attribute)s may not be greater than %(max)s.'),
    'max_digits': _('The %(attribute)s may not have more than %(max_digits)s digits.'),
    'decimal_places': _('The %(attribute)s may not have more than %(decimal_places)s decimal places.'),
    'date': _('The %(attribute)s is not a valid date.'),
    'datetime': _('The %(attribute)s is not a valid date and time.'),
    'in': _('The selected %(attribute)s is invalid.'),
    'exists': _('The selected %(attribute)s is invalid.'),
    'unique': _('The %(attribute)s has already been taken.'),
    'different': _('The %(attribute)s and %(other)s must be different.'),
    'gt': _('The %(attribute)s must be greater than %(value)s.'),
    'lte': _('The %(attribute)s must be less than or equal to %(value)s.'),
}


def attribute_name(field: str) -> str:
    return field.replace('_', ' ')


def message_for(field: str, kind: str, params: Optional[Mapping[str, Any]] = None,
                overrides: Optional[Mapping[str, Any]] = None) -> str:
    template = (overrides or {}).get(f'{field}.{kind}') or DEFAULT_MESSAGES.get(kind) or kind
    values = {'attribute': attribute_name(field)}
    for key, value in (params or {}).items():
        values[key] = attribute_name(value) if key == 'other' else value
    return str(template) % values
