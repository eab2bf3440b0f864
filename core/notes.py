"""
Kinds of record a note can be attached to.

The URL segment (``/api/v1/<type>/<id>/notes``) is parsed into a closed
enum; :func:`check_noteable_registry` runs when the app loads so a member
pointing at a missing collection fails at startup rather than per request.
"""
from __future__ import annotations

import enum
from typing import Optional

from django.core.exceptions import ImproperlyConfigured


class NoteableType(enum.Enum):
    LENSES = 'lenses'
    PRODUCTS = 'products'
    APPOINTMENTS = 'appointments'

    @property
    def collection(self) -> str:
        return _COLLECTIONS[self]

    @classmethod
    def parse(cls, value) -> Optional['NoteableType']:
        try:
            return cls(value)
        except ValueError:
            return None


# lenses are stored as products
_COLLECTIONS = {
    NoteableType.LENSES: 'products',
    NoteableType.PRODUCTS: 'products',
    NoteableType.APPOINTMENTS: 'appointments',
}


def check_noteable_registry(store) -> None:
    for kind in NoteableType:
        if kind not in _COLLECTIONS:
            raise ImproperlyConfigured(f'noteable type {kind.value!r} has no collection')
        try:
            model = store.model(kind.collection)
        except LookupError as exc:
            raise ImproperlyConfigured(f'noteable type {kind.value!r}: {exc}') from exc
        if not hasattr(model, 'notes_thread'):
            raise ImproperlyConfigured(f'{model._meta.label} cannot hold notes')
