"""
Helpers shared by the resource transformers.

A transformer turns one record into a plain dict.  Relations are emitted
only when the caller names them in ``include``; naming a relation the
transformer does not know raises :class:`ValueError` so typos surface
instead of silently dropping data.
"""
from __future__ import annotations

from typing import Iterable


def check_includes(include: Iterable[str], allowed: Iterable[str]) -> frozenset:
    requested = frozenset(include or ())
    unknown = requested - frozenset(allowed)
    if unknown:
        raise ValueError(f'unknown include(s): {", ".join(sorted(unknown))}')
    return requested
