"""
Request-scoped context handed to authorization gates and validation rules.

Gates never reach for ``request.user`` themselves; the view builds an
:class:`Identity` and the route parameters once and passes them along.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Identity:
    id: Optional[int] = None
    role: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.id is not None

    def has_role(self, *roles: str) -> bool:
        return self.is_authenticated and self.role in roles

    @classmethod
    def from_user(cls, user) -> 'Identity':
        if not (user and getattr(user, 'is_authenticated', False)):
            return ANONYMOUS
        return cls(id=user.pk, role=getattr(user, 'role', None))


ANONYMOUS = Identity()


class RouteParams(dict):
    """Read-only view of the URL kwargs of the current request."""

    def param(self, name: str, default: Any = None) -> Any:
        value = self.get(name, default)
        # model instances bound by the view resolve to their key
        return getattr(value, 'pk', value)

    @classmethod
    def of(cls, kwargs: Optional[Mapping[str, Any]] = None) -> 'RouteParams':
        return cls(kwargs or {})
