"""
Authorization gates evaluated before any validation rule.

A gate answers one question from an explicit :class:`~core.identity.Identity`,
the route parameters, the raw payload and the record store.  Gates combine
with ``&``.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping

from rest_framework.permissions import BasePermission

from core.exceptions import AuthorizationDenied
from core.identity import Identity, RouteParams
from core.notes import NoteableType

ADMIN = 'admin'
SPECIALIST = 'specialist'
RECEPTIONIST = 'receptionist'


class Gate:
    def allows(self, identity: Identity, route: RouteParams, payload: Mapping[str, Any], store) -> bool:
        raise NotImplementedError

    def __and__(self, other: 'Gate') -> 'Gate':
        return AllOf(self, other)


class AllOf(Gate):
    def __init__(self, *gates: Gate):
        self.gates = gates

    def allows(self, identity, route, payload, store) -> bool:
        return all(g.allows(identity, route, payload, store) for g in self.gates)


class AllowAuthenticated(Gate):
    """Any signed-in user."""
    def allows(self, identity, route, payload, store) -> bool:
        return identity.is_authenticated


class RoleIn(Gate):
    """Signed-in user holding one of ``roles``."""
    def __init__(self, *roles: str):
        self.roles = roles

    def allows(self, identity, route, payload, store) -> bool:
        return identity.has_role(*self.roles)


class NoteableTargetExists(Gate):
    """The ``type``/``id`` route pair names a known kind and a live record."""
    def allows(self, identity, route, payload, store) -> bool:
        kind = NoteableType.parse(route.param('type'))
        if kind is None:
            return False
        return store.exists(kind.collection, pk=route.param('id'))


class Predicate(Gate):
    """Escape hatch for gates that need a record lookup of their own."""
    def __init__(self, fn: Callable[[Identity, RouteParams, Mapping[str, Any], Any], bool]):
        self.fn = fn

    def allows(self, identity, route, payload, store) -> bool:
        return bool(self.fn(identity, route, payload, store))


ADMIN_ONLY = RoleIn(ADMIN)
ADMIN_OR_RECEPTIONIST = RoleIn(ADMIN, RECEPTIONIST)
ADMIN_OR_SPECIALIST = RoleIn(ADMIN, SPECIALIST)


class GatePermission(BasePermission):
    """DRF permission class backed by a route-independent gate.

    Used on read endpoints; a refusal raises the same error kind as a
    refused mutation.
    """
    gate: Gate = AllowAuthenticated()

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        if not self.gate.allows(Identity.from_user(getattr(request, 'user', None)), RouteParams(), {}, None):
            raise AuthorizationDenied()
        return True


class IsAdminRole(GatePermission):
    gate = ADMIN_ONLY


class IsAdminOrReceptionist(GatePermission):
    gate = ADMIN_OR_RECEPTIONIST
