"""
Mutation requests: an authorization gate followed by field rules.

A subclass declares ``gate``, ``fields`` and optional message overrides.
:meth:`MutationRequest.resolve` runs the gate first; a refused request
raises :class:`~core.exceptions.AuthorizationDenied` without evaluating
a single rule.  Otherwise the rules run and either every violation is
raised at once as :class:`~core.exceptions.ValidationFailed` or the
accepted payload is returned.
"""
from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping, Optional, Sequence

from core.exceptions import AuthorizationDenied, ValidationFailed
from core.identity import Identity, RouteParams
from core.permissions import AllowAuthenticated, Gate
from core.store import store as default_store
from core.validation import Field, validate

logger = logging.getLogger(__name__)


class MutationRequest:
    name: ClassVar[str] = 'mutation'
    gate: ClassVar[Gate] = AllowAuthenticated()
    fields: ClassVar[Sequence[Field]] = ()
    messages: ClassVar[Mapping[str, Any]] = {}

    @classmethod
    def resolve(cls, request, **route) -> dict:
        """Authorize and validate a DRF request; ``route`` holds the URL kwargs."""
        payload = request.data if isinstance(request.data, Mapping) else {}
        return cls.evaluate(payload, identity=Identity.from_user(request.user), route=RouteParams.of(route))

    @classmethod
    def evaluate(cls, payload: Mapping[str, Any], *, identity: Identity,
                 route: Optional[RouteParams] = None, store=None) -> dict:
        store = store or default_store
        route = route or RouteParams()
        if not cls.gate.allows(identity, route, payload, store):
            logger.warning('%s denied for user=%s role=%s route=%s',
                           cls.name, identity.id, identity.role, dict(route))
            raise AuthorizationDenied()
        accepted, errors = validate(cls.fields, payload, store=store, route=route,
                                    identity=identity, messages=cls.messages)
        if errors:
            logger.info('%s rejected: fields=%s', cls.name, sorted(errors))
            raise ValidationFailed(errors)
        return accepted
