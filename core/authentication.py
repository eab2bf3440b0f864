"""
Opaque token authentication for service accounts and scripts.

Interactive clients use the JWT pair from ``/api/v1/auth/token``; tools
that cannot refresh tokens send ``Authorization: Token <key>`` with a
key issued through the admin.  Both classes are listed in
``REST_FRAMEWORK['DEFAULT_AUTHENTICATION_CLASSES']``.
"""
from __future__ import annotations

import logging

from rest_framework import authentication

logger = logging.getLogger(__name__)


class TokenAuthentication(authentication.TokenAuthentication):
    keyword = 'Token'

    def authenticate_credentials(self, key):
        user, token = super().authenticate_credentials(key)
        logger.debug('token auth user=%s role=%s', user.pk, getattr(user, 'role', None))
        return user, token
