"""
API error kinds and the unified exception handler.

Every error leaves the API as ``{"ok": false, "error": {...}}`` with a
stable ``code`` so clients can tell an authorization refusal from a
validation failure or a state conflict.
"""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class AuthorizationDenied(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'This action is unauthorized.'
    default_code = 'authorization_denied'


class ValidationFailed(APIException):
    """One or more rule violations, keyed by field."""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = 'The given data was invalid.'
    default_code = 'validation_failed'

    def __init__(self, errors: dict[str, list[str]], detail=None):
        super().__init__(detail or self.default_detail, self.default_code)
        self.errors = {field: [str(m) for m in messages] for field, messages in errors.items()}


class ConflictingState(APIException):
    """The target record is in a state that forbids the operation."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The resource is in a conflicting state.'
    default_code = 'conflicting_state'

    def __init__(self, detail=None, **context):
        super().__init__(detail or self.default_detail, self.default_code)
        self.context = context


class PersistenceFailure(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'The record could not be saved.'
    default_code = 'persistence_failure'


def _message(data):
    if isinstance(data, dict):
        return data.get('detail') or data
    if isinstance(data, list) and len(data) == 1:
        return str(data[0])
    return str(data)


def api_exception_handler(exc, context):
    if isinstance(exc, DjangoValidationError):
        errors = exc.message_dict if hasattr(exc, 'error_dict') else {'non_field_errors': exc.messages}
        exc = ValidationFailed(errors)

    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', context.get('view').__class__.__name__ if context.get('view') else '?')
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)

    error = {'code': 'api_error', 'message': _message(resp.data)}
    if isinstance(exc, (AuthorizationDenied, ValidationFailed, ConflictingState, PersistenceFailure)):
        error['code'] = exc.default_code
        if isinstance(exc, ValidationFailed):
            error['errors'] = exc.errors
        elif isinstance(exc, ConflictingState):
            error['context'] = exc.context
    elif isinstance(exc, APIException):
        # DRF's own exceptions carry their code on the detail
        codes = exc.get_codes()
        if isinstance(codes, str):
            error['code'] = codes
        else:
            error['code'] = 'invalid'
            error['errors'] = resp.data
    headers = {h: resp[h] for h in ('WWW-Authenticate', 'Retry-After') if resp.has_header(h)}
    return Response({'ok': False, 'error': error}, status=resp.status_code, headers=headers)
