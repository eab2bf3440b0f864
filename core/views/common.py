"""
Shared list/create/detail flow for the plain catalog endpoints.

Each endpoint still declares its own ``@api_view`` function; these helpers
only remove the repeated fetch, resolve, save and shape steps.
"""
from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response

from core.serializers.query import paginate, parse_query
from core.services.records import create_record, update_record

logger = logging.getLogger(__name__)


def list_or_create(request, model, *, store_request, transform, includes=(), order_by=('-id',)):
    if request.method == 'POST':
        data = store_request.resolve(request)
        record = create_record(model, data)
        logger.info('%s %s created by %s', model._meta.model_name, record.pk, request.user.pk)
        return Response({'data': transform(record)}, status=status.HTTP_201_CREATED)
    q = parse_query(request, includes=includes)
    return Response(paginate(model.objects.order_by(*order_by), q, transform))


def show_or_update(request, model, pk, *, route_name, update_request, transform, includes=()):
    record = get_object_or_404(model, pk=pk)
    if request.method in ('PUT', 'PATCH'):
        data = update_request.resolve(request, **{route_name: record})
        update_record(record, data)
        logger.info('%s %s updated by %s: %s', model._meta.model_name, record.pk, request.user.pk, sorted(data))
        return Response({'data': transform(record)})
    q = parse_query(request, includes=includes, detail=True)
    return Response({'data': transform(record, include=q['include'])})
