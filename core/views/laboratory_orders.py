"""Orders sent to external laboratories; any staff member may manage them."""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import LaboratoryOrder
from core.requests.laboratory_orders import (
    DestroyLaboratoryOrderRequest, StoreLaboratoryOrderRequest, UpdateLaboratoryOrderRequest,
)
from core.resources.sales import LABORATORY_ORDER_INCLUDES, laboratory_order_resource
from core.serializers.query import paginate, parse_query
from core.services import laboratory_orders as service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def laboratory_orders(request):
    if request.method == 'POST':
        data = StoreLaboratoryOrderRequest.resolve(request)
        order = service.create_laboratory_order(request.user, data)
        return Response({'data': laboratory_order_resource(order)}, status=status.HTTP_201_CREATED)
    q = parse_query(request, includes=LABORATORY_ORDER_INCLUDES)
    qs = LaboratoryOrder.objects.select_related('laboratory', 'patient', 'sale')
    status_filter = request.query_params.get('status')
    if status_filter:
        qs = qs.filter(status=status_filter)
    return Response(paginate(qs.order_by('-id'), q, laboratory_order_resource))


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def laboratory_order_detail(request, laboratory_order):
    obj = get_object_or_404(LaboratoryOrder, pk=laboratory_order)
    if request.method == 'DELETE':
        DestroyLaboratoryOrderRequest.resolve(request, laboratory_order=obj)
        service.delete_laboratory_order(obj, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
    if request.method in ('PUT', 'PATCH'):
        data = UpdateLaboratoryOrderRequest.resolve(request, laboratory_order=obj)
        service.update_laboratory_order(obj, data)
        return Response({'data': laboratory_order_resource(obj)})
    q = parse_query(request, includes=LABORATORY_ORDER_INCLUDES, detail=True)
    return Response({'data': laboratory_order_resource(obj, include=q['include'])})
