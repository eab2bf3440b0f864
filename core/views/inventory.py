"""Warehouses, their locations and the transfers of lenses between locations (administrators only)."""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import InventoryTransfer, Warehouse, WarehouseLocation
from core.permissions import IsAdminRole
from core.requests.inventory import (
    DestroyTransferRequest, StoreLocationRequest, StoreTransferRequest, StoreWarehouseRequest,
    UpdateLocationRequest, UpdateTransferRequest, UpdateWarehouseRequest,
)
from core.resources.catalog import (
    LOCATION_INCLUDES, TRANSFER_INCLUDES, location_resource, transfer_resource, warehouse_resource,
)
from core.serializers.query import paginate, parse_query
from core.services import inventory as service
from core.views.common import list_or_create, show_or_update


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def warehouses(request):
    return list_or_create(request, Warehouse, store_request=StoreWarehouseRequest, transform=warehouse_resource)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def warehouse_detail(request, warehouse):
    return show_or_update(
        request, Warehouse, warehouse,
        route_name='warehouse', update_request=UpdateWarehouseRequest, transform=warehouse_resource,
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def locations(request):
    return list_or_create(
        request, WarehouseLocation,
        store_request=StoreLocationRequest, transform=location_resource, includes=LOCATION_INCLUDES,
    )


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated, IsAdminRole])
def location_detail(request, location):
    return show_or_update(
        request, WarehouseLocation, location,
        route_name='location', update_request=UpdateLocationRequest, transform=location_resource,
        includes=LOCATION_INCLUDES,
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminRole])
def transfers(request):
    if request.method == 'POST':
        data = StoreTransferRequest.resolve(request)
        transfer = service.create_transfer(request.user, data)
        return Response({'data': transfer_resource(transfer)}, status=status.HTTP_201_CREATED)
    q = parse_query(request, includes=TRANSFER_INCLUDES)
    qs = InventoryTransfer.objects.select_related('lens', 'source_location', 'destination_location')
    return Response(paginate(qs.order_by('-id'), q, transfer_resource))


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminRole])
def transfer_detail(request, transfer):
    obj = get_object_or_404(InventoryTransfer, pk=transfer)
    if request.method == 'DELETE':
        DestroyTransferRequest.resolve(request, transfer=obj)
        obj.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
    if request.method in ('PUT', 'PATCH'):
        data = UpdateTransferRequest.resolve(request, transfer=obj)
        service.update_transfer(obj, data)
        return Response({'data': transfer_resource(obj)})
    q = parse_query(request, includes=TRANSFER_INCLUDES, detail=True)
    return Response({'data': transfer_resource(obj, include=q['include'])})
