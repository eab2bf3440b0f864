"""
Sales with their partial payments and lens price adjustments.

Payment and adjustment routes are nested under the sale; an unknown sale
is a 404 before any gate or rule runs.
"""
from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import PartialPayment, Product, Sale, SaleLensPriceAdjustment
from core.permissions import IsAdminOrReceptionist
from core.requests.sales import (
    DestroyPartialPaymentRequest, DestroyPriceAdjustmentRequest, StorePartialPaymentRequest,
    StorePriceAdjustmentRequest, StoreSaleRequest,
)
from core.resources.sales import (
    ADJUSTMENT_INCLUDES, PAYMENT_INCLUDES, SALE_INCLUDES, partial_payment_resource,
    price_adjustment_resource, sale_resource,
)
from core.serializers.query import paginate, parse_query
from core.services import sales as service


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def sales(request):
    if request.method == 'POST':
        data = StoreSaleRequest.resolve(request)
        sale = service.create_sale(request.user, data)
        return Response({'data': sale_resource(sale)}, status=status.HTTP_201_CREATED)
    q = parse_query(request, includes=SALE_INCLUDES)
    qs = Sale.objects.order_by('-id')
    for key in ('status', 'payment_status'):
        value = request.query_params.get(key)
        if value:
            qs = qs.filter(**{key: value})
    return Response(paginate(qs, q, sale_resource))


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def sale_detail(request, sale):
    obj = get_object_or_404(Sale, pk=sale)
    q = parse_query(request, includes=SALE_INCLUDES, detail=True)
    return Response({'data': sale_resource(obj, include=q['include'])})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def partial_payments(request, sale):
    obj = get_object_or_404(Sale, pk=sale)
    if request.method == 'POST':
        data = StorePartialPaymentRequest.resolve(request, sale=obj)
        payment, obj = service.add_partial_payment(obj, request.user, data)
        return Response(
            {'data': partial_payment_resource(payment), 'sale': sale_resource(obj)},
            status=status.HTTP_201_CREATED,
        )
    q = parse_query(request, includes=PAYMENT_INCLUDES)
    qs = obj.partial_payments.select_related('payment_method').order_by('-payment_date', '-id')
    return Response(paginate(qs, q, partial_payment_resource))


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def partial_payment_detail(request, payment):
    obj = get_object_or_404(PartialPayment.objects.select_related('payment_method'), pk=payment)
    q = parse_query(request, includes=PAYMENT_INCLUDES, detail=True)
    return Response({'data': partial_payment_resource(obj, include=q['include'])})


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def remove_partial_payment(request, sale, payment):
    sale_obj = get_object_or_404(Sale, pk=sale)
    payment_obj = get_object_or_404(PartialPayment, pk=payment, sale=sale_obj)
    DestroyPartialPaymentRequest.resolve(request, sale=sale_obj, payment=payment_obj)
    sale_obj = service.remove_partial_payment(sale_obj, payment_obj)
    return Response({'sale': sale_resource(sale_obj)})


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def price_adjustments(request, sale):
    obj = get_object_or_404(Sale, pk=sale)
    if request.method == 'POST':
        data = StorePriceAdjustmentRequest.resolve(request, sale=obj)
        adjustment = service.create_price_adjustment(obj, request.user, data)
        return Response({'data': price_adjustment_resource(adjustment)}, status=status.HTTP_201_CREATED)
    q = parse_query(request, includes=ADJUSTMENT_INCLUDES)
    qs = obj.lens_price_adjustments.select_related('lens').order_by('id')
    return Response(paginate(qs, q, price_adjustment_resource))


@api_view(['GET', 'DELETE'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def price_adjustment_detail(request, sale, adjustment):
    sale_obj = get_object_or_404(Sale, pk=sale)
    obj = get_object_or_404(SaleLensPriceAdjustment, pk=adjustment, sale=sale_obj)
    if request.method == 'DELETE':
        DestroyPriceAdjustmentRequest.resolve(request, sale=sale_obj, adjustment=obj)
        service.remove_price_adjustment(obj, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
    q = parse_query(request, includes=ADJUSTMENT_INCLUDES, detail=True)
    return Response({'data': price_adjustment_resource(obj, include=q['include'])})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminOrReceptionist])
def adjusted_price(request, sale, lens):
    sale_obj = get_object_or_404(Sale, pk=sale)
    lens_obj = get_object_or_404(Product, pk=lens)
    return Response({'data': service.adjusted_price(sale_obj, lens_obj)})
