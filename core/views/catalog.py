"""
Catalog endpoints: products (lenses included), lens types, laboratories
and treatments.  Reads are open to any signed-in user; writes are gated
per request class.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.models import Laboratory, LensType, Product, Treatment
from core.requests.catalog import (
    StoreLaboratoryRequest, StoreLensTypeRequest, StoreProductRequest, StoreTreatmentRequest,
    UpdateLaboratoryRequest, UpdateLensTypeRequest, UpdateProductRequest, UpdateTreatmentRequest,
)
from core.resources.catalog import (
    laboratory_resource, lens_type_resource, product_resource, treatment_resource,
)
from core.views.common import list_or_create, show_or_update


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def products(request):
    return list_or_create(request, Product, store_request=StoreProductRequest, transform=product_resource)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def product_detail(request, product):
    return show_or_update(
        request, Product, product,
        route_name='product', update_request=UpdateProductRequest, transform=product_resource,
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def lens_types(request):
    return list_or_create(
        request, LensType, store_request=StoreLensTypeRequest, transform=lens_type_resource, order_by=('name',),
    )


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def lens_type_detail(request, lens_type):
    return show_or_update(
        request, LensType, lens_type,
        route_name='lens_type', update_request=UpdateLensTypeRequest, transform=lens_type_resource,
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def laboratories(request):
    return list_or_create(
        request, Laboratory, store_request=StoreLaboratoryRequest, transform=laboratory_resource,
        order_by=('name',),
    )


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def laboratory_detail(request, laboratory):
    return show_or_update(
        request, Laboratory, laboratory,
        route_name='laboratory', update_request=UpdateLaboratoryRequest, transform=laboratory_resource,
    )


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def treatments(request):
    return list_or_create(
        request, Treatment, store_request=StoreTreatmentRequest, transform=treatment_resource, order_by=('name',),
    )


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def treatment_detail(request, treatment):
    return show_or_update(
        request, Treatment, treatment,
        route_name='treatment', update_request=UpdateTreatmentRequest, transform=treatment_resource,
    )
