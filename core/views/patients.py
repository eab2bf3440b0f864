"""Patient records: any signed-in staff member may register and edit patients."""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated

from core.models import Patient
from core.requests.patients import StorePatientRequest, UpdatePatientRequest
from core.resources.clinic import patient_resource
from core.views.common import list_or_create, show_or_update


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients(request):
    return list_or_create(request, Patient, store_request=StorePatientRequest, transform=patient_resource)


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def patient_detail(request, patient):
    return show_or_update(
        request, Patient, patient,
        route_name='patient', update_request=UpdatePatientRequest, transform=patient_resource,
    )
