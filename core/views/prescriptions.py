from __future__ import annotations

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import Prescription
from core.requests.prescriptions import StorePrescriptionRequest, UpdatePrescriptionRequest
from core.resources.clinic import PRESCRIPTION_INCLUDES, prescription_resource
from core.serializers.query import paginate, parse_query
from core.services.prescriptions import create_prescription
from core.services.records import update_record


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def prescriptions(request):
    if request.method == 'POST':
        data = StorePrescriptionRequest.resolve(request)
        prescription = create_prescription(data)
        return Response({'data': prescription_resource(prescription)}, status=status.HTTP_201_CREATED)
    q = parse_query(request, includes=PRESCRIPTION_INCLUDES)
    qs = Prescription.objects.order_by('-date', '-id')
    appointment_id = request.query_params.get('appointment_id')
    if appointment_id and appointment_id.isdigit():
        qs = qs.filter(appointment_id=int(appointment_id))
    return Response(paginate(qs, q, prescription_resource))


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def prescription_detail(request, prescription):
    obj = get_object_or_404(Prescription, pk=prescription)
    if request.method in ('PUT', 'PATCH'):
        data = UpdatePrescriptionRequest.resolve(request, prescription=obj)
        update_record(obj, data)
        return Response({'data': prescription_resource(obj)})
    q = parse_query(request, includes=PRESCRIPTION_INCLUDES, detail=True)
    return Response({'data': prescription_resource(obj, include=q['include'])})
