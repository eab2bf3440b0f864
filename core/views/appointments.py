"""
Appointment scheduling and the specialist's take/pause/resume flow.

Specialists only see the appointments assigned to them; receptionists and
administrators see all of them.
"""
from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import Appointment, User
from core.requests.appointments import (
    AppointmentTransitionRequest, DestroyAppointmentRequest, RescheduleAppointmentRequest, StoreAppointmentRequest,
    UpdateAppointmentRequest,
)
from core.resources.clinic import APPOINTMENT_INCLUDES, appointment_resource
from core.serializers.query import paginate, parse_query
from core.services import appointments as service
from core.services.records import update_record

logger = logging.getLogger(__name__)


def _visible_to(user):
    qs = Appointment.objects.select_related('patient', 'specialist', 'receptionist', 'taken_by')
    if getattr(user, 'role', None) == User.ROLE_SPECIALIST:
        qs = qs.filter(specialist=user)
    return qs


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments(request):
    if request.method == 'POST':
        data = StoreAppointmentRequest.resolve(request)
        appointment = service.create_appointment(request.user, data)
        logger.info('appointment %s scheduled for patient %s', appointment.pk, appointment.patient_id)
        return Response({'data': appointment_resource(appointment)}, status=status.HTTP_201_CREATED)
    q = parse_query(request, includes=APPOINTMENT_INCLUDES)
    qs = _visible_to(request.user)
    status_filter = request.query_params.get('status')
    if status_filter:
        qs = qs.filter(status=status_filter)
    return Response(paginate(qs.order_by('-scheduled_at', '-id'), q, appointment_resource))


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def appointment_detail(request, appointment):
    obj = get_object_or_404(_visible_to(request.user), pk=appointment)
    if request.method == 'DELETE':
        DestroyAppointmentRequest.resolve(request, appointment=obj)
        service.delete_appointment(obj, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
    if request.method in ('PUT', 'PATCH'):
        data = UpdateAppointmentRequest.resolve(request, appointment=obj)
        update_record(obj, data)
        return Response({'data': appointment_resource(obj)})
    q = parse_query(request, includes=APPOINTMENT_INCLUDES, detail=True)
    return Response({'data': appointment_resource(obj, include=q['include'])})


def _transition(request, appointment, action):
    obj = get_object_or_404(_visible_to(request.user), pk=appointment)
    AppointmentTransitionRequest.resolve(request, appointment=obj)
    action(obj, request.user)
    return Response({'data': appointment_resource(obj, include=('patient', 'taken_by'))})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def take_appointment(request, appointment):
    return _transition(request, appointment, service.take)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def pause_appointment(request, appointment):
    return _transition(request, appointment, service.pause)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def resume_appointment(request, appointment):
    return _transition(request, appointment, service.resume)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def reschedule_appointment(request, appointment):
    obj = get_object_or_404(_visible_to(request.user), pk=appointment)
    data = RescheduleAppointmentRequest.resolve(request, appointment=obj)
    service.reschedule(obj, data)
    return Response({'data': appointment_resource(obj, include=('patient', 'specialist'))})
