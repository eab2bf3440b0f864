"""
Appointment state transitions performed by the attending specialist.

A specialist works one appointment at a time: taking or resuming an
appointment while another one they took is ``in_progress`` raises
:class:`~core.exceptions.ConflictingState` carrying the id of that other
appointment.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone

from core.exceptions import ConflictingState
from core.models import Appointment, User
from core.store import store

logger = logging.getLogger(__name__)


def _in_progress_elsewhere(appointment: Appointment, user: User) -> Optional[Appointment]:
    return (
        Appointment.objects
        .filter(taken_by=user, status=Appointment.STATUS_IN_PROGRESS)
        .exclude(pk=appointment.pk)
        .first()
    )


def _ensure_free(appointment: Appointment, user: User) -> None:
    other = _in_progress_elsewhere(appointment, user)
    if other is not None:
        logger.info('specialist %s busy with appointment %s; refused %s', user.pk, other.pk, appointment.pk)
        raise ConflictingState(
            'You already have an appointment in progress. Complete or pause it first.',
            appointment_id=other.pk,
        )


def _ensure_status(appointment: Appointment, expected: str, message: str) -> None:
    if appointment.status != expected:
        raise ConflictingState(message, appointment_id=appointment.pk, status=appointment.status)


def _ensure_taker(appointment: Appointment, user: User, message: str) -> None:
    if appointment.taken_by_id != user.pk:
        raise ConflictingState(message, appointment_id=appointment.pk, taken_by_id=appointment.taken_by_id)


@transaction.atomic
def take(appointment: Appointment, user: User) -> Appointment:
    _ensure_status(appointment, Appointment.STATUS_SCHEDULED, 'Only scheduled appointments can be taken.')
    _ensure_free(appointment, user)
    appointment.status = Appointment.STATUS_IN_PROGRESS
    appointment.taken_by = user
    appointment.taken_at = timezone.now()
    store.save(appointment)
    logger.info('appointment %s taken by %s', appointment.pk, user.pk)
    return appointment


@transaction.atomic
def pause(appointment: Appointment, user: User) -> Appointment:
    _ensure_status(appointment, Appointment.STATUS_IN_PROGRESS, 'Only appointments in progress can be paused.')
    _ensure_taker(appointment, user, 'Only the specialist who took the appointment can pause it.')
    appointment.status = Appointment.STATUS_PAUSED
    appointment.paused_at = timezone.now()
    store.save(appointment)
    logger.info('appointment %s paused by %s', appointment.pk, user.pk)
    return appointment


@transaction.atomic
def resume(appointment: Appointment, user: User) -> Appointment:
    _ensure_status(appointment, Appointment.STATUS_PAUSED, 'Only paused appointments can be resumed.')
    _ensure_taker(appointment, user, 'Only the specialist who paused the appointment can resume it.')
    _ensure_free(appointment, user)
    appointment.status = Appointment.STATUS_IN_PROGRESS
    appointment.resumed_at = timezone.now()
    store.save(appointment)
    logger.info('appointment %s resumed by %s', appointment.pk, user.pk)
    return appointment


def create_appointment(user: User, data: dict) -> Appointment:
    appointment = Appointment(receptionist=user if user.role == User.ROLE_RECEPTIONIST else None, **data)
    return store.save(appointment)


# appointments already worked on keep their record
UNDELETABLE_STATUSES = (Appointment.STATUS_IN_PROGRESS, Appointment.STATUS_COMPLETED)


@transaction.atomic
def reschedule(appointment: Appointment, data: dict) -> Appointment:
    """Move the appointment to a new time and put it back in ``scheduled``."""
    if appointment.status == Appointment.STATUS_COMPLETED:
        raise ConflictingState(
            'Completed appointments cannot be rescheduled.',
            appointment_id=appointment.pk, status=appointment.status,
        )
    previous = appointment.scheduled_at
    appointment.scheduled_at = data['scheduled_at']
    if data.get('specialist_id') is not None:
        appointment.specialist_id = data['specialist_id']
    if data.get('notes') is not None:
        appointment.notes = data['notes']
    appointment.status = Appointment.STATUS_SCHEDULED
    store.save(appointment)
    logger.info('appointment %s rescheduled %s -> %s', appointment.pk, previous, appointment.scheduled_at)
    return appointment


def delete_appointment(appointment: Appointment, user: User) -> None:
    if appointment.status in UNDELETABLE_STATUSES:
        raise ConflictingState(
            f'Appointments that are {appointment.get_status_display().lower()} cannot be deleted.',
            appointment_id=appointment.pk, status=appointment.status,
        )
    appointment_id = appointment.pk
    appointment.delete()
    logger.info('appointment %s deleted by %s', appointment_id, user.pk)
