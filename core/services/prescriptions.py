"""
Prescription persistence.

Saving a new prescription fires :class:`core.observers.PrescriptionObserver`
inside the same transaction, so a failure to complete the appointment
rolls the prescription back as well.
"""
from __future__ import annotations

import logging

from django.db import transaction

from core.models import Prescription
from core.store import store

logger = logging.getLogger(__name__)


def create_prescription(data: dict) -> Prescription:
    with transaction.atomic():
        prescription = store.save(Prescription(**data))
    logger.info('prescription %s written for appointment %s', prescription.pk, prescription.appointment_id)
    return prescription
