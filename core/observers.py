"""Observers registered in :meth:`core.apps.CoreConfig.ready`."""
from __future__ import annotations

import logging
from typing import Optional

from core.lifecycle import ModelObserver
from core.models import Appointment, Prescription
from core.store import RecordStore, store as default_store

logger = logging.getLogger(__name__)


class PrescriptionObserver(ModelObserver):
    """Writing a prescription closes the appointment it was written in."""

    def __init__(self, store: Optional[RecordStore] = None):
        self.store = store or default_store

    def created(self, instance: Prescription) -> None:
        appointment = self.store.find('appointments', instance.appointment_id)
        if appointment is None:
            # no-op kept on purpose; the create path does not reject dangling ids
            logger.warning(
                'prescription %s references missing appointment %s; status left untouched',
                instance.pk, instance.appointment_id,
            )
            return
        appointment.status = Appointment.STATUS_COMPLETED
        self.store.save(appointment)
        logger.info('appointment %s completed by prescription %s', appointment.pk, instance.pk)
