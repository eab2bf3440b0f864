import datetime
import logging

import pytest
from django.db import DatabaseError

from core.exceptions import PersistenceFailure
from core.lifecycle import LifecycleEvent, ModelObserver
from core.models import Appointment, Prescription
from core.observers import PrescriptionObserver
from core.services.prescriptions import create_prescription

pytestmark = pytest.mark.django_db


def prescription_data(appointment_id):
    return {
        'appointment_id': appointment_id,
        'date': datetime.date(2024, 5, 1),
        'document': '1001',
        'patient_name': 'Ana Gómez',
        'right_sphere': '-1.25',
        'left_sphere': '-1.00',
    }


def test_prescription_completes_a_scheduled_appointment(appointment):
    assert appointment.status == Appointment.STATUS_SCHEDULED
    create_prescription(prescription_data(appointment.pk))
    appointment.refresh_from_db()
    assert appointment.status == Appointment.STATUS_COMPLETED


def test_missing_appointment_is_a_logged_no_op(caplog):
    with caplog.at_level(logging.WARNING, logger='core.observers'):
        prescription = create_prescription(prescription_data(987654))
    assert Prescription.objects.filter(pk=prescription.pk).exists()
    assert 'missing appointment 987654' in caplog.text
    assert not Appointment.objects.exists()


def test_update_hook_is_a_no_op(appointment):
    prescription = create_prescription(prescription_data(appointment.pk))
    Appointment.objects.filter(pk=appointment.pk).update(status=Appointment.STATUS_CANCELLED)
    prescription.observation = 'edited'
    prescription.save()
    appointment.refresh_from_db()
    assert appointment.status == Appointment.STATUS_CANCELLED


def test_failed_status_write_aborts_the_prescription(appointment, monkeypatch):
    def broken_save(self, *args, **kwargs):
        raise DatabaseError('disk full')

    monkeypatch.setattr(Appointment, 'save', broken_save)
    with pytest.raises(PersistenceFailure):
        create_prescription(prescription_data(appointment.pk))
    assert not Prescription.objects.exists()
    assert Appointment.objects.get(pk=appointment.pk).status == Appointment.STATUS_SCHEDULED


def test_other_events_are_no_ops(appointment):
    observer = PrescriptionObserver()
    prescription = Prescription(appointment_id=appointment.pk, date=datetime.date(2024, 5, 1),
                                document='1', patient_name='x')
    for event in (LifecycleEvent.UPDATED, LifecycleEvent.DELETED, LifecycleEvent.RESTORED):
        observer.dispatch(event, prescription)
    appointment.refresh_from_db()
    assert appointment.status == Appointment.STATUS_SCHEDULED


def test_dispatch_routes_each_event_to_its_hook():
    seen = []

    class Recorder(ModelObserver):
        def created(self, instance):
            seen.append(('created', instance))

        def restored(self, instance):
            seen.append(('restored', instance))

    recorder = Recorder()
    recorder.dispatch(LifecycleEvent.CREATED, 1)
    recorder.dispatch(LifecycleEvent.DELETED, 2)
    recorder.dispatch(LifecycleEvent.RESTORED, 3)
    assert seen == [('created', 1), ('restored', 3)]
