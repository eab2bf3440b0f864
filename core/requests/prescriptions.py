"""
Prescription requests.

Only the specialist attending an appointment may write its prescription:
the appointment must be assigned to the caller, taken by the caller and
already started (``in_progress``, ``paused`` or ``completed``).
"""
from core.models import Appointment
from core.permissions import Predicate, RoleIn, SPECIALIST
from core.requests.base import MutationRequest
from core.validation import Date, Exists, Field, Integer, String, as_update

WRITABLE_STATUSES = (
    Appointment.STATUS_IN_PROGRESS,
    Appointment.STATUS_PAUSED,
    Appointment.STATUS_COMPLETED,
)

EYE_MEASURES = (
    'sphere', 'cylinder', 'axis', 'addition', 'height', 'distance_p',
    'visual_acuity_far', 'visual_acuity_near',
)


def _target_appointment(route, payload, store):
    appointment_id = payload.get('appointment_id')
    if appointment_id in (None, ''):
        prescription = store.find('prescriptions', route.param('prescription'))
        appointment_id = prescription.appointment_id if prescription is not None else None
    return store.find('appointments', appointment_id)


def attends_appointment(identity, route, payload, store) -> bool:
    appointment = _target_appointment(route, payload, store)
    if appointment is None:
        return False
    return (
        appointment.specialist_id == identity.id
        and appointment.taken_by_id == identity.id
        and appointment.status in WRITABLE_STATUSES
    )


PRESCRIPTION_FIELDS = [
    Field('appointment_id', Integer(min=1), Exists('appointments')),
    Field('date', Date()),
    Field('document', String(max=255)),
    Field('patient_name', String(max=255)),
    *[Field(f'{side}_{measure}', String(max=50), nullable=True)
      for side in ('right', 'left') for measure in EYE_MEASURES],
    Field('correction_type', String(max=255), nullable=True),
    Field('usage_type', String(max=255), nullable=True),
    Field('recommendation', String(max=2000), nullable=True),
    Field('professional', String(max=255), nullable=True),
    Field('observation', String(max=2000), nullable=True),
]


class StorePrescriptionRequest(MutationRequest):
    name = 'store prescription'
    gate = RoleIn(SPECIALIST) & Predicate(attends_appointment)
    fields = PRESCRIPTION_FIELDS


class UpdatePrescriptionRequest(MutationRequest):
    name = 'update prescription'
    gate = RoleIn(SPECIALIST) & Predicate(attends_appointment)
    fields = as_update(PRESCRIPTION_FIELDS)
