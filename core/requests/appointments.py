from core.models import Appointment
from core.permissions import ADMIN_OR_RECEPTIONIST, AllowAuthenticated, RoleIn, SPECIALIST
from core.requests.base import MutationRequest
from core.validation import DateTime, Exists, Field, In, Integer, String, as_update

STATUSES = tuple(code for code, _ in Appointment.STATUS_CHOICES)

SPECIALIST_ID = Field('specialist_id', Integer(min=1), Exists('users', where={'role': SPECIALIST}))

APPOINTMENT_FIELDS = [
    Field('patient_id', Integer(min=1), Exists('patients')),
    SPECIALIST_ID,
    Field('scheduled_at', DateTime()),
    Field('notes', String(max=1000), nullable=True),
]


class StoreAppointmentRequest(MutationRequest):
    name = 'store appointment'
    gate = ADMIN_OR_RECEPTIONIST
    fields = APPOINTMENT_FIELDS


class UpdateAppointmentRequest(MutationRequest):
    name = 'update appointment'
    gate = ADMIN_OR_RECEPTIONIST
    fields = as_update(APPOINTMENT_FIELDS) + [Field('status', In(STATUSES), sometimes=True)]


class RescheduleAppointmentRequest(MutationRequest):
    """Any staff member may move an appointment they can see."""
    name = 'reschedule appointment'
    gate = AllowAuthenticated()
    fields = [
        Field('scheduled_at', DateTime()),
        Field(SPECIALIST_ID.name, *SPECIALIST_ID.rules, nullable=True),
        Field('notes', String(max=1000), nullable=True),
    ]


class DestroyAppointmentRequest(MutationRequest):
    name = 'destroy appointment'
    gate = ADMIN_OR_RECEPTIONIST


class AppointmentTransitionRequest(MutationRequest):
    """take / pause / resume: specialists only, no body."""
    name = 'appointment transition'
    gate = RoleIn(SPECIALIST)
