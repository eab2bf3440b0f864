from core.permissions import AllowAuthenticated
from core.requests.base import MutationRequest
from core.validation import Date, Email, Field, In, Route, String, Unique, as_update

GENDERS = ('male', 'female', 'other')
STATUSES = ('active', 'inactive')

PATIENT_FIELDS = [
    Field('first_name', String(max=255)),
    Field('last_name', String(max=255)),
    Field('identification', String(max=255), Unique('patients', ignore=Route('patient'))),
    Field('email', Email(), String(max=255), Unique('patients', ignore=Route('patient')), nullable=True),
    Field('phone', String(max=20), nullable=True),
    Field('birth_date', Date(), nullable=True),
    Field('gender', In(GENDERS)),
    Field('address', String(max=255), nullable=True),
    Field('status', In(STATUSES), required=False),
]


class StorePatientRequest(MutationRequest):
    name = 'store patient'
    gate = AllowAuthenticated()
    fields = PATIENT_FIELDS


class UpdatePatientRequest(MutationRequest):
    name = 'update patient'
    gate = AllowAuthenticated()
    fields = as_update(PATIENT_FIELDS)
