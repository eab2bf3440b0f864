from core.models import LaboratoryOrder
from core.permissions import AllowAuthenticated
from core.requests.base import MutationRequest
from core.validation import Date, Exists, Field, In, Integer, String, as_update

STATUSES = tuple(code for code, _ in LaboratoryOrder.STATUS_CHOICES)
PRIORITIES = tuple(code for code, _ in LaboratoryOrder.PRIORITY_CHOICES)

LABORATORY_ORDER_FIELDS = [
    Field('laboratory_id', Integer(min=1), Exists('laboratories')),
    Field('patient_id', Integer(min=1), Exists('patients')),
    Field('sale_id', Integer(min=1), Exists('sales'), nullable=True),
    Field('status', In(STATUSES), required=False),
    Field('priority', In(PRIORITIES), required=False),
    Field('estimated_completion_date', Date(), nullable=True),
    Field('notes', String(max=1000), nullable=True),
]


class StoreLaboratoryOrderRequest(MutationRequest):
    name = 'store laboratory order'
    gate = AllowAuthenticated()
    fields = LABORATORY_ORDER_FIELDS


class UpdateLaboratoryOrderRequest(MutationRequest):
    name = 'update laboratory order'
    gate = AllowAuthenticated()
    fields = as_update(LABORATORY_ORDER_FIELDS)


class DestroyLaboratoryOrderRequest(MutationRequest):
    name = 'destroy laboratory order'
    gate = AllowAuthenticated()
