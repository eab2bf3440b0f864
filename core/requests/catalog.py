from core.models import MONEY
from core.permissions import ADMIN_ONLY, ADMIN_OR_SPECIALIST
from core.requests.base import MutationRequest
from core.validation import Email, Field, In, Numeric, Route, String, Unique, as_update

PRODUCT_FIELDS = [
    Field('internal_code', String(max=100), Unique('products', ignore=Route('product'))),
    Field('identifier', String(max=100), nullable=True),
    Field('description', String(max=2000), nullable=True),
    Field('price', Numeric(min=0, **MONEY)),
    Field('cost', Numeric(min=0, **MONEY), nullable=True),
    Field('status', In(('enabled', 'disabled')), required=False),
]

LENS_TYPE_FIELDS = [
    Field('name', String(max=255), Unique('lens_types', ignore=Route('lens_type'))),
    Field('description', String(max=1000), nullable=True),
]

LABORATORY_FIELDS = [
    Field('name', String(max=255), Unique('laboratories', ignore=Route('laboratory'))),
    Field('contact_person', String(max=255), nullable=True),
    Field('email', Email(), String(max=255), nullable=True),
    Field('phone', String(max=20), nullable=True),
    Field('address', String(max=255), nullable=True),
    Field('status', In(('active', 'inactive')), required=False),
]

TREATMENT_FIELDS = [
    Field('name', String(max=255), Unique('treatments', ignore=Route('treatment'))),
    Field('description', String(max=1000), nullable=True),
    Field('cost', Numeric(min=0, **MONEY), nullable=True),
]


class StoreProductRequest(MutationRequest):
    name = 'store product'
    gate = ADMIN_ONLY
    fields = PRODUCT_FIELDS


class UpdateProductRequest(MutationRequest):
    name = 'update product'
    gate = ADMIN_ONLY
    fields = as_update(PRODUCT_FIELDS)


class StoreLensTypeRequest(MutationRequest):
    name = 'store lens type'
    gate = ADMIN_OR_SPECIALIST
    fields = LENS_TYPE_FIELDS


class UpdateLensTypeRequest(MutationRequest):
    name = 'update lens type'
    gate = ADMIN_OR_SPECIALIST
    fields = as_update(LENS_TYPE_FIELDS)


class StoreLaboratoryRequest(MutationRequest):
    name = 'store laboratory'
    gate = ADMIN_ONLY
    fields = LABORATORY_FIELDS


class UpdateLaboratoryRequest(MutationRequest):
    name = 'update laboratory'
    gate = ADMIN_ONLY
    fields = as_update(LABORATORY_FIELDS)


class StoreTreatmentRequest(MutationRequest):
    name = 'store treatment'
    gate = ADMIN_OR_SPECIALIST
    fields = TREATMENT_FIELDS


class UpdateTreatmentRequest(MutationRequest):
    name = 'update treatment'
    gate = ADMIN_OR_SPECIALIST
    fields = as_update(TREATMENT_FIELDS)
