"""Sales, partial payments and lens price adjustments."""
from django.utils.translation import gettext_lazy as _

from core.models import MONEY
from core.permissions import ADMIN_ONLY, ADMIN_OR_RECEPTIONIST, AllowAuthenticated
from core.requests.base import MutationRequest
from core.validation import (
    AtMost, Date, Exists, Field, GreaterThan, Integer, Lookup, Numeric, Payload, Route, String, Unique,
)

MIN_AMOUNT = '0.01'


class StoreSaleRequest(MutationRequest):
    name = 'store sale'
    gate = ADMIN_OR_RECEPTIONIST
    fields = [
        Field('patient_id', Integer(min=1), Exists('patients')),
        Field('appointment_id', Integer(min=1), Exists('appointments'), nullable=True),
        Field('subtotal', Numeric(min=0, **MONEY), nullable=True),
        Field('tax', Numeric(min=0, **MONEY), nullable=True),
        Field('discount', Numeric(min=0, **MONEY), nullable=True),
        Field('total', Numeric(min=0, **MONEY)),
        Field('notes', String(max=1000), nullable=True),
    ]


class StorePartialPaymentRequest(MutationRequest):
    """The amount is bounded by the balance of the sale in the route."""
    name = 'store partial payment'
    gate = AllowAuthenticated()
    fields = [
        Field('payment_method_id', Integer(min=1), Exists('payment_methods')),
        Field('amount', Numeric(min=MIN_AMOUNT, **MONEY), AtMost(Lookup('sales', Route('sale'), 'balance'))),
        Field('reference_number', String(max=255), nullable=True),
        Field('payment_date', Date()),
        Field('notes', String(max=1000), nullable=True),
    ]
    messages = {
        'amount.lte': _('The amount may not exceed the pending balance of the sale (%(value)s).'),
    }


class DestroyPartialPaymentRequest(MutationRequest):
    name = 'destroy partial payment'
    gate = ADMIN_ONLY


class StorePriceAdjustmentRequest(MutationRequest):
    """One adjustment per lens and sale; only upward adjustments."""
    name = 'store lens price adjustment'
    gate = ADMIN_OR_RECEPTIONIST
    fields = [
        Field(
            'lens_id',
            Integer(min=1),
            Exists('products'),
            Unique('sale_lens_price_adjustments', where={'sale_id': Route('sale')}),
        ),
        Field(
            'adjusted_price',
            Numeric(min=MIN_AMOUNT, **MONEY),
            GreaterThan(Lookup('products', Payload('lens_id'), 'price')),
        ),
        Field('reason', String(max=500), nullable=True),
    ]
    messages = {
        'adjusted_price.gt': _(
            'The adjusted price must be greater than the base price of the lens (%(value)s). '
            'Use a discount to lower it.'
        ),
        'lens_id.unique': _('This lens already has a price adjustment in this sale.'),
    }


class DestroyPriceAdjustmentRequest(MutationRequest):
    name = 'destroy lens price adjustment'
    gate = ADMIN_OR_RECEPTIONIST
