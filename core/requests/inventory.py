from core.models import InventoryTransfer
from core.permissions import ADMIN_ONLY
from core.requests.base import MutationRequest
from core.validation import (
    Coalesce, Different, Exists, Field, In, Integer, Lookup, Payload, Route, String, Unique, as_update, optional,
)

STATUSES = ('active', 'inactive')
TRANSFER_STATUSES = tuple(code for code, _ in InventoryTransfer.STATUS_CHOICES)

WAREHOUSE_FIELDS = [
    Field('name', String(max=255)),
    Field('code', String(max=50), Unique('warehouses', ignore=Route('warehouse'))),
    Field('address', String(max=255), nullable=True),
    Field('status', In(STATUSES), required=False),
]

# codes repeat across warehouses; on update the stored warehouse scopes the check
LOCATION_WAREHOUSE = Coalesce(
    Payload('warehouse_id'),
    Lookup('warehouse_locations', Route('location'), 'warehouse_id'),
)

LOCATION_FIELDS = [
    Field('warehouse_id', Integer(min=1), Exists('warehouses')),
    Field('name', String(max=255)),
    Field('code', String(max=50), Unique(
        'warehouse_locations', ignore=Route('location'), where={'warehouse_id': LOCATION_WAREHOUSE},
    )),
    Field('type', String(max=50), nullable=True),
    Field('status', In(STATUSES), required=False),
]

# the stored row fills in whichever end an update leaves out
TRANSFER_SOURCE = Coalesce(
    Payload('source_location_id'),
    Lookup('inventory_transfers', Route('transfer'), 'source_location_id'),
)
TRANSFER_DESTINATION = Coalesce(
    Payload('destination_location_id'),
    Lookup('inventory_transfers', Route('transfer'), 'destination_location_id'),
)

TRANSFER_FIELDS = [
    Field('lens_id', Integer(min=1), Exists('products')),
    Field('source_location_id', Integer(min=1), Exists('warehouse_locations')),
    Field(
        'destination_location_id',
        Integer(min=1),
        Exists('warehouse_locations'),
        Different('source_location_id', ref=TRANSFER_SOURCE),
    ),
    Field('quantity', Integer(min=1)),
    Field('notes', String(max=1000), nullable=True),
    Field('status', In(TRANSFER_STATUSES), required=False),
]

UPDATE_TRANSFER_FIELDS = [
    optional(Field(
        'source_location_id',
        Integer(min=1),
        Exists('warehouse_locations'),
        Different('destination_location_id', ref=TRANSFER_DESTINATION),
    )) if f.name == 'source_location_id' else f
    for f in as_update(TRANSFER_FIELDS)
]


class StoreWarehouseRequest(MutationRequest):
    name = 'store warehouse'
    gate = ADMIN_ONLY
    fields = WAREHOUSE_FIELDS


class UpdateWarehouseRequest(MutationRequest):
    name = 'update warehouse'
    gate = ADMIN_ONLY
    fields = as_update(WAREHOUSE_FIELDS)


class StoreLocationRequest(MutationRequest):
    name = 'store warehouse location'
    gate = ADMIN_ONLY
    fields = LOCATION_FIELDS


class UpdateLocationRequest(MutationRequest):
    name = 'update warehouse location'
    gate = ADMIN_ONLY
    fields = as_update(LOCATION_FIELDS)


class StoreTransferRequest(MutationRequest):
    name = 'store inventory transfer'
    gate = ADMIN_ONLY
    fields = TRANSFER_FIELDS


class UpdateTransferRequest(MutationRequest):
    name = 'update inventory transfer'
    gate = ADMIN_ONLY
    fields = UPDATE_TRANSFER_FIELDS


class DestroyTransferRequest(MutationRequest):
    name = 'destroy inventory transfer'
    gate = ADMIN_ONLY
