from __future__ import annotations

from core.models import (
    InventoryTransfer, Laboratory, LensType, Product, Treatment, Warehouse, WarehouseLocation,
)
from core.resources.base import check_includes

LOCATION_INCLUDES = ('warehouse',)
TRANSFER_INCLUDES = ('lens', 'source_location', 'destination_location')


def product_resource(product: Product, include=()) -> dict:
    check_includes(include, ())
    return {
        'id': product.pk,
        'internal_code': product.internal_code,
        'identifier': product.identifier,
        'description': product.description,
        'price': product.price,
        'cost': product.cost,
        'status': product.status,
        'created_at': product.created_at,
        'updated_at': product.updated_at,
    }


def lens_type_resource(lens_type: LensType, include=()) -> dict:
    check_includes(include, ())
    return {'id': lens_type.pk, 'name': lens_type.name, 'description': lens_type.description}


def laboratory_resource(lab: Laboratory, include=()) -> dict:
    check_includes(include, ())
    return {
        'id': lab.pk,
        'name': lab.name,
        'contact_person': lab.contact_person,
        'email': lab.email,
        'phone': lab.phone,
        'address': lab.address,
        'status': lab.status,
    }


def treatment_resource(treatment: Treatment, include=()) -> dict:
    check_includes(include, ())
    return {
        'id': treatment.pk,
        'name': treatment.name,
        'description': treatment.description,
        'cost': treatment.cost,
    }


def warehouse_resource(warehouse: Warehouse, include=()) -> dict:
    check_includes(include, ())
    return {
        'id': warehouse.pk,
        'name': warehouse.name,
        'code': warehouse.code,
        'address': warehouse.address,
        'status': warehouse.status,
        'created_at': warehouse.created_at,
    }


def location_resource(location: WarehouseLocation, include=()) -> dict:
    include = check_includes(include, LOCATION_INCLUDES)
    data = {
        'id': location.pk,
        'warehouse_id': location.warehouse_id,
        'name': location.name,
        'code': location.code,
        'type': location.type,
        'status': location.status,
    }
    if 'warehouse' in include:
        data['warehouse'] = warehouse_resource(location.warehouse)
    return data


def transfer_resource(transfer: InventoryTransfer, include=()) -> dict:
    include = check_includes(include, TRANSFER_INCLUDES)
    data = {
        'id': transfer.pk,
        'lens_id': transfer.lens_id,
        'source_location_id': transfer.source_location_id,
        'destination_location_id': transfer.destination_location_id,
        'quantity': transfer.quantity,
        'transferred_by_id': transfer.transferred_by_id,
        'notes': transfer.notes,
        'status': transfer.status,
        'completed_at': transfer.completed_at,
        'created_at': transfer.created_at,
        'updated_at': transfer.updated_at,
    }
    if 'lens' in include:
        data['lens'] = product_resource(transfer.lens)
    for relation in ('source_location', 'destination_location'):
        if relation in include:
            data[relation] = location_resource(getattr(transfer, relation))
    return data
