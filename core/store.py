"""
Record store used by validation rules, gates and the lifecycle observer.

Rules name collections (``"products"``, ``"sales"``...) rather than model
classes so a rule set reads like the data it guards.  The store resolves
the name, runs the query and turns database write errors into
:class:`~core.exceptions.PersistenceFailure`.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from django.apps import apps
from django.db import DatabaseError, models

from core.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)

COLLECTIONS = {
    'users': 'core.User',
    'patients': 'core.Patient',
    'appointments': 'core.Appointment',
    'prescriptions': 'core.Prescription',
    'sales': 'core.Sale',
    'partial_payments': 'core.PartialPayment',
    'payment_methods': 'core.PaymentMethod',
    'inventory_transfers': 'core.InventoryTransfer',
    'products': 'core.Product',
    'lens_types': 'core.LensType',
    'warehouses': 'core.Warehouse',
    'warehouse_locations': 'core.WarehouseLocation',
    'laboratories': 'core.Laboratory',
    'laboratory_orders': 'core.LaboratoryOrder',
    'treatments': 'core.Treatment',
    'sale_lens_price_adjustments': 'core.SaleLensPriceAdjustment',
    'notes': 'core.Note',
}


class RecordStore(Protocol):
    def find(self, collection: str, pk: Any) -> Optional[Any]: ...

    def exists(self, collection: str, exclude: Optional[dict] = None, **filters) -> bool: ...

    def save(self, record: Any, **kwargs) -> Any: ...


class DjangoRecordStore:
    def model(self, collection: str) -> type[models.Model]:
        try:
            label = COLLECTIONS[collection]
        except KeyError:
            raise LookupError(f'unknown collection {collection!r}') from None
        return apps.get_model(label)

    def find(self, collection: str, pk: Any) -> Optional[models.Model]:
        if pk in (None, '') or isinstance(pk, bool):
            return None
        try:
            return self.model(collection).objects.filter(pk=pk).first()
        except (TypeError, ValueError):
            # keys that cannot be cast to the pk type match nothing
            return None

    def exists(self, collection: str, exclude: Optional[dict] = None, **filters) -> bool:
        model = self.model(collection)
        try:
            qs = model.objects.filter(**filters)
            if exclude:
                qs = qs.exclude(**exclude)
            return qs.exists()
        except (TypeError, ValueError):
            return False

    def save(self, record: models.Model, **kwargs) -> models.Model:
        try:
            record.save(**kwargs)
        except DatabaseError as exc:
            logger.exception('could not save %s %s', record._meta.label, record.pk)
            raise PersistenceFailure(f'{record._meta.verbose_name} could not be saved') from exc
        return record


store = DjangoRecordStore()
