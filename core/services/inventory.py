from __future__ import annotations

import logging

from django.utils import timezone

from core.models import InventoryTransfer, User
from core.store import store

logger = logging.getLogger(__name__)


def _stamp_completion(transfer: InventoryTransfer, previous_status) -> None:
    if transfer.status == InventoryTransfer.STATUS_COMPLETED and previous_status != transfer.status:
        transfer.completed_at = timezone.now()


def create_transfer(user: User, data: dict) -> InventoryTransfer:
    transfer = InventoryTransfer(transferred_by=user, **data)
    _stamp_completion(transfer, None)
    store.save(transfer)
    logger.info('transfer %s: lens %s x%s from %s to %s', transfer.pk, transfer.lens_id, transfer.quantity,
                transfer.source_location_id, transfer.destination_location_id)
    return transfer


def update_transfer(transfer: InventoryTransfer, data: dict) -> InventoryTransfer:
    previous_status = transfer.status
    for key, value in data.items():
        setattr(transfer, key, value)
    _stamp_completion(transfer, previous_status)
    store.save(transfer)
    if previous_status != transfer.status:
        logger.info('transfer %s %s -> %s', transfer.pk, previous_status, transfer.status)
    return transfer
