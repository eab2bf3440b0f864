"""
Laboratory orders.

Orders are numbered ``LAB-000001`` and stamped with a completion date when
they are delivered.  Once a laboratory has started on an order it can no
longer be deleted, only cancelled.
"""
from __future__ import annotations

import logging

from django.utils import timezone

from core.exceptions import ConflictingState
from core.models import LaboratoryOrder, User
from core.services.records import next_number
from core.store import store

logger = logging.getLogger(__name__)

ORDER_NUMBER_PREFIX = 'LAB-'
DELETABLE_STATUSES = (LaboratoryOrder.STATUS_PENDING, LaboratoryOrder.STATUS_CANCELLED)


def _stamp_delivery(order: LaboratoryOrder, previous_status) -> None:
    if order.status == LaboratoryOrder.STATUS_DELIVERED and previous_status != order.status:
        order.completion_date = timezone.localdate()


def create_laboratory_order(user: User, data: dict) -> LaboratoryOrder:
    order = LaboratoryOrder(order_number=next_number(LaboratoryOrder, 'order_number', ORDER_NUMBER_PREFIX),
                            created_by=user, **data)
    _stamp_delivery(order, None)
    store.save(order)
    logger.info('laboratory order %s for patient %s sent to laboratory %s',
                order.order_number, order.patient_id, order.laboratory_id)
    return order


def update_laboratory_order(order: LaboratoryOrder, data: dict) -> LaboratoryOrder:
    previous_status = order.status
    for key, value in data.items():
        setattr(order, key, value)
    _stamp_delivery(order, previous_status)
    store.save(order)
    if previous_status != order.status:
        logger.info('laboratory order %s %s -> %s', order.order_number, previous_status, order.status)
    return order


def delete_laboratory_order(order: LaboratoryOrder, user: User) -> None:
    if order.status not in DELETABLE_STATUSES:
        raise ConflictingState(
            'The laboratory order is already being processed and cannot be deleted.',
            laboratory_order_id=order.pk, status=order.status,
        )
    number = order.order_number
    order.delete()
    logger.info('laboratory order %s deleted by %s', number, user.pk)
