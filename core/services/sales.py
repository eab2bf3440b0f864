"""
Sales, partial payments and lens price adjustments.

After every payment change the sale balance is recomputed from the stored
payments; the sale moves to ``completed`` once fully paid and back to
``pending`` when a removal leaves it unpaid.
"""
from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from core.models import PartialPayment, Product, Sale, SaleLensPriceAdjustment, User
from core.services.records import next_number
from core.store import store

logger = logging.getLogger(__name__)

SALE_NUMBER_PREFIX = 'SALE-'


def next_sale_number() -> str:
    return next_number(Sale, 'sale_number', SALE_NUMBER_PREFIX)


@transaction.atomic
def create_sale(user: User, data: dict) -> Sale:
    data = dict(data)
    for key in ('subtotal', 'tax', 'discount'):
        if data.get(key) is None:
            data[key] = Decimal('0')
    sale = Sale(
        sale_number=next_sale_number(),
        amount_paid=Decimal('0'),
        balance=data['total'],
        status=Sale.STATUS_PENDING,
        payment_status=Sale.PAYMENT_PENDING,
        created_by=user,
        **data,
    )
    store.save(sale)
    if sale.appointment_id:
        _bill_appointment(sale)
    logger.info('sale %s created total=%s', sale.sale_number, sale.total)
    return sale


def _bill_appointment(sale: Sale) -> None:
    appointment = store.find('appointments', sale.appointment_id)
    if appointment is None:
        return
    appointment.sale = sale
    appointment.is_billed = True
    appointment.billed_at = timezone.now()
    store.save(appointment, update_fields=['sale', 'is_billed', 'billed_at', 'updated_at'])


def _settle(sale: Sale) -> Sale:
    sale.update_balance()
    if sale.payment_status == Sale.PAYMENT_PAID and sale.status == Sale.STATUS_PENDING:
        sale.status = Sale.STATUS_COMPLETED
    elif sale.payment_status != Sale.PAYMENT_PAID and sale.status == Sale.STATUS_COMPLETED:
        sale.status = Sale.STATUS_PENDING
    else:
        return sale
    store.save(sale, update_fields=['status', 'updated_at'])
    logger.info('sale %s moved to %s', sale.sale_number, sale.status)
    return sale


@transaction.atomic
def add_partial_payment(sale: Sale, user: User, data: dict) -> tuple[PartialPayment, Sale]:
    payment = store.save(PartialPayment(sale=sale, created_by=user, **data))
    _settle(sale)
    logger.info('payment %s of %s added to sale %s; balance=%s', payment.pk, payment.amount, sale.sale_number,
                sale.balance)
    return payment, sale


@transaction.atomic
def remove_partial_payment(sale: Sale, payment: PartialPayment) -> Sale:
    payment_id = payment.pk
    payment.delete()
    _settle(sale)
    logger.info('payment %s removed from sale %s; balance=%s', payment_id, sale.sale_number, sale.balance)
    return sale


def create_price_adjustment(sale: Sale, user: User, data: dict) -> SaleLensPriceAdjustment:
    lens = Product.objects.get(pk=data['lens_id'])
    adjustment = SaleLensPriceAdjustment(
        sale=sale,
        lens=lens,
        base_price=lens.price,
        adjusted_price=data['adjusted_price'],
        reason=data.get('reason'),
        adjusted_by=user,
    )
    store.save(adjustment)
    logger.info('sale %s lens %s adjusted %s -> %s by %s', sale.sale_number, lens.pk, adjustment.base_price,
                adjustment.adjusted_price, user.pk)
    return adjustment


def adjusted_price(sale: Sale, lens: Product) -> dict:
    adjustment = sale.lens_price_adjustments.filter(lens=lens).first()
    return {
        'lens_id': lens.pk,
        'sale_id': sale.pk,
        'base_price': lens.price,
        'adjusted_price': adjustment.adjusted_price if adjustment else lens.price,
        'adjustment_amount': adjustment.adjustment_amount if adjustment else Decimal('0'),
        'is_adjusted': adjustment is not None,
    }


def remove_price_adjustment(adjustment: SaleLensPriceAdjustment, user: User) -> None:
    sale_id, lens_id = adjustment.sale_id, adjustment.lens_id
    adjustment.delete()
    logger.info('sale %s lens %s adjustment removed by %s', sale_id, lens_id, user.pk)
