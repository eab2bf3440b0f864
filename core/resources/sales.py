from __future__ import annotations

from core.models import LaboratoryOrder, PartialPayment, PaymentMethod, Sale, SaleLensPriceAdjustment
from core.resources.base import check_includes
from core.resources.catalog import laboratory_resource, product_resource
from core.resources.clinic import patient_resource

SALE_INCLUDES = ('patient', 'partial_payments', 'lens_price_adjustments')
PAYMENT_INCLUDES = ('payment_method',)
ADJUSTMENT_INCLUDES = ('lens',)
LABORATORY_ORDER_INCLUDES = ('laboratory', 'patient', 'sale')


def payment_method_resource(method: PaymentMethod) -> dict:
    return {'id': method.pk, 'name': method.name, 'code': method.code, 'is_active': method.is_active}


def sale_resource(sale: Sale, include=()) -> dict:
    include = check_includes(include, SALE_INCLUDES)
    data = {
        'id': sale.pk,
        'sale_number': sale.sale_number,
        'patient_id': sale.patient_id,
        'appointment_id': sale.appointment_id,
        'subtotal': sale.subtotal,
        'tax': sale.tax,
        'discount': sale.discount,
        'total': sale.total,
        'amount_paid': sale.amount_paid,
        'balance': sale.balance,
        'status': sale.status,
        'payment_status': sale.payment_status,
        'notes': sale.notes,
        'created_by_id': sale.created_by_id,
        'created_at': sale.created_at,
        'updated_at': sale.updated_at,
    }
    if 'patient' in include:
        data['patient'] = patient_resource(sale.patient)
    if 'partial_payments' in include:
        data['partial_payments'] = [
            partial_payment_resource(p, include=('payment_method',))
            for p in sale.partial_payments.select_related('payment_method').order_by('payment_date', 'id')
        ]
    if 'lens_price_adjustments' in include:
        data['lens_price_adjustments'] = [
            price_adjustment_resource(a) for a in sale.lens_price_adjustments.order_by('id')
        ]
    return data


def partial_payment_resource(payment: PartialPayment, include=()) -> dict:
    include = check_includes(include, PAYMENT_INCLUDES)
    data = {
        'id': payment.pk,
        'sale_id': payment.sale_id,
        'payment_method_id': payment.payment_method_id,
        'amount': payment.amount,
        'reference_number': payment.reference_number,
        'payment_date': payment.payment_date,
        'notes': payment.notes,
        'created_by_id': payment.created_by_id,
        'created_at': payment.created_at,
    }
    if 'payment_method' in include:
        data['payment_method'] = payment_method_resource(payment.payment_method)
    return data


def price_adjustment_resource(adjustment: SaleLensPriceAdjustment, include=()) -> dict:
    include = check_includes(include, ADJUSTMENT_INCLUDES)
    data = {
        'id': adjustment.pk,
        'sale_id': adjustment.sale_id,
        'lens_id': adjustment.lens_id,
        'base_price': adjustment.base_price,
        'adjusted_price': adjustment.adjusted_price,
        'adjustment_amount': adjustment.adjustment_amount,
        'reason': adjustment.reason,
        'adjusted_by_id': adjustment.adjusted_by_id,
        'created_at': adjustment.created_at,
    }
    if 'lens' in include:
        data['lens'] = product_resource(adjustment.lens)
    return data


def laboratory_order_resource(order: LaboratoryOrder, include=()) -> dict:
    include = check_includes(include, LABORATORY_ORDER_INCLUDES)
    data = {
        'id': order.pk,
        'order_number': order.order_number,
        'laboratory_id': order.laboratory_id,
        'patient_id': order.patient_id,
        'sale_id': order.sale_id,
        'status': order.status,
        'priority': order.priority,
        'estimated_completion_date': order.estimated_completion_date,
        'completion_date': order.completion_date,
        'notes': order.notes,
        'created_by_id': order.created_by_id,
        'created_at': order.created_at,
        'updated_at': order.updated_at,
    }
    if 'laboratory' in include:
        data['laboratory'] = laboratory_resource(order.laboratory)
    if 'patient' in include:
        data['patient'] = patient_resource(order.patient)
    if 'sale' in include and order.sale_id is not None:
        data['sale'] = sale_resource(order.sale)
    return data
