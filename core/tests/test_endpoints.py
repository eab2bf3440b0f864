from decimal import Decimal

import pytest
from django.core.management import call_command
from django.db import DatabaseError

from core.models import (
    Appointment, InventoryTransfer, Laboratory, LaboratoryOrder, Note, PartialPayment, Sale, User,
)

pytestmark = pytest.mark.django_db


def test_healthz_is_public(client):
    r = client.get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True}


def test_api_requires_authentication():
    from rest_framework.test import APIClient
    r = APIClient().get('/api/v1/patients')
    assert r.status_code == 401
    assert r.data['error']['code'] == 'not_authenticated'


def test_patient_list_is_paginated(client_for, receptionist, patient):
    r = client_for(receptionist).get('/api/v1/patients?page_size=1')
    assert r.status_code == 200
    assert r.data['meta'] == {'page': 1, 'page_size': 1, 'total': 1, 'last_page': 1}
    assert r.data['data'][0]['identification'] == '1001'


def test_unknown_include_is_a_client_error(client_for, receptionist, appointment):
    c = client_for(receptionist)
    r = c.get(f'/api/v1/appointments/{appointment.pk}?include=patient')
    assert r.status_code == 200
    assert r.data['data']['patient']['identification'] == '1001'
    assert 'specialist' not in r.data['data']
    r = c.get(f'/api/v1/appointments/{appointment.pk}?include=bogus')
    assert r.status_code == 400
    assert r.data['error']['code'] == 'invalid'


def test_receptionist_schedules_appointments(client_for, receptionist, patient, specialist):
    r = client_for(receptionist).post('/api/v1/appointments', {
        'patient_id': patient.pk, 'specialist_id': specialist.pk, 'scheduled_at': '2024-06-01T09:00:00',
    }, format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['receptionist_id'] == receptionist.pk
    assert r.data['data']['status'] == Appointment.STATUS_SCHEDULED


def test_specialist_id_must_be_a_specialist(client_for, receptionist, patient):
    r = client_for(receptionist).post('/api/v1/appointments', {
        'patient_id': patient.pk, 'specialist_id': receptionist.pk, 'scheduled_at': '2024-06-01T09:00:00',
    }, format='json')
    assert r.status_code == 422
    assert list(r.data['error']['errors']) == ['specialist_id']


def test_specialist_cannot_schedule(client_for, specialist, patient):
    r = client_for(specialist).post('/api/v1/appointments', {}, format='json')
    assert r.status_code == 403
    assert r.data['error']['code'] == 'authorization_denied'


def test_taking_a_second_appointment_conflicts(client_for, specialist, appointment, patient):
    second = Appointment.objects.create(patient=patient, specialist=specialist, scheduled_at=appointment.scheduled_at)
    c = client_for(specialist)
    assert c.post(f'/api/v1/appointments/{appointment.pk}/take').status_code == 200
    r = c.post(f'/api/v1/appointments/{second.pk}/take')
    assert r.status_code == 409
    assert r.data['error']['code'] == 'conflicting_state'
    assert r.data['error']['context'] == {'appointment_id': appointment.pk}


def test_pause_and_resume(client_for, specialist, appointment, patient):
    c = client_for(specialist)
    c.post(f'/api/v1/appointments/{appointment.pk}/take')
    r = c.post(f'/api/v1/appointments/{appointment.pk}/pause')
    assert r.data['data']['status'] == Appointment.STATUS_PAUSED

    # another appointment in progress blocks the resume
    second = Appointment.objects.create(patient=patient, specialist=specialist, scheduled_at=appointment.scheduled_at)
    assert c.post(f'/api/v1/appointments/{second.pk}/take').status_code == 200
    r = c.post(f'/api/v1/appointments/{appointment.pk}/resume')
    assert r.status_code == 409
    assert r.data['error']['context'] == {'appointment_id': second.pk}

    c.post(f'/api/v1/appointments/{second.pk}/pause')
    r = c.post(f'/api/v1/appointments/{appointment.pk}/resume')
    assert r.status_code == 200
    assert r.data['data']['status'] == Appointment.STATUS_IN_PROGRESS
    assert r.data['data']['resumed_at'] is not None


def test_only_scheduled_appointments_can_be_taken(client_for, specialist, appointment):
    Appointment.objects.filter(pk=appointment.pk).update(status=Appointment.STATUS_CANCELLED)
    r = client_for(specialist).post(f'/api/v1/appointments/{appointment.pk}/take')
    assert r.status_code == 409
    assert r.data['error']['context']['status'] == Appointment.STATUS_CANCELLED


def test_failed_appointment_write_fails_the_prescription(client_for, specialist, appointment, monkeypatch):
    c = client_for(specialist)
    c.post(f'/api/v1/appointments/{appointment.pk}/take')

    def broken_save(self, *args, **kwargs):
        raise DatabaseError('disk full')

    monkeypatch.setattr(Appointment, 'save', broken_save)
    r = c.post('/api/v1/prescriptions', {
        'appointment_id': appointment.pk, 'date': '2024-05-01', 'document': '1001', 'patient_name': 'Ana',
    }, format='json')
    assert r.status_code == 500
    assert r.data['error']['code'] == 'persistence_failure'


def test_new_sale_starts_unpaid_and_bills_its_appointment(client_for, receptionist, patient, appointment):
    r = client_for(receptionist).post('/api/v1/sales', {
        'patient_id': patient.pk, 'appointment_id': appointment.pk, 'total': '250.00',
    }, format='json')
    assert r.status_code == 201, r.data
    data = r.data['data']
    assert data['sale_number'].startswith('SALE-') and len(data['sale_number']) == 11
    assert data['balance'] == Decimal('250.00')
    assert data['amount_paid'] == Decimal('0')
    assert data['payment_status'] == Sale.PAYMENT_PENDING
    appointment.refresh_from_db()
    assert appointment.is_billed and appointment.sale_id == data['id']


def test_only_admins_remove_payments(client_for, admin_user, receptionist, sale, cash):
    c = client_for(receptionist)
    r = c.post(f'/api/v1/sales/{sale.pk}/partial-payments', {
        'payment_method_id': cash.pk, 'amount': '100', 'payment_date': '2024-05-01',
    }, format='json')
    payment_id = r.data['data']['id']
    sale.refresh_from_db()
    assert sale.status == Sale.STATUS_COMPLETED

    url = f'/api/v1/sales/{sale.pk}/partial-payments/{payment_id}'
    r = c.delete(url)
    assert r.status_code == 403
    r = client_for(admin_user).delete(url)
    assert r.status_code == 200
    assert r.data['sale']['balance'] == Decimal('100.00')
    sale.refresh_from_db()
    assert sale.status == Sale.STATUS_PENDING
    assert sale.payment_status == Sale.PAYMENT_PENDING
    assert not PartialPayment.objects.exists()


def test_adjusted_price_lookup(client_for, admin_user, sale, lens):
    c = client_for(admin_user)
    url = f'/api/v1/sales/{sale.pk}/lenses/{lens.pk}/adjusted-price'
    assert c.get(url).data['data']['adjusted_price'] == Decimal('100.00')
    c.post(f'/api/v1/sales/{sale.pk}/lens-price-adjustments', {'lens_id': lens.pk, 'adjusted_price': '130'},
           format='json')
    data = c.get(url).data['data']
    assert data['is_adjusted'] and data['adjustment_amount'] == Decimal('30.00')


def test_completing_a_transfer_stamps_it(client_for, admin_user, lens, shelves):
    transfer = InventoryTransfer.objects.create(
        lens=lens, source_location=shelves[0], destination_location=shelves[1], quantity=1,
    )
    r = client_for(admin_user).put(f'/api/v1/inventory-transfers/{transfer.pk}', {'status': 'completed'},
                                   format='json')
    assert r.status_code == 200, r.data
    assert r.data['data']['completed_at'] is not None


def test_inventory_is_admin_only(client_for, receptionist):
    r = client_for(receptionist).get('/api/v1/warehouses')
    assert r.status_code == 403
    assert r.data['error']['code'] == 'authorization_denied'


def test_location_codes_are_unique_per_warehouse(client_for, admin_user, warehouse, shelves):
    c = client_for(admin_user)
    r = c.post('/api/v1/warehouse-locations', {'warehouse_id': warehouse.pk, 'name': 'Dup', 'code': 'A'},
               format='json')
    assert r.status_code == 422
    r = c.put(f'/api/v1/warehouse-locations/{shelves[0].pk}', {'code': 'A', 'name': 'Renamed'}, format='json')
    assert r.status_code == 200, r.data


def test_catalog_writes_are_gated(client_for, receptionist, specialist):
    r = client_for(receptionist).post('/api/v1/products', {'internal_code': 'X', 'price': 1}, format='json')
    assert r.status_code == 403
    r = client_for(specialist).post('/api/v1/treatments', {'name': 'Anti-glare', 'cost': '15'}, format='json')
    assert r.status_code == 201, r.data
    r = client_for(specialist).post('/api/v1/treatments', {'name': 'Anti-glare'}, format='json')
    assert r.status_code == 422
    r = client_for(receptionist).get('/api/v1/laboratories')
    assert r.status_code == 200


def test_notes_on_lenses(client_for, receptionist, lens):
    c = client_for(receptionist)
    url = f'/api/v1/lenses/{lens.pk}/notes'
    r = c.post(url, {'content': '<b>Scratch</b> on the left lens'}, format='json')
    assert r.status_code == 201, r.data
    assert r.data['data']['content'] == 'Scratch on the left lens'
    assert r.data['data']['user']['id'] == receptionist.pk
    c.post(url, {'content': 'Replaced'}, format='json')
    r = c.get(url)
    assert [n['content'] for n in r.data['data']] == ['Replaced', 'Scratch on the left lens']
    assert Note.objects.count() == 2


def test_notes_on_missing_target_are_refused(client_for, receptionist):
    r = client_for(receptionist).get('/api/v1/appointments/424242/notes')
    assert r.status_code == 403


def test_ensure_demo_users_is_idempotent():
    call_command('ensure_demo_users', password='secret-pass-1')
    call_command('ensure_demo_users', password='secret-pass-1')
    assert sorted(User.objects.values_list('role', flat=True)) == ['admin', 'receptionist', 'specialist']
    assert User.objects.get(username='specialist').check_password('secret-pass-1')


@pytest.mark.parametrize('destination', ['float', 'zero_padded'])
def test_transfer_ends_that_cast_to_the_same_id_are_rejected(client_for, admin_user, lens, shelves, destination):
    a = shelves[0]
    payload = {
        'lens_id': lens.pk, 'source_location_id': a.pk, 'quantity': 1,
        'destination_location_id': float(a.pk) if destination == 'float' else f'0{a.pk}',
    }
    if destination == 'zero_padded':
        payload['source_location_id'] = str(a.pk)
    r = client_for(admin_user).post('/api/v1/inventory-transfers', payload, format='json')
    assert r.status_code == 422
    assert list(r.data['error']['errors']) == ['destination_location_id']
    assert not InventoryTransfer.objects.exists()


def test_boolean_ids_are_rejected(client_for, receptionist, patient):
    r = client_for(receptionist).post('/api/v1/sales', {'patient_id': True, 'total': '10'}, format='json')
    assert r.status_code == 422
    assert list(r.data['error']['errors']) == ['patient_id']
    assert not Sale.objects.exists()


def test_transfer_update_cannot_collapse_onto_the_stored_end(client_for, admin_user, lens, shelves):
    a, b = shelves
    transfer = InventoryTransfer.objects.create(lens=lens, source_location=a, destination_location=b, quantity=1)
    c = client_for(admin_user)
    url = f'/api/v1/inventory-transfers/{transfer.pk}'
    r = c.patch(url, {'destination_location_id': a.pk}, format='json')
    assert r.status_code == 422
    r = c.patch(url, {'source_location_id': b.pk}, format='json')
    assert r.status_code == 422
    transfer.refresh_from_db()
    assert (transfer.source_location_id, transfer.destination_location_id) == (a.pk, b.pk)


def test_amounts_must_fit_the_money_columns(client_for, receptionist, patient, sale, cash):
    c = client_for(receptionist)
    r = c.post('/api/v1/sales', {'patient_id': patient.pk, 'total': '1e20'}, format='json')
    assert r.status_code == 422
    assert list(r.data['error']['errors']) == ['total']
    r = c.post(f'/api/v1/sales/{sale.pk}/partial-payments', {
        'payment_method_id': cash.pk, 'amount': '10.005', 'payment_date': '2024-05-01',
    }, format='json')
    assert r.status_code == 422
    assert list(r.data['error']['errors']) == ['amount']
    assert Sale.objects.count() == 1


def test_payment_date_with_trailing_text_is_rejected(client_for, receptionist, sale, cash):
    r = client_for(receptionist).post(f'/api/v1/sales/{sale.pk}/partial-payments', {
        'payment_method_id': cash.pk, 'amount': '10', 'payment_date': '2024-05-01 not a date',
    }, format='json')
    assert r.status_code == 422
    assert r.data['error']['errors'] == {'payment_date': ['The payment date is not a valid date.']}
    assert not PartialPayment.objects.exists()


def test_reschedule_puts_the_appointment_back_on_the_agenda(client_for, receptionist, specialist, appointment):
    c = client_for(specialist)
    c.post(f'/api/v1/appointments/{appointment.pk}/take')
    c.post(f'/api/v1/appointments/{appointment.pk}/pause')
    r = client_for(receptionist).post(f'/api/v1/appointments/{appointment.pk}/reschedule', {
        'scheduled_at': '2024-07-01T10:00:00', 'notes': 'Patient asked for a later slot',
    }, format='json')
    assert r.status_code == 200, r.data
    assert r.data['data']['status'] == Appointment.STATUS_SCHEDULED
    appointment.refresh_from_db()
    assert appointment.scheduled_at.date().isoformat() == '2024-07-01'
    assert appointment.notes == 'Patient asked for a later slot'


def test_completed_appointments_cannot_be_rescheduled(client_for, receptionist, appointment):
    Appointment.objects.filter(pk=appointment.pk).update(status=Appointment.STATUS_COMPLETED)
    r = client_for(receptionist).post(f'/api/v1/appointments/{appointment.pk}/reschedule', {
        'scheduled_at': '2024-07-01T10:00:00',
    }, format='json')
    assert r.status_code == 409
    assert r.data['error']['context'] == {'appointment_id': appointment.pk, 'status': 'completed'}


def test_reschedule_requires_a_valid_time(client_for, receptionist, appointment):
    r = client_for(receptionist).post(f'/api/v1/appointments/{appointment.pk}/reschedule', {
        'scheduled_at': 'next week',
    }, format='json')
    assert r.status_code == 422
    assert r.data['error']['errors'] == {'scheduled_at': ['The scheduled at is not a valid date and time.']}


@pytest.mark.parametrize('state', [Appointment.STATUS_IN_PROGRESS, Appointment.STATUS_COMPLETED])
def test_worked_appointments_cannot_be_deleted(client_for, receptionist, appointment, state):
    Appointment.objects.filter(pk=appointment.pk).update(status=state)
    r = client_for(receptionist).delete(f'/api/v1/appointments/{appointment.pk}')
    assert r.status_code == 409
    assert r.data['error']['code'] == 'conflicting_state'
    assert Appointment.objects.filter(pk=appointment.pk).exists()


def test_scheduled_appointment_deletion(client_for, receptionist, specialist, appointment):
    url = f'/api/v1/appointments/{appointment.pk}'
    assert client_for(specialist).delete(url).status_code == 403
    assert client_for(receptionist).delete(url).status_code == 204
    assert not Appointment.objects.exists()


@pytest.fixture
def laboratory(db):
    return Laboratory.objects.create(name='Opticlab')


def test_laboratory_order_lifecycle(client_for, specialist, laboratory, patient, sale):
    c = client_for(specialist)
    r = c.post('/api/v1/laboratory-orders', {
        'laboratory_id': laboratory.pk, 'patient_id': patient.pk, 'sale_id': sale.pk,
        'estimated_completion_date': '2024-06-10',
    }, format='json')
    assert r.status_code == 201, r.data
    data = r.data['data']
    assert data['order_number'] == 'LAB-000001'
    assert (data['status'], data['priority']) == ('pending', 'normal')
    assert data['created_by_id'] == specialist.pk

    url = f"/api/v1/laboratory-orders/{data['id']}"
    r = c.patch(url, {'status': 'delivered'}, format='json')
    assert r.status_code == 200, r.data
    assert r.data['data']['completion_date'] is not None

    r = c.get(url + '?include=laboratory,patient')
    assert r.data['data']['laboratory']['name'] == 'Opticlab'


def test_laboratory_order_rules(client_for, receptionist, laboratory, patient):
    r = client_for(receptionist).post('/api/v1/laboratory-orders', {
        'laboratory_id': laboratory.pk, 'patient_id': patient.pk, 'status': 'lost', 'priority': 'asap',
    }, format='json')
    assert r.status_code == 422
    assert set(r.data['error']['errors']) == {'status', 'priority'}
    assert not LaboratoryOrder.objects.exists()


def test_orders_in_process_cannot_be_deleted(client_for, receptionist, laboratory, patient):
    c = client_for(receptionist)
    started = LaboratoryOrder.objects.create(
        order_number='LAB-000010', laboratory=laboratory, patient=patient, status=LaboratoryOrder.STATUS_IN_PROCESS,
    )
    r = c.delete(f'/api/v1/laboratory-orders/{started.pk}')
    assert r.status_code == 409
    assert r.data['error']['context'] == {'laboratory_order_id': started.pk, 'status': 'in_process'}

    pending = LaboratoryOrder.objects.create(order_number='LAB-000011', laboratory=laboratory, patient=patient)
    assert c.delete(f'/api/v1/laboratory-orders/{pending.pk}').status_code == 204
    assert list(LaboratoryOrder.objects.values_list('pk', flat=True)) == [started.pk]
