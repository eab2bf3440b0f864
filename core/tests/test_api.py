"""
Integration tests for the optica API.

These exercise the validation pipeline and the prescription lifecycle
trigger end to end through Django REST Framework's APIClient.

To run the tests:

```
pytest -q core/tests
```
"""
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from ..models import (
    Appointment, PaymentMethod, Patient, Prescription, Product, Sale, User, Warehouse, WarehouseLocation,
)


class OpticaAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(username='admin1', password='P@ssw0rd1', role='admin')
        self.receptionist = User.objects.create_user(username='recep1', password='P@ssw0rd1', role='receptionist')
        self.specialist = User.objects.create_user(username='spec1', password='P@ssw0rd1', role='specialist')

        self.patient = Patient.objects.create(
            first_name='Ana', last_name='Gómez', identification='1001', gender='female',
        )
        self.other_patient = Patient.objects.create(
            first_name='Luis', last_name='Pérez', identification='2002', gender='male',
        )
        self.appointment = Appointment.objects.create(
            patient=self.patient, specialist=self.specialist, scheduled_at=timezone.now() + timedelta(hours=1),
        )
        self.lens = Product.objects.create(internal_code='LENS-001', price=Decimal('100.00'))
        self.sale = Sale.objects.create(
            sale_number='SALE-000100', patient=self.patient, total=Decimal('100.00'), balance=Decimal('100.00'),
        )
        self.cash = PaymentMethod.objects.create(name='Cash', code='cash')
        warehouse = Warehouse.objects.create(name='Main', code='MAIN')
        self.shelf_a = WarehouseLocation.objects.create(warehouse=warehouse, name='Shelf A', code='A')
        self.shelf_b = WarehouseLocation.objects.create(warehouse=warehouse, name='Shelf B', code='B')

    def authenticate(self, user: User) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    def assertError(self, response, status_code, code):
        self.assertEqual(response.status_code, status_code, response.data)
        self.assertFalse(response.data['ok'])
        self.assertEqual(response.data['error']['code'], code)

    # uniqueness with self-exclusion

    def test_patient_identification_collision_is_rejected(self):
        client = self.authenticate(self.receptionist)
        response = client.post('/api/v1/patients', {
            'first_name': 'Eva', 'last_name': 'Ruiz', 'identification': '1001', 'gender': 'female',
        }, format='json')
        self.assertError(response, status.HTTP_422_UNPROCESSABLE_ENTITY, 'validation_failed')
        self.assertEqual(list(response.data['error']['errors']), ['identification'])

    def test_patient_update_keeps_its_own_identification(self):
        client = self.authenticate(self.receptionist)
        response = client.put(f'/api/v1/patients/{self.patient.pk}', {
            'identification': '1001', 'first_name': 'Ana María',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.patient.refresh_from_db()
        self.assertEqual(self.patient.first_name, 'Ana María')

    def test_patient_update_cannot_take_another_identification(self):
        client = self.authenticate(self.receptionist)
        response = client.put(f'/api/v1/patients/{self.patient.pk}', {'identification': '2002'}, format='json')
        self.assertError(response, status.HTTP_422_UNPROCESSABLE_ENTITY, 'validation_failed')

    # cross-field "must differ"

    def test_transfer_between_the_same_location_is_rejected(self):
        client = self.authenticate(self.admin)
        payload = {
            'lens_id': self.lens.pk, 'source_location_id': self.shelf_a.pk,
            'destination_location_id': self.shelf_a.pk, 'quantity': 2,
        }
        response = client.post('/api/v1/inventory-transfers', payload, format='json')
        self.assertError(response, status.HTTP_422_UNPROCESSABLE_ENTITY, 'validation_failed')
        self.assertIn('destination_location_id', response.data['error']['errors'])

        payload['destination_location_id'] = self.shelf_b.pk
        response = client.post('/api/v1/inventory-transfers', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data['data']['transferred_by_id'], self.admin.pk)

    # adjusted price must exceed the base price

    def test_adjusted_price_must_exceed_the_lens_price(self):
        client = self.authenticate(self.receptionist)
        url = f'/api/v1/sales/{self.sale.pk}/lens-price-adjustments'
        for price in ('100.00', '80'):
            response = client.post(url, {'lens_id': self.lens.pk, 'adjusted_price': price}, format='json')
            self.assertError(response, status.HTTP_422_UNPROCESSABLE_ENTITY, 'validation_failed')
            message = response.data['error']['errors']['adjusted_price'][0]
            self.assertIn('base price of the lens', message)

        response = client.post(url, {'lens_id': self.lens.pk, 'adjusted_price': '100.01'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data['data']['base_price'], Decimal('100.00'))
        self.assertEqual(response.data['data']['adjustment_amount'], Decimal('0.01'))

    # partial payment bounded by the sale balance

    def test_partial_payment_above_the_balance_is_rejected(self):
        client = self.authenticate(self.receptionist)
        url = f'/api/v1/sales/{self.sale.pk}/partial-payments'
        payload = {'payment_method_id': self.cash.pk, 'amount': '100.01', 'payment_date': '2024-05-01'}
        response = client.post(url, payload, format='json')
        self.assertError(response, status.HTTP_422_UNPROCESSABLE_ENTITY, 'validation_failed')
        self.assertIn('amount', response.data['error']['errors'])

    def test_partial_payments_settle_the_sale(self):
        client = self.authenticate(self.receptionist)
        url = f'/api/v1/sales/{self.sale.pk}/partial-payments'
        payload = {'payment_method_id': self.cash.pk, 'amount': '60', 'payment_date': '2024-05-01'}
        response = client.post(url, payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data['sale']['balance'], Decimal('40.00'))
        self.assertEqual(response.data['sale']['payment_status'], Sale.PAYMENT_PARTIAL)

        payload['amount'] = '40.00'
        response = client.post(url, payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.sale.refresh_from_db()
        self.assertEqual(self.sale.balance, Decimal('0'))
        self.assertEqual(self.sale.payment_status, Sale.PAYMENT_PAID)
        self.assertEqual(self.sale.status, Sale.STATUS_COMPLETED)

    # lifecycle trigger through the API

    def test_prescription_completes_the_appointment(self):
        client = self.authenticate(self.specialist)
        response = client.post(f'/api/v1/appointments/{self.appointment.pk}/take')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['data']['status'], Appointment.STATUS_IN_PROGRESS)

        response = client.post('/api/v1/prescriptions', {
            'appointment_id': self.appointment.pk, 'date': '2024-05-01',
            'document': '1001', 'patient_name': 'Ana Gómez', 'right_sphere': '-1.25',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        response = client.get(f'/api/v1/appointments/{self.appointment.pk}?include=prescription')
        self.assertEqual(response.data['data']['status'], Appointment.STATUS_COMPLETED)
        self.assertEqual(response.data['data']['prescription']['right_sphere'], '-1.25')

    def test_prescription_for_missing_appointment_is_refused(self):
        client = self.authenticate(self.specialist)
        response = client.post('/api/v1/prescriptions', {
            'appointment_id': 999999, 'date': '2024-05-01', 'document': '1', 'patient_name': 'x',
        }, format='json')
        self.assertError(response, status.HTTP_403_FORBIDDEN, 'authorization_denied')
        self.assertFalse(Prescription.objects.exists())

    # authorization before validation

    def test_denied_probe_reports_only_the_authorization_error(self):
        client = self.authenticate(self.receptionist)
        response = client.post('/api/v1/prescriptions', {}, format='json')
        self.assertError(response, status.HTTP_403_FORBIDDEN, 'authorization_denied')
        self.assertNotIn('errors', response.data['error'])

        response = client.post(f'/api/v1/patients/{self.patient.pk}/notes', {}, format='json')
        self.assertError(response, status.HTTP_403_FORBIDDEN, 'authorization_denied')
        self.assertNotIn('errors', response.data['error'])

    # scoped uniqueness

    def test_same_lens_may_be_adjusted_in_different_sales(self):
        other_sale = Sale.objects.create(
            sale_number='SALE-000200', patient=self.other_patient, total=Decimal('50'), balance=Decimal('50'),
        )
        client = self.authenticate(self.admin)
        payload = {'lens_id': self.lens.pk, 'adjusted_price': '120.00', 'reason': 'Premium coating'}
        for sale in (self.sale, other_sale):
            response = client.post(f'/api/v1/sales/{sale.pk}/lens-price-adjustments', payload, format='json')
            self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        response = client.post(f'/api/v1/sales/{self.sale.pk}/lens-price-adjustments', payload, format='json')
        self.assertError(response, status.HTTP_422_UNPROCESSABLE_ENTITY, 'validation_failed')
        self.assertEqual(
            response.data['error']['errors']['lens_id'],
            ['This lens already has a price adjustment in this sale.'],
        )
