import datetime
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from core.models import Appointment, PaymentMethod, Patient, Product, Sale, User, Warehouse, WarehouseLocation


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username='admin1', password='P@ssw0rd1', role=User.ROLE_ADMIN)


@pytest.fixture
def specialist(db):
    return User.objects.create_user(username='spec1', password='P@ssw0rd1', role=User.ROLE_SPECIALIST)


@pytest.fixture
def other_specialist(db):
    return User.objects.create_user(username='spec2', password='P@ssw0rd1', role=User.ROLE_SPECIALIST)


@pytest.fixture
def receptionist(db):
    return User.objects.create_user(username='recep1', password='P@ssw0rd1', role=User.ROLE_RECEPTIONIST)


@pytest.fixture
def client_for():
    def make(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return make


@pytest.fixture
def patient(db):
    return Patient.objects.create(
        first_name='Ana', last_name='Gómez', identification='1001', email='ana@example.com', gender='female',
    )


@pytest.fixture
def appointment(patient, specialist):
    return Appointment.objects.create(
        patient=patient, specialist=specialist, scheduled_at=timezone.now() + datetime.timedelta(hours=1),
    )


@pytest.fixture
def lens(db):
    return Product.objects.create(internal_code='LENS-001', identifier='Progressive 1.67', price=Decimal('100.00'))


@pytest.fixture
def sale(patient, admin_user):
    return Sale.objects.create(
        sale_number='SALE-000100', patient=patient, total=Decimal('100.00'), balance=Decimal('100.00'),
        created_by=admin_user,
    )


@pytest.fixture
def cash(db):
    return PaymentMethod.objects.create(name='Cash', code='cash')


@pytest.fixture
def warehouse(db):
    return Warehouse.objects.create(name='Main', code='MAIN')


@pytest.fixture
def shelves(warehouse):
    a = WarehouseLocation.objects.create(warehouse=warehouse, name='Shelf A', code='A')
    b = WarehouseLocation.objects.create(warehouse=warehouse, name='Shelf B', code='B')
    return a, b
