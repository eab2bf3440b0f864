"""
URL mappings for the ``/api/v1/`` surface.

URL kwargs are named after the record they identify (``patient``,
``sale``...) because request classes read them back through
:class:`~core.identity.RouteParams`.  Trailing slashes are omitted.
"""
from django.urls import include, path

from .views import (
    appointments, catalog, health, inventory, laboratory_orders, notes, patients, prescriptions, sales,
)

API = 'api/v1/'

urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz, name='healthz'),
    # Patients
    path(API + 'patients', patients.patients, name='patients'),
    path(API + 'patients/<int:patient>', patients.patient_detail, name='patient-detail'),
    # Appointments
    path(API + 'appointments', appointments.appointments, name='appointments'),
    path(API + 'appointments/<int:appointment>', appointments.appointment_detail, name='appointment-detail'),
    path(API + 'appointments/<int:appointment>/take', appointments.take_appointment, name='appointment-take'),
    path(API + 'appointments/<int:appointment>/pause', appointments.pause_appointment, name='appointment-pause'),
    path(API + 'appointments/<int:appointment>/resume', appointments.resume_appointment,
         name='appointment-resume'),
    path(API + 'appointments/<int:appointment>/reschedule', appointments.reschedule_appointment,
         name='appointment-reschedule'),
    # Prescriptions
    path(API + 'prescriptions', prescriptions.prescriptions, name='prescriptions'),
    path(API + 'prescriptions/<int:prescription>', prescriptions.prescription_detail,
         name='prescription-detail'),
    # Sales, partial payments and lens price adjustments
    path(API + 'sales', sales.sales, name='sales'),
    path(API + 'sales/<int:sale>', sales.sale_detail, name='sale-detail'),
    path(API + 'sales/<int:sale>/partial-payments', sales.partial_payments, name='sale-partial-payments'),
    path(API + 'sales/<int:sale>/partial-payments/<int:payment>', sales.remove_partial_payment,
         name='sale-partial-payment-remove'),
    path(API + 'partial-payments/<int:payment>', sales.partial_payment_detail, name='partial-payment-detail'),
    path(API + 'sales/<int:sale>/lens-price-adjustments', sales.price_adjustments,
         name='sale-price-adjustments'),
    path(API + 'sales/<int:sale>/lens-price-adjustments/<int:adjustment>', sales.price_adjustment_detail,
         name='sale-price-adjustment-detail'),
    path(API + 'sales/<int:sale>/lenses/<int:lens>/adjusted-price', sales.adjusted_price,
         name='sale-lens-adjusted-price'),
    # Inventory
    path(API + 'warehouses', inventory.warehouses, name='warehouses'),
    path(API + 'warehouses/<int:warehouse>', inventory.warehouse_detail, name='warehouse-detail'),
    path(API + 'warehouse-locations', inventory.locations, name='warehouse-locations'),
    path(API + 'warehouse-locations/<int:location>', inventory.location_detail, name='warehouse-location-detail'),
    path(API + 'inventory-transfers', inventory.transfers, name='inventory-transfers'),
    path(API + 'inventory-transfers/<int:transfer>', inventory.transfer_detail, name='inventory-transfer-detail'),
    # Catalog
    path(API + 'products', catalog.products, name='products'),
    path(API + 'products/<int:product>', catalog.product_detail, name='product-detail'),
    path(API + 'lens-types', catalog.lens_types, name='lens-types'),
    path(API + 'lens-types/<int:lens_type>', catalog.lens_type_detail, name='lens-type-detail'),
    path(API + 'laboratories', catalog.laboratories, name='laboratories'),
    path(API + 'laboratories/<int:laboratory>', catalog.laboratory_detail, name='laboratory-detail'),
    path(API + 'laboratory-orders', laboratory_orders.laboratory_orders, name='laboratory-orders'),
    path(API + 'laboratory-orders/<int:laboratory_order>', laboratory_orders.laboratory_order_detail,
         name='laboratory-order-detail'),
    path(API + 'treatments', catalog.treatments, name='treatments'),
    path(API + 'treatments/<int:treatment>', catalog.treatment_detail, name='treatment-detail'),
    # Notes on any noteable record; the gate rejects unknown types
    path(API + '<str:type>/<int:id>/notes', notes.notes, name='notes'),
]
