"""
Database models for the optica backend.

These models capture the records an optical store works with: patients
and their appointments, the prescriptions written during an appointment,
sales with their partial payments and lens price adjustments, the product
catalog and the warehouse locations stock moves between.  Field names
mirror the JSON keys of the API so resources can be built without
renaming.
"""
from __future__ import annotations

from decimal import Decimal

from django.contrib.auth.models import AbstractUser
from django.contrib.contenttypes.fields import GenericForeignKey, GenericRelation
from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Sum

MONEY = dict(max_digits=12, decimal_places=2)


class User(AbstractUser):
    """Staff account with one of the store roles."""
    ROLE_ADMIN = 'admin'
    ROLE_SPECIALIST = 'specialist'
    ROLE_RECEPTIONIST = 'receptionist'
    ROLE_CHOICES = [
        (ROLE_ADMIN, 'Administrator'),
        (ROLE_SPECIALIST, 'Specialist'),
        (ROLE_RECEPTIONIST, 'Receptionist'),
    ]
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_RECEPTIONIST, db_index=True)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Patient(models.Model):
    GENDER_CHOICES = [('male', 'Male'), ('female', 'Female'), ('other', 'Other')]
    STATUS_CHOICES = [('active', 'Active'), ('inactive', 'Inactive')]

    first_name = models.CharField(max_length=255)
    last_name = models.CharField(max_length=255)
    identification = models.CharField(max_length=255, unique=True)
    email = models.EmailField(max_length=255, unique=True, null=True, blank=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    birth_date = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES)
    address = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active', db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self) -> str:
        return f"{self.full_name} ({self.identification})"


class Appointment(models.Model):
    """A visit of a patient with a specialist.

    The status moves ``scheduled -> in_progress`` when a specialist takes
    it, may bounce between ``in_progress`` and ``paused`` and ends as
    ``completed`` (set when a prescription is written) or ``cancelled``.
    """
    STATUS_SCHEDULED = 'scheduled'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_PAUSED = 'paused'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_IN_PROGRESS, 'In progress'),
        (STATUS_PAUSED, 'Paused'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    patient = models.ForeignKey(Patient, on_delete=models.CASCADE, related_name='appointments')
    specialist = models.ForeignKey(User, on_delete=models.PROTECT, related_name='specialist_appointments')
    receptionist = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='receptionist_appointments'
    )
    scheduled_at = models.DateTimeField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_SCHEDULED, db_index=True)
    notes = models.TextField(blank=True, null=True)
    taken_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='taken_appointments'
    )
    taken_at = models.DateTimeField(null=True, blank=True)
    paused_at = models.DateTimeField(null=True, blank=True)
    resumed_at = models.DateTimeField(null=True, blank=True)
    sale = models.ForeignKey(
        'Sale', null=True, blank=True, on_delete=models.SET_NULL, related_name='billed_appointments'
    )
    is_billed = models.BooleanField(default=False)
    billed_at = models.DateTimeField(null=True, blank=True)
    notes_thread = GenericRelation('Note', related_query_name='appointment')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['taken_by', 'status'], name='core_appt_taker_status_idx'),
            models.Index(fields=['specialist', 'scheduled_at'], name='core_appt_spec_sched_idx'),
        ]

    @property
    def prescription(self):
        return self.prescriptions.order_by('-id').first()

    def __str__(self) -> str:
        return f"appointment {self.pk} p={self.patient_id} s={self.specialist_id} [{self.status}]"


class Prescription(models.Model):
    """Lens prescription written during an appointment.

    The appointment reference is not enforced by the database; the
    lifecycle observer tolerates a dangling id.
    """
    appointment = models.ForeignKey(
        Appointment, on_delete=models.DO_NOTHING, db_constraint=False, related_name='prescriptions'
    )
    date = models.DateField()
    document = models.CharField(max_length=255)
    patient_name = models.CharField(max_length=255)
    right_sphere = models.CharField(max_length=50, blank=True, null=True)
    right_cylinder = models.CharField(max_length=50, blank=True, null=True)
    right_axis = models.CharField(max_length=50, blank=True, null=True)
    right_addition = models.CharField(max_length=50, blank=True, null=True)
    right_height = models.CharField(max_length=50, blank=True, null=True)
    right_distance_p = models.CharField(max_length=50, blank=True, null=True)
    right_visual_acuity_far = models.CharField(max_length=50, blank=True, null=True)
    right_visual_acuity_near = models.CharField(max_length=50, blank=True, null=True)
    left_sphere = models.CharField(max_length=50, blank=True, null=True)
    left_cylinder = models.CharField(max_length=50, blank=True, null=True)
    left_axis = models.CharField(max_length=50, blank=True, null=True)
    left_addition = models.CharField(max_length=50, blank=True, null=True)
    left_height = models.CharField(max_length=50, blank=True, null=True)
    left_distance_p = models.CharField(max_length=50, blank=True, null=True)
    left_visual_acuity_far = models.CharField(max_length=50, blank=True, null=True)
    left_visual_acuity_near = models.CharField(max_length=50, blank=True, null=True)
    correction_type = models.CharField(max_length=255, blank=True, null=True)
    usage_type = models.CharField(max_length=255, blank=True, null=True)
    recommendation = models.TextField(blank=True, null=True)
    professional = models.CharField(max_length=255, blank=True, null=True)
    observation = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"prescription {self.pk} appointment={self.appointment_id}"


class PaymentMethod(models.Model):
    name = models.CharField(max_length=100)
    code = models.CharField(max_length=50, unique=True)
    is_active = models.BooleanField(default=True)

    def __str__(self) -> str:
        return self.name


class Sale(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_REFUNDED = 'refunded'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
        (STATUS_REFUNDED, 'Refunded'),
    ]
    PAYMENT_PENDING = 'pending'
    PAYMENT_PARTIAL = 'partial'
    PAYMENT_PAID = 'paid'
    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_PENDING, 'Pending'),
        (PAYMENT_PARTIAL, 'Partial'),
        (PAYMENT_PAID, 'Paid'),
    ]

    sale_number = models.CharField(max_length=32, unique=True)
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='sales')
    appointment = models.ForeignKey(
        Appointment, null=True, blank=True, on_delete=models.SET_NULL, related_name='sales'
    )
    subtotal = models.DecimalField(default=Decimal('0'), **MONEY)
    tax = models.DecimalField(default=Decimal('0'), **MONEY)
    discount = models.DecimalField(default=Decimal('0'), **MONEY)
    total = models.DecimalField(**MONEY)
    amount_paid = models.DecimalField(default=Decimal('0'), **MONEY)
    balance = models.DecimalField(default=Decimal('0'), **MONEY)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    payment_status = models.CharField(
        max_length=20, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING, db_index=True
    )
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='sales')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def update_balance(self) -> 'Sale':
        """Recompute ``amount_paid``, ``balance`` and ``payment_status`` from stored payments."""
        paid = self.partial_payments.aggregate(total=Sum('amount'))['total'] or Decimal('0')
        self.amount_paid = paid
        self.balance = self.total - paid
        if self.balance <= 0:
            self.payment_status = self.PAYMENT_PAID
        elif paid > 0:
            self.payment_status = self.PAYMENT_PARTIAL
        else:
            self.payment_status = self.PAYMENT_PENDING
        self.save(update_fields=['amount_paid', 'balance', 'payment_status', 'updated_at'])
        return self

    def __str__(self) -> str:
        return f"{self.sale_number} total={self.total} balance={self.balance}"


class PartialPayment(models.Model):
    sale = models.ForeignKey(Sale, on_delete=models.CASCADE, related_name='partial_payments')
    payment_method = models.ForeignKey(PaymentMethod, on_delete=models.PROTECT, related_name='partial_payments')
    amount = models.DecimalField(**MONEY)
    reference_number = models.CharField(max_length=255, blank=True, null=True)
    payment_date = models.DateField()
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='partial_payments'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"payment {self.pk} sale={self.sale_id} amount={self.amount}"


class Product(models.Model):
    """Catalog item; lenses are products too."""
    STATUS_CHOICES = [('enabled', 'Enabled'), ('disabled', 'Disabled')]

    internal_code = models.CharField(max_length=100, unique=True)
    identifier = models.CharField(max_length=100, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(**MONEY)
    cost = models.DecimalField(null=True, blank=True, **MONEY)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='enabled')
    notes_thread = GenericRelation('Note', related_query_name='product')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.internal_code} ({self.price})"


class LensType(models.Model):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, null=True)

    def __str__(self) -> str:
        return self.name


class Warehouse(models.Model):
    STATUS_CHOICES = [('active', 'Active'), ('inactive', 'Inactive')]

    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50, unique=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


class WarehouseLocation(models.Model):
    STATUS_CHOICES = [('active', 'Active'), ('inactive', 'Inactive')]

    warehouse = models.ForeignKey(Warehouse, on_delete=models.CASCADE, related_name='locations')
    name = models.CharField(max_length=255)
    code = models.CharField(max_length=50)
    type = models.CharField(max_length=50, blank=True, null=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [('warehouse', 'code')]

    def __str__(self) -> str:
        return f"{self.code} @ {self.warehouse_id}"


class InventoryTransfer(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]

    lens = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='transfers')
    source_location = models.ForeignKey(
        WarehouseLocation, on_delete=models.PROTECT, related_name='outgoing_transfers'
    )
    destination_location = models.ForeignKey(
        WarehouseLocation, on_delete=models.PROTECT, related_name='incoming_transfers'
    )
    quantity = models.PositiveIntegerField()
    transferred_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='inventory_transfers'
    )
    notes = models.TextField(blank=True, null=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"transfer {self.pk}: {self.source_location_id} -> {self.destination_location_id} x{self.quantity}"


class Laboratory(models.Model):
    STATUS_CHOICES = [('active', 'Active'), ('inactive', 'Inactive')]

    name = models.CharField(max_length=255, unique=True)
    contact_person = models.CharField(max_length=255, blank=True, null=True)
    email = models.EmailField(max_length=255, blank=True, null=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='active')

    class Meta:
        verbose_name_plural = 'laboratories'

    def __str__(self) -> str:
        return self.name


class LaboratoryOrder(models.Model):
    """Lenses sent to an external laboratory for a patient."""
    STATUS_PENDING = 'pending'
    STATUS_IN_PROCESS = 'in_process'
    STATUS_SENT_TO_LAB = 'sent_to_lab'
    STATUS_READY_FOR_DELIVERY = 'ready_for_delivery'
    STATUS_DELIVERED = 'delivered'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_IN_PROCESS, 'In process'),
        (STATUS_SENT_TO_LAB, 'Sent to laboratory'),
        (STATUS_READY_FOR_DELIVERY, 'Ready for delivery'),
        (STATUS_DELIVERED, 'Delivered'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    PRIORITY_CHOICES = [('low', 'Low'), ('normal', 'Normal'), ('high', 'High'), ('urgent', 'Urgent')]

    order_number = models.CharField(max_length=32, unique=True)
    laboratory = models.ForeignKey(Laboratory, on_delete=models.PROTECT, related_name='orders')
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name='laboratory_orders')
    sale = models.ForeignKey(
        Sale, null=True, blank=True, on_delete=models.SET_NULL, related_name='laboratory_orders'
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='normal')
    estimated_completion_date = models.DateField(null=True, blank=True)
    completion_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True, null=True)
    created_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='laboratory_orders'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.order_number} [{self.status}]"


class Treatment(models.Model):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, null=True)
    cost = models.DecimalField(null=True, blank=True, **MONEY)

    def __str__(self) -> str:
        return self.name


class SaleLensPriceAdjustment(models.Model):
    """A lens sold above its catalog price within one sale.

    Only upward adjustments are stored; reductions go through discounts.
    """
    sale = models.ForeignKey(Sale, on_delete=models.CASCADE, related_name='lens_price_adjustments')
    lens = models.ForeignKey(Product, on_delete=models.PROTECT, related_name='price_adjustments')
    base_price = models.DecimalField(**MONEY)
    adjusted_price = models.DecimalField(**MONEY)
    adjustment_amount = models.DecimalField(**MONEY)
    reason = models.TextField(blank=True, null=True)
    adjusted_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='price_adjustments'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = [('sale', 'lens')]

    def save(self, *args, **kwargs):
        if self.adjusted_price <= self.base_price:
            raise ValidationError(
                {'adjusted_price': ['Lowering a lens price is not allowed; use a discount instead.']}
            )
        self.adjustment_amount = self.adjusted_price - self.base_price
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"sale {self.sale_id} lens {self.lens_id}: {self.base_price} -> {self.adjusted_price}"


class Note(models.Model):
    """Free-text note attached to any noteable record."""
    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveBigIntegerField()
    notable = GenericForeignKey('content_type', 'object_id')
    content = models.TextField()
    user = models.ForeignKey(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='notes')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['content_type', 'object_id', 'created_at'], name='core_note_target_idx')]

    def __str__(self) -> str:
        return f"note {self.pk} on {self.content_type_id}:{self.object_id}"
