"""Django admin registrations for the optica records."""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import (
    Appointment, InventoryTransfer, Laboratory, LaboratoryOrder, LensType, Note, PartialPayment, Patient,
    PaymentMethod, Prescription, Product, Sale, SaleLensPriceAdjustment, Treatment, User, Warehouse,
    WarehouseLocation,
)


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'role', 'email', 'is_active', 'is_staff')
    list_filter = ('role', 'is_active')
    fieldsets = BaseUserAdmin.fieldsets + (('Role', {'fields': ('role',)}),)


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('identification', 'first_name', 'last_name', 'gender', 'status')
    list_filter = ('status', 'gender')
    search_fields = ('identification', 'first_name', 'last_name', 'email')


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient', 'specialist', 'scheduled_at', 'status', 'taken_by')
    list_filter = ('status',)
    search_fields = ('patient__identification', 'specialist__username')


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ('id', 'appointment_id', 'date', 'patient_name', 'professional')
    search_fields = ('patient_name', 'document')


class PartialPaymentInline(admin.TabularInline):
    model = PartialPayment
    extra = 0


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ('sale_number', 'patient', 'total', 'balance', 'status', 'payment_status')
    list_filter = ('status', 'payment_status')
    search_fields = ('sale_number', 'patient__identification')
    inlines = [PartialPaymentInline]


@admin.register(SaleLensPriceAdjustment)
class SaleLensPriceAdjustmentAdmin(admin.ModelAdmin):
    list_display = ('sale', 'lens', 'base_price', 'adjusted_price', 'adjustment_amount')


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('internal_code', 'identifier', 'price', 'status')
    list_filter = ('status',)
    search_fields = ('internal_code', 'identifier', 'description')


@admin.register(InventoryTransfer)
class InventoryTransferAdmin(admin.ModelAdmin):
    list_display = ('id', 'lens', 'source_location', 'destination_location', 'quantity', 'status')
    list_filter = ('status',)


@admin.register(WarehouseLocation)
class WarehouseLocationAdmin(admin.ModelAdmin):
    list_display = ('code', 'name', 'warehouse', 'status')
    list_filter = ('warehouse', 'status')


@admin.register(Note)
class NoteAdmin(admin.ModelAdmin):
    list_display = ('id', 'content_type', 'object_id', 'user', 'created_at')


@admin.register(LaboratoryOrder)
class LaboratoryOrderAdmin(admin.ModelAdmin):
    list_display = ('order_number', 'laboratory', 'patient', 'status', 'priority', 'estimated_completion_date')
    list_filter = ('status', 'priority', 'laboratory')
    search_fields = ('order_number', 'patient__identification')


admin.site.register([PaymentMethod, LensType, Laboratory, Treatment, Warehouse])
