# Initial schema for the optica core app

from decimal import Decimal

from django.conf import settings
import django.contrib.auth.models
import django.contrib.auth.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


def money(**kwargs):
    return models.DecimalField(decimal_places=2, max_digits=12, **kwargs)


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
        ('contenttypes', '0002_remove_content_type_name'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(
                    default=False,
                    help_text='Designates that this user has all permissions without explicitly assigning them.',
                    verbose_name='superuser status',
                )),
                ('username', models.CharField(
                    error_messages={'unique': 'A user with that username already exists.'},
                    help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.',
                    max_length=150,
                    unique=True,
                    validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
                    verbose_name='username',
                )),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(
                    default=False,
                    help_text='Designates whether the user can log into this admin site.',
                    verbose_name='staff status',
                )),
                ('is_active', models.BooleanField(
                    default=True,
                    help_text='Designates whether this user should be treated as active. '
                              'Unselect this instead of deleting accounts.',
                    verbose_name='active',
                )),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('role', models.CharField(
                    choices=[('admin', 'Administrator'), ('specialist', 'Specialist'), ('receptionist', 'Receptionist')],
                    db_index=True,
                    default='receptionist',
                    max_length=20,
                )),
                ('groups', models.ManyToManyField(
                    blank=True,
                    help_text='The groups this user belongs to. A user will get all permissions granted to each '
                              'of their groups.',
                    related_name='user_set',
                    related_query_name='user',
                    to='auth.group',
                    verbose_name='groups',
                )),
                ('user_permissions', models.ManyToManyField(
                    blank=True,
                    help_text='Specific permissions for this user.',
                    related_name='user_set',
                    related_query_name='user',
                    to='auth.permission',
                    verbose_name='user permissions',
                )),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'abstract': False,
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Patient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=255)),
                ('last_name', models.CharField(max_length=255)),
                ('identification', models.CharField(max_length=255, unique=True)),
                ('email', models.EmailField(blank=True, max_length=255, null=True, unique=True)),
                ('phone', models.CharField(blank=True, max_length=20, null=True)),
                ('birth_date', models.DateField(blank=True, null=True)),
                ('gender', models.CharField(
                    choices=[('male', 'Male'), ('female', 'Female'), ('other', 'Other')], max_length=10,
                )),
                ('address', models.CharField(blank=True, max_length=255, null=True)),
                ('status', models.CharField(
                    choices=[('active', 'Active'), ('inactive', 'Inactive')],
                    db_index=True, default='active', max_length=10,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
        ),
        # sale is added once Sale exists; the two tables reference each other
        migrations.CreateModel(
            name='Appointment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('scheduled_at', models.DateTimeField()),
                ('status', models.CharField(
                    choices=[
                        ('scheduled', 'Scheduled'),
                        ('in_progress', 'In progress'),
                        ('paused', 'Paused'),
                        ('completed', 'Completed'),
                        ('cancelled', 'Cancelled'),
                    ],
                    db_index=True, default='scheduled', max_length=20,
                )),
                ('notes', models.TextField(blank=True, null=True)),
                ('taken_at', models.DateTimeField(blank=True, null=True)),
                ('paused_at', models.DateTimeField(blank=True, null=True)),
                ('resumed_at', models.DateTimeField(blank=True, null=True)),
                ('is_billed', models.BooleanField(default=False)),
                ('billed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('patient', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='appointments', to='core.patient',
                )),
                ('specialist', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='specialist_appointments', to=settings.AUTH_USER_MODEL,
                )),
                ('receptionist', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='receptionist_appointments', to=settings.AUTH_USER_MODEL,
                )),
                ('taken_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='taken_appointments', to=settings.AUTH_USER_MODEL,
                )),
            ],
        ),
        migrations.CreateModel(
            name='Prescription',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField()),
                ('document', models.CharField(max_length=255)),
                ('patient_name', models.CharField(max_length=255)),
                ('right_sphere', models.CharField(blank=True, max_length=50, null=True)),
                ('right_cylinder', models.CharField(blank=True, max_length=50, null=True)),
                ('right_axis', models.CharField(blank=True, max_length=50, null=True)),
                ('right_addition', models.CharField(blank=True, max_length=50, null=True)),
                ('right_height', models.CharField(blank=True, max_length=50, null=True)),
                ('right_distance_p', models.CharField(blank=True, max_length=50, null=True)),
                ('right_visual_acuity_far', models.CharField(blank=True, max_length=50, null=True)),
                ('right_visual_acuity_near', models.CharField(blank=True, max_length=50, null=True)),
                ('left_sphere', models.CharField(blank=True, max_length=50, null=True)),
                ('left_cylinder', models.CharField(blank=True, max_length=50, null=True)),
                ('left_axis', models.CharField(blank=True, max_length=50, null=True)),
                ('left_addition', models.CharField(blank=True, max_length=50, null=True)),
                ('left_height', models.CharField(blank=True, max_length=50, null=True)),
                ('left_distance_p', models.CharField(blank=True, max_length=50, null=True)),
                ('left_visual_acuity_far', models.CharField(blank=True, max_length=50, null=True)),
                ('left_visual_acuity_near', models.CharField(blank=True, max_length=50, null=True)),
                ('correction_type', models.CharField(blank=True, max_length=255, null=True)),
                ('usage_type', models.CharField(blank=True, max_length=255, null=True)),
                ('recommendation', models.TextField(blank=True, null=True)),
                ('professional', models.CharField(blank=True, max_length=255, null=True)),
                ('observation', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('appointment', models.ForeignKey(
                    db_constraint=False, on_delete=django.db.models.deletion.DO_NOTHING,
                    related_name='prescriptions', to='core.appointment',
                )),
            ],
        ),
        migrations.CreateModel(
            name='PaymentMethod',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('code', models.CharField(max_length=50, unique=True)),
                ('is_active', models.BooleanField(default=True)),
            ],
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('internal_code', models.CharField(max_length=100, unique=True)),
                ('identifier', models.CharField(blank=True, max_length=100, null=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('price', money()),
                ('cost', money(blank=True, null=True)),
                ('status', models.CharField(
                    choices=[('enabled', 'Enabled'), ('disabled', 'Disabled')], default='enabled', max_length=10,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
        ),
        migrations.CreateModel(
            name='Sale',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('sale_number', models.CharField(max_length=32, unique=True)),
                ('subtotal', money(default=Decimal('0'))),
                ('tax', money(default=Decimal('0'))),
                ('discount', money(default=Decimal('0'))),
                ('total', money()),
                ('amount_paid', money(default=Decimal('0'))),
                ('balance', money(default=Decimal('0'))),
                ('status', models.CharField(
                    choices=[
                        ('pending', 'Pending'),
                        ('completed', 'Completed'),
                        ('cancelled', 'Cancelled'),
                        ('refunded', 'Refunded'),
                    ],
                    db_index=True, default='pending', max_length=20,
                )),
                ('payment_status', models.CharField(
                    choices=[('pending', 'Pending'), ('partial', 'Partial'), ('paid', 'Paid')],
                    db_index=True, default='pending', max_length=20,
                )),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('patient', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name='sales', to='core.patient',
                )),
                ('appointment', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='sales', to='core.appointment',
                )),
                ('created_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='sales', to=settings.AUTH_USER_MODEL,
                )),
            ],
        ),
        migrations.AddField(
            model_name='appointment',
            name='sale',
            field=models.ForeignKey(
                blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                related_name='billed_appointments', to='core.sale',
            ),
        ),
        migrations.AddIndex(
            model_name='appointment',
            index=models.Index(fields=['taken_by', 'status'], name='core_appt_taker_status_idx'),
        ),
        migrations.AddIndex(
            model_name='appointment',
            index=models.Index(fields=['specialist', 'scheduled_at'], name='core_appt_spec_sched_idx'),
        ),
        migrations.CreateModel(
            name='PartialPayment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', money()),
                ('reference_number', models.CharField(blank=True, max_length=255, null=True)),
                ('payment_date', models.DateField()),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('sale', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='partial_payments', to='core.sale',
                )),
                ('payment_method', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='partial_payments', to='core.paymentmethod',
                )),
                ('created_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='partial_payments', to=settings.AUTH_USER_MODEL,
                )),
            ],
        ),
        migrations.CreateModel(
            name='LensType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
            ],
        ),
        migrations.CreateModel(
            name='Warehouse',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('code', models.CharField(max_length=50, unique=True)),
                ('address', models.CharField(blank=True, max_length=255, null=True)),
                ('status', models.CharField(
                    choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', max_length=10,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
        ),
        migrations.CreateModel(
            name='WarehouseLocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('code', models.CharField(max_length=50)),
                ('type', models.CharField(blank=True, max_length=50, null=True)),
                ('status', models.CharField(
                    choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', max_length=10,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('warehouse', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='locations', to='core.warehouse',
                )),
            ],
            options={
                'unique_together': {('warehouse', 'code')},
            },
        ),
        migrations.CreateModel(
            name='InventoryTransfer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.PositiveIntegerField()),
                ('notes', models.TextField(blank=True, null=True)),
                ('status', models.CharField(
                    choices=[('pending', 'Pending'), ('completed', 'Completed'), ('cancelled', 'Cancelled')],
                    db_index=True, default='pending', max_length=20,
                )),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('lens', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name='transfers', to='core.product',
                )),
                ('source_location', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='outgoing_transfers', to='core.warehouselocation',
                )),
                ('destination_location', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='incoming_transfers', to='core.warehouselocation',
                )),
                ('transferred_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='inventory_transfers', to=settings.AUTH_USER_MODEL,
                )),
            ],
        ),
        migrations.CreateModel(
            name='Laboratory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
                ('contact_person', models.CharField(blank=True, max_length=255, null=True)),
                ('email', models.EmailField(blank=True, max_length=255, null=True)),
                ('phone', models.CharField(blank=True, max_length=20, null=True)),
                ('address', models.CharField(blank=True, max_length=255, null=True)),
                ('status', models.CharField(
                    choices=[('active', 'Active'), ('inactive', 'Inactive')], default='active', max_length=10,
                )),
            ],
            options={
                'verbose_name_plural': 'laboratories',
            },
        ),
        migrations.CreateModel(
            name='Treatment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('cost', money(blank=True, null=True)),
            ],
        ),
        migrations.CreateModel(
            name='SaleLensPriceAdjustment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('base_price', money()),
                ('adjusted_price', money()),
                ('adjustment_amount', money()),
                ('reason', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('sale', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='lens_price_adjustments', to='core.sale',
                )),
                ('lens', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name='price_adjustments', to='core.product',
                )),
                ('adjusted_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='price_adjustments', to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'unique_together': {('sale', 'lens')},
            },
        ),
        migrations.CreateModel(
            name='Note',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('object_id', models.PositiveBigIntegerField()),
                ('content', models.TextField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('content_type', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, to='contenttypes.contenttype',
                )),
                ('user', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='notes', to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'indexes': [
                    models.Index(fields=['content_type', 'object_id', 'created_at'], name='core_note_target_idx'),
                ],
            },
        ),
    ]
