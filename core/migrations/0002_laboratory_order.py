# Laboratory orders

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('core', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='LaboratoryOrder',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('order_number', models.CharField(max_length=32, unique=True)),
                ('status', models.CharField(
                    choices=[
                        ('pending', 'Pending'),
                        ('in_process', 'In process'),
                        ('sent_to_lab', 'Sent to laboratory'),
                        ('ready_for_delivery', 'Ready for delivery'),
                        ('delivered', 'Delivered'),
                        ('cancelled', 'Cancelled'),
                    ],
                    db_index=True, default='pending', max_length=20,
                )),
                ('priority', models.CharField(
                    choices=[('low', 'Low'), ('normal', 'Normal'), ('high', 'High'), ('urgent', 'Urgent')],
                    default='normal', max_length=10,
                )),
                ('estimated_completion_date', models.DateField(blank=True, null=True)),
                ('completion_date', models.DateField(blank=True, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('laboratory', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='core.laboratory',
                )),
                ('patient', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT, related_name='laboratory_orders', to='core.patient',
                )),
                ('sale', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='laboratory_orders', to='core.sale',
                )),
                ('created_by', models.ForeignKey(
                    blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL,
                    related_name='laboratory_orders', to=settings.AUTH_USER_MODEL,
                )),
            ],
        ),
    ]
