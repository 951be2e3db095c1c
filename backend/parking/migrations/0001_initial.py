import uuid

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='TruckPark',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(help_text='Name of the parking', max_length=200)),
                ('address', models.CharField(blank=True, max_length=300)),
                ('country', models.CharField(help_text='ISO 3166-1 alpha-2 country code', max_length=2)),
                ('latitude', models.DecimalField(decimal_places=7, help_text='Latitude in decimal degrees', max_digits=10, validators=[django.core.validators.MinValueValidator(-90), django.core.validators.MaxValueValidator(90)])),
                ('longitude', models.DecimalField(decimal_places=7, help_text='Longitude in decimal degrees', max_digits=10, validators=[django.core.validators.MinValueValidator(-180), django.core.validators.MaxValueValidator(180)])),
                ('total_spaces', models.PositiveIntegerField(blank=True, null=True)),
                ('has_security', models.BooleanField(default=False)),
                ('has_camera', models.BooleanField(default=False)),
                ('has_fence', models.BooleanField(default=False)),
                ('has_electricity', models.BooleanField(default=False)),
                ('has_water', models.BooleanField(default=False)),
                ('has_toilets', models.BooleanField(default=False)),
                ('has_showers', models.BooleanField(default=False)),
                ('has_restaurant', models.BooleanField(default=False)),
                ('has_shop', models.BooleanField(default=False)),
                ('has_adblue', models.BooleanField(default=False)),
                ('has_wifi', models.BooleanField(default=False)),
                ('current_occupancy_pct', models.PositiveSmallIntegerField(blank=True, help_text='Last reported occupancy in percent', null=True, validators=[django.core.validators.MaxValueValidator(100)])),
                ('last_occupancy_update', models.DateTimeField(blank=True, null=True)),
                ('price_per_night_eur', models.DecimalField(blank=True, decimal_places=2, max_digits=6, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('is_free', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Truck Park',
                'verbose_name_plural': 'Truck Parks',
                'db_table': 'truck_parks',
                'indexes': [
                    models.Index(fields=['latitude', 'longitude'], name='truck_parks_latitud_5e8a21_idx'),
                    models.Index(fields=['country'], name='truck_parks_country_9f14c3_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('name', 'country'), name='unique_truck_park_per_country'),
                ],
            },
        ),
    ]
