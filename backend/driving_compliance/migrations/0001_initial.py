import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='DrivingSession',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier for the driving session', primary_key=True, serialize=False)),
                ('started_at', models.DateTimeField(help_text='When the driver started driving')),
                ('ended_at', models.DateTimeField(blank=True, help_text='When the driver stopped driving (empty while active)', null=True)),
                ('total_driving_min', models.PositiveIntegerField(blank=True, help_text='Driving minutes in this session, rounded up at stop', null=True)),
                ('total_break_min', models.PositiveIntegerField(blank=True, help_text='Break minutes taken during the session', null=True)),
                ('distance_km', models.DecimalField(blank=True, decimal_places=2, help_text='Distance covered in kilometres', max_digits=8, null=True, validators=[django.core.validators.MinValueValidator(0)])),
                ('is_compliant', models.BooleanField(blank=True, help_text='Whether the session ended without violations', null=True)),
                ('violations', models.JSONField(blank=True, default=list, help_text='Violation messages recorded when the session stopped')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('driver', models.ForeignKey(help_text='The driver this session belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='driving_sessions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Driving Session',
                'verbose_name_plural': 'Driving Sessions',
                'db_table': 'driving_sessions',
                'ordering': ['-started_at'],
                'indexes': [
                    models.Index(fields=['driver', 'started_at'], name='driving_ses_driver__3b1f0e_idx'),
                    models.Index(fields=['ended_at'], name='driving_ses_ended_a_7c2d41_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('ended_at__isnull', True)), fields=('driver',), name='one_active_session_per_driver'),
                    models.CheckConstraint(condition=models.Q(('ended_at__isnull', True), ('ended_at__gt', models.F('started_at')), _connector='OR'), name='session_ends_after_start'),
                ],
            },
        ),
    ]
