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
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('slug', models.SlugField(help_text="Used for the URL, e.g., 'tech-summit-2024'", unique=True)),
                ('description', models.TextField(blank=True)),
                ('location', models.CharField(help_text="Venue or 'Online'", max_length=255)),
                ('start_at', models.DateTimeField()),
                ('end_at', models.DateTimeField()),
                ('capacity', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('requires_approval', models.BooleanField(default=True, help_text='Uncheck this to automatically confirm all registrations.')),
                ('eligible_levels', models.JSONField(blank=True, default=list)),
                ('eligible_programs', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(choices=[('UPCOMING', 'Upcoming'), ('ONGOING', 'Ongoing'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], default='UPCOMING', max_length=20)),
                ('is_published', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-start_at'],
            },
        ),
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('email', models.EmailField(max_length=254, unique=True)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('study_level', models.CharField(blank=True, choices=[('BACHELOR', 'Bachelor'), ('MASTER', 'Master'), ('DOCTORATE', 'Doctorate')], max_length=20)),
                ('study_program', models.CharField(blank=True, choices=[('BACHELOR_S1', 'Semester 1'), ('BACHELOR_S2', 'Semester 2'), ('BACHELOR_S3', 'Semester 3'), ('BACHELOR_S4', 'Semester 4'), ('BACHELOR_S5', 'Semester 5'), ('BACHELOR_S6', 'Semester 6'), ('MASTER_M1', 'Master 1'), ('MASTER_M2', 'Master 2'), ('DOCTORATE_Y1', 'Year 1'), ('DOCTORATE_Y2', 'Year 2'), ('DOCTORATE_Y3', 'Year 3'), ('DOCTORATE_Y4', 'Year 4')], max_length=20)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('uuid', models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('CONFIRMED', 'Confirmed'), ('REJECTED', 'Rejected'), ('CANCELLED', 'Cancelled')], default='PENDING', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('decided_at', models.DateTimeField(blank=True, null=True)),
                ('decision_comment', models.TextField(blank=True)),
                ('token', models.CharField(blank=True, db_index=True, max_length=64)),
                ('checked_in_at', models.DateTimeField(blank=True, null=True)),
                ('checked_in_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('decided_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='registry.event')),
                ('participant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='registry.participant')),
            ],
            options={
                'ordering': ['-created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('event', 'participant'), name='unique_event_participant'),
                    models.UniqueConstraint(condition=models.Q(('token', ''), _negated=True), fields=('token',), name='unique_credential_token'),
                    models.CheckConstraint(condition=models.Q(('checked_in_at__isnull', True), ('status', 'CONFIRMED'), _connector='OR'), name='check_in_requires_confirmation'),
                ],
            },
        ),
    ]
