import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Hostel',
            fields=[
                ('address_line_1', models.CharField(blank=True, max_length=255, verbose_name='address line 1')),
                ('address_line_2', models.CharField(blank=True, max_length=255, verbose_name='address line 2')),
                ('city', models.CharField(blank=True, max_length=100, verbose_name='city')),
                ('state', models.CharField(blank=True, max_length=100, verbose_name='state/province')),
                ('postal_code', models.CharField(blank=True, max_length=20, verbose_name='postal code')),
                ('country', models.CharField(blank=True, max_length=100, verbose_name='country')),
                ('phone', models.CharField(blank=True, max_length=20, verbose_name='phone number')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('emergency_contact', models.CharField(blank=True, max_length=100, verbose_name='emergency contact')),
                ('emergency_phone', models.CharField(blank=True, max_length=20, verbose_name='emergency phone')),
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('name', models.CharField(max_length=200, verbose_name='hostel name')),
                ('code', models.SlugField(max_length=20, unique=True, verbose_name='hostel code')),
                ('hostel_type', models.CharField(choices=[('boys', 'Boys Hostel'), ('girls', 'Girls Hostel'), ('coed', 'Co-educational')], default='coed', max_length=20, verbose_name='hostel type')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('rules', models.TextField(blank=True, verbose_name='hostel rules')),
                ('is_active', models.BooleanField(default=True, verbose_name='is active')),
            ],
            options={
                'verbose_name': 'Hostel',
                'verbose_name_plural': 'Hostels',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['hostel_type', 'is_active'], name='hostels_hos_hostel__a1f3c2_idx')],
            },
        ),
        migrations.CreateModel(
            name='Floor',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('number', models.IntegerField(verbose_name='floor number')),
                ('name', models.CharField(blank=True, max_length=100, verbose_name='floor name')),
                ('hostel', models.ForeignKey(help_text='Hostel this record belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='floors', to='hostels.hostel', verbose_name='hostel')),
            ],
            options={
                'verbose_name': 'Floor',
                'verbose_name_plural': 'Floors',
                'ordering': ['hostel', 'number'],
                'constraints': [models.UniqueConstraint(fields=('hostel', 'number'), name='unique_floor_number_per_hostel')],
            },
        ),
        migrations.CreateModel(
            name='Room',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('number', models.CharField(max_length=20, verbose_name='room number')),
                ('room_type', models.CharField(choices=[('single', 'Single Occupancy'), ('double', 'Double Occupancy'), ('triple', 'Triple Occupancy'), ('quad', 'Four Occupancy'), ('dormitory', 'Dormitory')], default='double', max_length=20, verbose_name='room type')),
                ('capacity', models.PositiveIntegerField(default=2, validators=[django.core.validators.MinValueValidator(1)], verbose_name='capacity')),
                ('is_active', models.BooleanField(default=True, verbose_name='is active')),
                ('notes', models.TextField(blank=True, verbose_name='notes')),
                ('floor', models.ForeignKey(on_delete=django.db.models.deletion.RESTRICT, related_name='rooms', to='hostels.floor', verbose_name='floor')),
                ('hostel', models.ForeignKey(help_text='Hostel this record belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='rooms', to='hostels.hostel', verbose_name='hostel')),
            ],
            options={
                'verbose_name': 'Room',
                'verbose_name_plural': 'Rooms',
                'ordering': ['hostel', 'floor__number', 'number'],
                'indexes': [
                    models.Index(fields=['hostel', 'floor'], name='hostels_roo_hostel__5b2e17_idx'),
                    models.Index(fields=['hostel', 'is_active'], name='hostels_roo_hostel__c94d0a_idx'),
                ],
                'constraints': [models.UniqueConstraint(fields=('hostel', 'number'), name='unique_room_number_per_hostel')],
            },
        ),
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('roll_number', models.CharField(max_length=50, verbose_name='roll number')),
                ('full_name', models.CharField(max_length=200, verbose_name='full name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('phone', models.CharField(blank=True, max_length=20, verbose_name='phone number')),
                ('guardian_name', models.CharField(blank=True, max_length=200, verbose_name='guardian name')),
                ('guardian_phone', models.CharField(blank=True, max_length=20, verbose_name='guardian phone')),
                ('check_in_date', models.DateField(blank=True, null=True, verbose_name='check in date')),
                ('check_out_date', models.DateField(blank=True, null=True, verbose_name='check out date')),
                ('is_active', models.BooleanField(default=True, verbose_name='is active')),
                ('hostel', models.ForeignKey(help_text='Hostel this record belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='students', to='hostels.hostel', verbose_name='hostel')),
                ('room', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='occupants', to='hostels.room', verbose_name='room')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='student_records', to=settings.AUTH_USER_MODEL, verbose_name='user account')),
            ],
            options={
                'verbose_name': 'Student',
                'verbose_name_plural': 'Students',
                'ordering': ['hostel', 'full_name'],
                'indexes': [
                    models.Index(fields=['hostel', 'room'], name='hostels_stu_hostel__e07a41_idx'),
                    models.Index(fields=['hostel', 'is_active'], name='hostels_stu_hostel__3d8f96_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('hostel', 'roll_number'), name='unique_roll_number_per_hostel'),
                    models.UniqueConstraint(fields=('hostel', 'user'), name='unique_student_user_per_hostel'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Warden',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('employee_id', models.CharField(blank=True, max_length=50, verbose_name='employee ID')),
                ('phone', models.CharField(blank=True, max_length=20, verbose_name='phone number')),
                ('is_chief', models.BooleanField(default=False, verbose_name='is chief warden')),
                ('appointed_on', models.DateField(default=django.utils.timezone.localdate, verbose_name='appointed on')),
                ('hostel', models.ForeignKey(help_text='Hostel this record belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='wardens', to='hostels.hostel', verbose_name='hostel')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='warden_profiles', to=settings.AUTH_USER_MODEL, verbose_name='user')),
            ],
            options={
                'verbose_name': 'Warden',
                'verbose_name_plural': 'Wardens',
                'ordering': ['hostel', '-is_chief', 'appointed_on'],
                'constraints': [models.UniqueConstraint(fields=('hostel', 'user'), name='unique_warden_per_hostel')],
            },
        ),
        migrations.CreateModel(
            name='CleaningRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('description', models.TextField(blank=True, verbose_name='description')),
                ('priority', models.CharField(choices=[('low', 'Low'), ('normal', 'Normal'), ('high', 'High')], default='normal', max_length=10, verbose_name='priority')),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('IN_PROGRESS', 'In Progress'), ('DONE', 'Done'), ('REJECTED', 'Rejected')], default='PENDING', max_length=20, verbose_name='status')),
                ('started_at', models.DateTimeField(blank=True, null=True, verbose_name='started at')),
                ('completed_at', models.DateTimeField(blank=True, null=True, verbose_name='completed at')),
                ('rejection_reason', models.TextField(blank=True, verbose_name='rejection reason')),
                ('resolution_notes', models.TextField(blank=True, verbose_name='resolution notes')),
                ('assigned_to', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='assigned_cleaning_requests', to=settings.AUTH_USER_MODEL, verbose_name='assigned to')),
                ('hostel', models.ForeignKey(help_text='Hostel this record belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='cleaningrequests', to='hostels.hostel', verbose_name='hostel')),
                ('requested_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='cleaning_requests', to=settings.AUTH_USER_MODEL, verbose_name='requested by')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.RESTRICT, related_name='cleaning_requests', to='hostels.room', verbose_name='room')),
                ('student', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='cleaning_requests', to='hostels.student', verbose_name='student')),
            ],
            options={
                'verbose_name': 'Cleaning Request',
                'verbose_name_plural': 'Cleaning Requests',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['hostel', 'status'], name='hostels_cle_hostel__71c5be_idx'),
                    models.Index(fields=['room', 'status'], name='hostels_cle_room_id_0f9a3d_idx'),
                    models.Index(fields=['requested_by', 'status'], name='hostels_cle_request_b84e62_idx'),
                ],
                'constraints': [models.UniqueConstraint(condition=models.Q(('status__in', ['PENDING', 'IN_PROGRESS'])), fields=('room',), name='one_open_cleaning_request_per_room')],
            },
        ),
    ]
