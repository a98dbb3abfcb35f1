import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('users', '0001_initial'),
        ('hostels', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='UserRole',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('role', models.CharField(choices=[('super_admin', 'Super Administrator'), ('warden', 'Warden'), ('staff', 'Staff'), ('student', 'Student')], max_length=20, verbose_name='role')),
                ('granted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='granted_role_bindings', to=settings.AUTH_USER_MODEL, verbose_name='granted by')),
                ('hostel', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='role_bindings', to='hostels.hostel', verbose_name='hostel')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='role_bindings', to=settings.AUTH_USER_MODEL, verbose_name='user')),
            ],
            options={
                'verbose_name': 'User Role',
                'verbose_name_plural': 'User Roles',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['hostel', 'role'], name='users_userr_hostel__9e4b1d_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'hostel'), name='unique_role_binding_per_user_hostel'),
                    models.UniqueConstraint(condition=models.Q(('hostel__isnull', True)), fields=('user',), name='unique_global_role_binding_per_user'),
                ],
            },
        ),
    ]
