import django.core.validators
import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('hostels', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Announcement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('title', models.CharField(max_length=200, validators=[django.core.validators.MinLengthValidator(3)], verbose_name='title')),
                ('body', models.TextField(verbose_name='body')),
                ('priority', models.CharField(choices=[('low', 'Low'), ('normal', 'Normal'), ('high', 'High'), ('urgent', 'Urgent')], default='normal', max_length=10, verbose_name='priority level')),
                ('target_audience', models.CharField(choices=[('all', 'Everyone'), ('students', 'Students Only'), ('staff', 'Staff Only')], default='all', max_length=20, verbose_name='target audience')),
                ('is_published', models.BooleanField(default=False, verbose_name='is published')),
                ('published_at', models.DateTimeField(blank=True, null=True, verbose_name='published at')),
                ('expires_at', models.DateTimeField(blank=True, null=True, verbose_name='expires at')),
                ('is_pinned', models.BooleanField(default=False, verbose_name='is pinned')),
                ('author', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='authored_announcements', to=settings.AUTH_USER_MODEL, verbose_name='author')),
                ('hostel', models.ForeignKey(help_text='Hostel this record belongs to', on_delete=django.db.models.deletion.CASCADE, related_name='announcements', to='hostels.hostel', verbose_name='hostel')),
            ],
            options={
                'verbose_name': 'Announcement',
                'verbose_name_plural': 'Announcements',
                'ordering': ['-is_pinned', '-published_at', '-created_at'],
                'indexes': [
                    models.Index(fields=['hostel', 'is_published'], name='communicat_hostel__2a8d64_idx'),
                    models.Index(fields=['expires_at', 'is_published'], name='communicat_expires_71f0b9_idx'),
                ],
            },
        ),
    ]
