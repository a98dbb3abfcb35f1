"""
Management command to create a hostel, optionally with its first warden.
"""

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.core.validators import validate_email
from django.db import transaction
from django.utils.crypto import get_random_string
from django.utils.text import slugify

from apps.hostels.models import Hostel
from apps.hostels.services import appoint_warden
from apps.users.models import User


class Command(BaseCommand):
    help = 'Create a new hostel with an optional warden'

    def add_arguments(self, parser):
        parser.add_argument(
            'name',
            type=str,
            help='Name of the hostel'
        )
        parser.add_argument(
            'code',
            type=str,
            help='Unique short code of the hostel'
        )
        parser.add_argument(
            '--hostel_type',
            type=str,
            choices=Hostel.HostelType.values,
            default=Hostel.HostelType.COED,
            help='Type of hostel (default: coed)'
        )
        parser.add_argument(
            '--city',
            type=str,
            default='',
            help='City of the hostel'
        )
        parser.add_argument(
            '--phone',
            type=str,
            default='',
            help='Contact phone number of the hostel'
        )
        parser.add_argument(
            '--warden_email',
            type=str,
            help='Email of the warden to appoint (account is created if missing)'
        )
        parser.add_argument(
            '--warden_name',
            type=str,
            help='Name of the warden (optional, will extract from email if not provided)'
        )

    def handle(self, *args, **options):
        name = options['name']
        code = slugify(options['code'])
        warden_email = options.get('warden_email')

        if not code:
            raise CommandError('Hostel code can only contain letters, numbers, underscores, and hyphens')

        if Hostel.objects.filter(code=code).exists():
            raise CommandError(f'Hostel with code "{code}" already exists')

        if warden_email:
            try:
                validate_email(warden_email)
            except ValidationError:
                raise CommandError('Invalid warden email address')

        with transaction.atomic():
            hostel = Hostel.objects.create(
                name=name,
                code=code,
                hostel_type=options['hostel_type'],
                city=options['city'],
                phone=options['phone'],
            )
            self.stdout.write(
                self.style.SUCCESS(f'Successfully created hostel "{hostel.name}" ({hostel.code})')
            )

            if warden_email:
                user = self._get_or_create_user(warden_email, options.get('warden_name'))
                try:
                    appoint_warden(hostel, user, is_chief=True)
                except ValidationError as exc:
                    raise CommandError('; '.join(exc.messages))
                self.stdout.write(
                    self.style.SUCCESS(f'Appointed {user.email} as chief warden')
                )

        self.stdout.write(f'  ID:   {hostel.pk}')
        self.stdout.write(f'  Code: {hostel.code}')

    def _split_name(self, full_name):
        """Split full name into first and last name."""
        parts = full_name.strip().split()
        if len(parts) >= 2:
            return ' '.join(parts[:-1]), parts[-1]
        return full_name, ''

    def _get_or_create_user(self, email, full_name=None):
        email = email.lower()
        user = User.objects.filter(email=email).first()
        if user:
            return user

        if not full_name:
            full_name = email.split('@')[0].replace('.', ' ').title()
        first_name, last_name = self._split_name(full_name)

        temp_password = get_random_string(12)
        user = User.objects.create_user(
            email,
            password=temp_password,
            first_name=first_name,
            last_name=last_name,
        )
        self.stdout.write(
            self.style.WARNING(f'Temporary password generated for warden: {temp_password}')
        )
        return user
