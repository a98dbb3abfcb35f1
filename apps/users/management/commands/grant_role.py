from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from apps.hostels.models import Hostel
from apps.users.models import User, UserRole
from apps.users.services import grant_role


class Command(BaseCommand):
    help = 'Bind a user to a role, in a hostel or platform-wide for super_admin'

    def add_arguments(self, parser):
        parser.add_argument('email', type=str, help='Email of the user')
        parser.add_argument(
            'role',
            type=str,
            choices=UserRole.Role.values,
            help='Role to grant'
        )
        parser.add_argument(
            '--hostel',
            type=str,
            help='Code of the hostel (required for every role except super_admin)'
        )

    def handle(self, *args, **options):
        try:
            user = User.objects.get(email__iexact=options['email'])
        except User.DoesNotExist:
            raise CommandError(f'No user with email "{options["email"]}"')

        hostel = None
        if options.get('hostel'):
            try:
                hostel = Hostel.objects.get(code=options['hostel'].lower())
            except Hostel.DoesNotExist:
                raise CommandError(f'No hostel with code "{options["hostel"]}"')

        try:
            binding = grant_role(user, options['role'], hostel=hostel)
        except ValidationError as exc:
            raise CommandError('; '.join(exc.messages))

        self.stdout.write(self.style.SUCCESS(f'Granted {binding}'))
