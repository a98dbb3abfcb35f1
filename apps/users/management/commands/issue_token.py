from django.core.management.base import BaseCommand, CommandError

from apps.users.models import User
from apps.users.services import issue_token


class Command(BaseCommand):
    help = 'Print the bearer token of a user, creating it if needed'

    def add_arguments(self, parser):
        parser.add_argument('email', type=str, help='Email of the user')
        parser.add_argument(
            '--rotate',
            action='store_true',
            help='Discard the current token and issue a new one'
        )

    def handle(self, *args, **options):
        try:
            user = User.objects.get(email__iexact=options['email'])
        except User.DoesNotExist:
            raise CommandError(f'No user with email "{options["email"]}"')

        if not user.is_active:
            raise CommandError(f'User "{user.email}" is inactive')

        token = issue_token(user, rotate=options['rotate'])
        self.stdout.write(token.key)
