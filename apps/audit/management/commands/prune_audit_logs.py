from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from apps.audit.models import AuditLog


class Command(BaseCommand):
    """
    Delete audit entries older than the retention window.
    """
    help = 'Remove audit log entries older than AUDIT_LOG_RETENTION_DAYS'

    def add_arguments(self, parser):
        parser.add_argument(
            '--days',
            type=int,
            default=None,
            help='Retention window in days (defaults to AUDIT_LOG_RETENTION_DAYS)'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Only report how many entries would be removed'
        )

    def handle(self, *args, **options):
        days = options['days'] if options['days'] is not None else settings.AUDIT_LOG_RETENTION_DAYS
        if days < 1:
            raise CommandError('Retention window must be at least one day')

        cutoff = timezone.now() - timedelta(days=days)
        stale = AuditLog.objects.filter(timestamp__lt=cutoff)
        count = stale.count()

        if options['dry_run']:
            self.stdout.write(
                self.style.WARNING(f'{count} audit entries older than {days} days would be removed')
            )
            return

        stale.delete()
        self.stdout.write(
            self.style.SUCCESS(f'Removed {count} audit entries older than {days} days')
        )
