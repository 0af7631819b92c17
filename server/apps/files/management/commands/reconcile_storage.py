"""Management command to reconcile the catalog with the blob store."""

from datetime import timedelta
from typing import Any, Final

from django.core.management.base import BaseCommand, CommandError

from server.apps.files.logic.reconciliation import reconcile

_DEFAULT_GRACE_SECONDS: Final = 3600


class Command(BaseCommand):
    """Report (and optionally repair) keys the two stores disagree on."""

    help = 'Find catalog rows without content and content without rows'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--repair',
            action='store_true',
            help='Delete anomalous rows and orphaned content',
        )
        parser.add_argument(
            '--grace-seconds',
            type=int,
            default=_DEFAULT_GRACE_SECONDS,
            help=(
                'Ignore anomalies younger than this '
                f'(default: {_DEFAULT_GRACE_SECONDS})'
            ),
        )
        parser.add_argument(
            '--owner',
            action='append',
            dest='owners',
            help='Only check this owner (repeatable)',
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the reconciliation command.

        Args:
            args: Positional arguments (unused).
            options: Command options.

        Raises:
            CommandError: If the grace period is negative.
        """
        grace_seconds = options['grace_seconds']
        if grace_seconds < 0:
            raise CommandError('--grace-seconds cannot be negative')
        repair = options['repair']

        self.stdout.write(
            f'Reconciling storage (grace period: {grace_seconds}s, '
            f'repair: {"yes" if repair else "no"})',
        )

        report = reconcile(
            timedelta(seconds=grace_seconds),
            repair=repair,
            owners=options['owners'],
        )

        for anomaly in report.anomalies:
            status = ' [repaired]' if anomaly.repaired else ''
            self.stdout.write(
                f'{anomaly.kind}: {anomaly.owner}/{anomaly.filename} '
                f'({anomaly.detail}){status}',
            )

        summary = (
            f'Checked {report.checked} keys, '
            f'{len(report.anomalies)} anomalies, '
            f'{report.repaired} repaired, {report.skipped} skipped'
        )
        if report.anomalies and report.repaired < len(report.anomalies):
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.SUCCESS(summary))
