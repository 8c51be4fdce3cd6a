"""
Management command to preview the same-day rule for a drop.

Usage:
    python manage.py check_drop 42
    python manage.py check_drop 42 --date 2025-10-15
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError

from dropman import drops
from dropman.models import Drop


class Command(BaseCommand):
    """Print the same-day summary and warnings of a drop."""

    help = "Vérifie la règle du jour pour un drop"

    def add_arguments(self, parser):
        parser.add_argument('drop_id', type=int)
        parser.add_argument(
            '--date',
            type=date.fromisoformat,
            default=None,
            help='Jour à vérifier (YYYY-MM-DD, défaut: aujourd\'hui)'
        )

    def handle(self, *args, **options):
        try:
            drop = Drop.objects.get(pk=options['drop_id'])
        except Drop.DoesNotExist:
            raise CommandError(f"Drop {options['drop_id']} introuvable")

        check = drops.check(drop, options['date'])
        summary = check.summary

        self.stdout.write(f'Drop: {drop.name} ({drop.get_status_display()})')
        self.stdout.write(
            f'Groupes: {summary.total_groups} | '
            f'libres: {summary.clear_groups} | '
            f'partiels: {summary.partially_blocked_groups} | '
            f'bloqués: {summary.blocked_groups}'
        )
        self.stdout.write(f'Durée estimée: {check.estimated_minutes} min')
        for warning in check.warnings:
            self.stdout.write(self.style.WARNING(warning))
        for error in check.errors:
            self.stdout.write(self.style.ERROR(error))

        if check.can_send:
            self.stdout.write(self.style.SUCCESS('Envoi possible'))
        else:
            self.stdout.write(self.style.ERROR('Envoi impossible'))
