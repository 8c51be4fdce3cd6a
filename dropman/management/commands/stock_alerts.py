"""
Management command to list low and out-of-stock articles.

Usage:
    python manage.py stock_alerts
"""

from django.core.management.base import BaseCommand

from dropman import catalog
from dropman.enums import StockStatus
from dropman.rules.stock import stock_status_text


class Command(BaseCommand):
    """List articles at or below their minimum stock."""

    help = 'Liste les articles en stock faible ou en rupture'

    def handle(self, *args, **options):
        triggered = catalog.check_alerts()

        for article, status in triggered:
            line = f'{article.code} {article.name}: {article.stock}/{article.min_stock} ({stock_status_text(status)})'
            if status == StockStatus.OUT:
                self.stdout.write(self.style.ERROR(line))
            else:
                self.stdout.write(self.style.WARNING(line))

        self.stdout.write(f'{len(triggered)} article(s) à réapprovisionner')
