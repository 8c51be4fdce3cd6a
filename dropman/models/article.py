"""
Article model — catalog item with stock level.
"""

from django.db import models
from django.db.models import F
from django.utils.translation import gettext_lazy as _

from dropman.enums import ArticleStatus, StockStatus
from dropman.rules.codes import generate_article_code
from dropman.rules.stock import calculate_stock_status, format_price


class ArticleQuerySet(models.QuerySet):
    """Stock-level filters mirroring dropman.rules.stock."""

    def active(self):
        """Everything not archived."""
        return self.exclude(status=ArticleStatus.ARCHIVED)

    def available(self):
        return self.filter(status=ArticleStatus.AVAILABLE)

    def out_of_stock(self):
        return self.filter(stock=0)

    def low_stock(self):
        """At or below threshold (includes out of stock)."""
        return self.filter(stock__lte=F('min_stock'))


class Article(models.Model):
    """
    Article offered in drops and bought by customers.

    Stock is a plain counter: decremented on pickup, adjusted by admins
    through dropman.services.catalog.
    """

    code = models.CharField(
        max_length=20,
        unique=True,
        blank=True,
        verbose_name=_('Code'),
        help_text=_('Généré automatiquement (ART-YYYYMMDD-XXXX)'),
    )
    name = models.CharField(max_length=100, verbose_name=_('Nom'))
    description = models.TextField(blank=True, verbose_name=_('Description'))
    price = models.PositiveIntegerField(
        verbose_name=_('Prix'),
        help_text=_('En FCFA, sans décimales'),
    )
    stock = models.PositiveIntegerField(default=0, verbose_name=_('Stock'))
    min_stock = models.PositiveIntegerField(
        default=5,
        verbose_name=_('Stock minimum'),
        help_text=_('Alerte "stock faible" à ce niveau ou en dessous'),
    )
    status = models.CharField(
        max_length=20,
        choices=ArticleStatus.choices,
        default=ArticleStatus.AVAILABLE,
        db_index=True,
        verbose_name=_('Statut'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ArticleQuerySet.as_manager()

    class Meta:
        verbose_name = _('Article')
        verbose_name_plural = _('Articles')
        ordering = ['-created_at']

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = generate_article_code()
        super().save(*args, **kwargs)

    @property
    def stock_status(self) -> StockStatus:
        return calculate_stock_status(self.stock, self.min_stock)

    @property
    def price_display(self) -> str:
        return format_price(self.price)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
