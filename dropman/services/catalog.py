"""
Catalog services — stock adjustments and low-stock alerts.

Usage:
    from dropman.services import Catalog

    Catalog.adjust_stock(article, -3, reason='Casse')
    triggered = Catalog.check_alerts()
"""

import logging

from django.db import transaction

from dropman.enums import ArticleStatus, StockStatus
from dropman.exceptions import DropmanError
from dropman.models import Article
from dropman.rules.stock import calculate_stock_status, can_update_stock

logger = logging.getLogger('dropman')


def sync_article_status(article: Article) -> None:
    """
    Keep the catalog status in line with the counter.

    AVAILABLE becomes OUT_OF_STOCK at zero and back when restocked.
    ARCHIVED is never touched.
    """
    if article.status == ArticleStatus.ARCHIVED:
        return
    if article.stock == 0:
        article.status = ArticleStatus.OUT_OF_STOCK
    elif article.status == ArticleStatus.OUT_OF_STOCK:
        article.status = ArticleStatus.AVAILABLE


class Catalog:
    """Article stock operations."""

    @classmethod
    def adjust_stock(cls, article: Article, change: int, reason: str = '') -> Article:
        """
        Add (positive) or remove (negative) units.

        Raises:
            DropmanError('NEGATIVE_STOCK'): If the result would be below zero
        """
        with transaction.atomic():
            article = Article.objects.select_for_update().get(pk=article.pk)

            check = can_update_stock(article.stock, change)
            if not check.valid:
                raise DropmanError(
                    'NEGATIVE_STOCK',
                    check.error,
                    stock=article.stock,
                    change=change,
                )

            article.stock += change
            sync_article_status(article)
            article.save(update_fields=['stock', 'status', 'updated_at'])

        logger.info(
            "article.stock.adjusted",
            extra={
                "article": article.code,
                "change": change,
                "stock": article.stock,
                "reason": reason,
            },
        )
        return article

    @classmethod
    def check_alerts(cls) -> list[tuple[Article, StockStatus]]:
        """
        Articles whose stock is LOW or OUT.

        Archived articles are ignored.

        Returns:
            List of (article, status) tuples, out-of-stock first.
        """
        triggered = []
        for article in Article.objects.active().low_stock().order_by('stock', 'name'):
            status = calculate_stock_status(article.stock, article.min_stock)
            triggered.append((article, status))
            logger.warning(
                "stock.alert.triggered",
                extra={
                    "article": article.code,
                    "stock": article.stock,
                    "min_stock": article.min_stock,
                    "status": str(status),
                },
            )
        return triggered
