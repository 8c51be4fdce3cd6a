"""
Tests for Catalog service.
"""

import pytest

from dropman import catalog, DropmanError
from dropman.enums import ArticleStatus, StockStatus


pytestmark = pytest.mark.django_db


class TestAdjustStock:
    """Tests for catalog.adjust_stock()."""

    def test_adds_units(self, article):
        article = catalog.adjust_stock(article, 5, reason='Arrivage')
        article.refresh_from_db()
        assert article.stock == 15

    def test_removes_units(self, article):
        catalog.adjust_stock(article, -10, reason='Casse')
        article.refresh_from_db()
        assert article.stock == 0
        assert article.status == ArticleStatus.OUT_OF_STOCK

    def test_restock_makes_available_again(self, empty_article):
        catalog.adjust_stock(empty_article, 3)
        empty_article.refresh_from_db()
        assert empty_article.status == ArticleStatus.AVAILABLE

    def test_archived_stays_archived(self, article):
        article.status = ArticleStatus.ARCHIVED
        article.save()
        catalog.adjust_stock(article, -10)
        article.refresh_from_db()
        assert article.status == ArticleStatus.ARCHIVED

    def test_negative_result_refused(self, low_article):
        with pytest.raises(DropmanError) as exc:
            catalog.adjust_stock(low_article, -3)

        assert exc.value.code == 'NEGATIVE_STOCK'
        assert exc.value.data == {'stock': 2, 'change': -3}
        low_article.refresh_from_db()
        assert low_article.stock == 2


class TestCheckAlerts:
    """Tests for catalog.check_alerts()."""

    def test_low_and_out(self, article, low_article, empty_article):
        triggered = catalog.check_alerts()

        assert triggered == [
            (empty_article, StockStatus.OUT),
            (low_article, StockStatus.LOW),
        ]

    def test_archived_ignored(self, empty_article):
        empty_article.status = ArticleStatus.ARCHIVED
        empty_article.save()
        assert catalog.check_alerts() == []

    def test_logs_warning(self, low_article, caplog):
        with caplog.at_level('WARNING', logger='dropman'):
            catalog.check_alerts()
        assert 'stock.alert.triggered' in caplog.text
