"""
Tests for model helpers and querysets.
"""

import re
from datetime import timedelta

import pytest
from django.utils import timezone

from dropman.enums import ArticleStatus, PaymentStatus, StockStatus
from dropman.models import Article, Drop, DropHistory, Order


pytestmark = pytest.mark.django_db


class TestArticle:

    def test_code_generated_on_save(self, article):
        assert re.fullmatch(r'ART-\d{8}-\d{4}', article.code)

    def test_existing_code_kept(self, db):
        a = Article.objects.create(code='ART-CUSTOM', name='X', price=100)
        assert a.code == 'ART-CUSTOM'

    def test_stock_status(self, article, low_article, empty_article):
        assert article.stock_status == StockStatus.OK
        assert low_article.stock_status == StockStatus.LOW
        assert empty_article.stock_status == StockStatus.OUT

    def test_price_display(self, low_article):
        assert low_article.price_display == '850 000'

    def test_querysets(self, article, low_article, empty_article):
        assert set(Article.objects.low_stock()) == {low_article, empty_article}
        assert list(Article.objects.out_of_stock()) == [empty_article]
        assert set(Article.objects.available()) == {article, low_article}

        empty_article.status = ArticleStatus.ARCHIVED
        empty_article.save()
        assert empty_article not in Article.objects.active()


class TestDrop:

    def test_editable_while_draft(self, drop):
        assert drop.is_editable
        assert drop.can_send

    def test_overdue(self, drop):
        drop.scheduled_for = timezone.now() - timedelta(hours=1)
        assert drop.is_overdue

    def test_history_sent_on(self, drop, group, article):
        today = timezone.localdate()
        DropHistory.objects.create(drop=drop, group=group, article=article)
        DropHistory.objects.create(
            drop=drop, group=group, article=article,
            sent_at=timezone.now() - timedelta(days=1),
        )

        assert DropHistory.objects.sent_on(today).count() == 1
        assert DropHistory.objects.for_group(group).count() == 2


class TestOrder:

    def test_can_pickup_property(self, article):
        order = Order.objects.create(
            order_number='ORD-20251015-0001', article=article,
            customer_name='Awa', customer_phone='+237677123456', amount=article.price,
        )
        assert not order.can_pickup
        assert order.status_text == 'En attente de paiement'

        order.payment_status = PaymentStatus.PAID
        order.ticket_expires_at = timezone.now() + timedelta(days=7)
        assert order.can_pickup
        assert not order.is_ticket_expired
        assert order.status_text == 'Prêt à récupérer'

    def test_null_ticket_codes_do_not_collide(self, article):
        for i in range(2):
            Order.objects.create(
                order_number=f'ORD-20251015-000{i}', article=article,
                customer_name='Awa', customer_phone='+237677123456', amount=1,
            )
        assert Order.objects.filter(ticket_code__isnull=True).count() == 2
