"""
Tests for OrderLifecycle: payment, ticket issue and pickup.
"""

from datetime import timedelta
from itertools import repeat

import pytest
from django.utils import timezone

from dropman import orders, DropmanError
from dropman.enums import ArticleStatus, PaymentMethod, PaymentStatus, PickupStatus
from dropman.models import Article, Order
from dropman.rules.tickets import is_valid_ticket_format


pytestmark = pytest.mark.django_db


@pytest.fixture
def order(article):
    return orders.create(article, 'Awa Ngono', '677 12 34 56')


@pytest.fixture
def paid_order(order):
    return orders.confirm_payment(order)


class TestCreate:
    """Tests for orders.create()."""

    def test_pending_order(self, order, article):
        assert order.pk is not None
        assert order.order_number.startswith('ORD-')
        assert order.amount == article.price
        assert order.payment_status == PaymentStatus.PENDING
        assert order.pickup_status == PickupStatus.PENDING
        assert order.ticket_code is None

    def test_phone_normalized_and_operator_detected(self, order):
        assert order.customer_phone == '+237677123456'
        assert order.payment_method == PaymentMethod.MTN_MOMO

    def test_orange_number(self, article):
        order = orders.create(article, 'Paul', '+237 699 00 11 22')
        assert order.payment_method == PaymentMethod.ORANGE_MONEY

    def test_explicit_method_wins(self, article):
        order = orders.create(article, 'Paul', '677123456', PaymentMethod.ORANGE_MONEY)
        assert order.payment_method == PaymentMethod.ORANGE_MONEY

    def test_out_of_stock_refused(self, empty_article):
        with pytest.raises(DropmanError) as exc:
            orders.create(empty_article, 'Awa', '677123456')
        assert exc.value.code == 'ARTICLE_UNAVAILABLE'

    def test_available_but_empty_refused(self, article):
        Article.objects.filter(pk=article.pk).update(stock=0)
        article.refresh_from_db()

        with pytest.raises(DropmanError) as exc:
            orders.create(article, 'Awa', '677123456')
        assert exc.value.code == 'INSUFFICIENT_STOCK'


class TestPayment:
    """Tests for confirm_payment(), fail_payment() and refund()."""

    def test_confirm_issues_ticket(self, paid_order):
        today = timezone.localdate()

        assert paid_order.payment_status == PaymentStatus.PAID
        assert paid_order.paid_at is not None
        assert is_valid_ticket_format(paid_order.ticket_code)
        assert paid_order.ticket_code.startswith(f"TKT-{today:%Y%m%d}-")
        assert paid_order.ticket_expires_at - paid_order.paid_at == timedelta(days=7)

    def test_confirm_twice_refused(self, paid_order):
        with pytest.raises(DropmanError) as exc:
            orders.confirm_payment(paid_order)
        assert exc.value.code == 'INVALID_STATUS'

    def test_ticket_collision_retried(self, order, article, monkeypatch):
        other = orders.confirm_payment(orders.create(article, 'Eric', '699112233'))
        codes = iter([other.ticket_code, 'TKT-20251015-0042'])
        monkeypatch.setattr(
            'dropman.services.orders.generate_ticket_code',
            lambda on_date=None: next(codes),
        )

        order = orders.confirm_payment(order)

        assert order.ticket_code == 'TKT-20251015-0042'
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PAID

    def test_ticket_collision_exhausted(self, order, article, monkeypatch):
        other = orders.confirm_payment(orders.create(article, 'Eric', '699112233'))
        codes = repeat(other.ticket_code)
        monkeypatch.setattr(
            'dropman.services.orders.generate_ticket_code',
            lambda on_date=None: next(codes),
        )

        with pytest.raises(DropmanError) as exc:
            orders.confirm_payment(order)

        assert exc.value.code == 'TICKET_CODE_EXHAUSTED'
        assert exc.value.data['attempts'] == 5
        order.refresh_from_db()
        assert order.payment_status == PaymentStatus.PENDING

    def test_fail_payment(self, order):
        order = orders.fail_payment(order)
        assert order.payment_status == PaymentStatus.FAILED

        with pytest.raises(DropmanError):
            orders.confirm_payment(order)

    def test_refund_cancels_pickup(self, paid_order):
        order = orders.refund(paid_order)

        assert order.payment_status == PaymentStatus.REFUNDED
        assert order.pickup_status == PickupStatus.CANCELLED

    def test_refund_unpaid_refused(self, order):
        with pytest.raises(DropmanError) as exc:
            orders.refund(order)
        assert exc.value.code == 'INVALID_STATUS'

    def test_refund_after_pickup_refused(self, paid_order):
        orders.pickup(paid_order.ticket_code)

        with pytest.raises(DropmanError) as exc:
            orders.refund(paid_order)
        assert exc.value.code == 'INVALID_STATUS'


class TestCancel:

    def test_cancel(self, order):
        order = orders.cancel(order)
        assert order.pickup_status == PickupStatus.CANCELLED

    def test_cancel_twice_refused(self, order):
        orders.cancel(order)
        with pytest.raises(DropmanError):
            orders.cancel(order)


class TestFindByTicket:

    def test_normalizes_input(self, paid_order):
        code = f"  {paid_order.ticket_code.lower()} "
        assert orders.find_by_ticket(code) == paid_order

    def test_malformed(self):
        with pytest.raises(DropmanError) as exc:
            orders.find_by_ticket('TKT-2025-1')
        assert exc.value.code == 'INVALID_TICKET'

    def test_unknown(self):
        with pytest.raises(DropmanError) as exc:
            orders.find_by_ticket('TKT-20251015-9999')
        assert exc.value.code == 'TICKET_NOT_FOUND'


class TestPickup:
    """Tests for orders.pickup()."""

    def test_success(self, paid_order, article, user):
        order = orders.pickup(paid_order.ticket_code, user=user)

        assert order.pickup_status == PickupStatus.PICKED_UP
        assert order.picked_up_at is not None
        assert order.validated_by == user

        article.refresh_from_db()
        assert article.stock == 9
        assert article.status == ArticleStatus.AVAILABLE

    def test_last_unit_marks_out_of_stock(self, paid_order, article):
        Article.objects.filter(pk=article.pk).update(stock=1)

        orders.pickup(paid_order.ticket_code)

        article.refresh_from_db()
        assert article.stock == 0
        assert article.status == ArticleStatus.OUT_OF_STOCK

    def test_twice_refused(self, paid_order):
        orders.pickup(paid_order.ticket_code)

        with pytest.raises(DropmanError) as exc:
            orders.pickup(paid_order.ticket_code)

        assert exc.value.code == 'PICKUP_NOT_ALLOWED'
        assert exc.value.reason == 'Commande déjà récupérée'

    def test_refunded_refused(self, paid_order):
        orders.refund(paid_order)

        with pytest.raises(DropmanError) as exc:
            orders.pickup(paid_order.ticket_code)

        assert exc.value.code == 'PICKUP_NOT_ALLOWED'
        assert exc.value.reason == "Le paiement n'est pas confirmé"

    def test_expired_ticket(self, paid_order, article):
        Order.objects.filter(pk=paid_order.pk).update(
            ticket_expires_at=timezone.now() - timedelta(minutes=1)
        )

        with pytest.raises(DropmanError) as exc:
            orders.pickup(paid_order.ticket_code)

        assert exc.value.code == 'TICKET_EXPIRED'
        article.refresh_from_db()
        assert article.stock == 10

    def test_no_stock_left(self, paid_order, article):
        Article.objects.filter(pk=article.pk).update(stock=0)

        with pytest.raises(DropmanError) as exc:
            orders.pickup(paid_order.ticket_code)

        assert exc.value.code == 'INSUFFICIENT_STOCK'
        paid_order.refresh_from_db()
        assert paid_order.pickup_status == PickupStatus.PENDING

    def test_logs_pickup(self, paid_order, caplog):
        with caplog.at_level('INFO', logger='dropman'):
            orders.pickup(paid_order.ticket_code)
        assert 'order.picked_up' in caplog.text
