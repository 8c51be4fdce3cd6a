"""
Tests for Dropman admin actions and permissions.
"""

from datetime import timedelta

import pytest
from django.contrib import admin
from django.test import RequestFactory
from django.utils import timezone

from dropman import orders
from dropman.admin import DropAdmin, DropHistoryAdmin, OrderAdmin
from dropman.enums import DropStatus, PickupStatus
from dropman.models import Article, Drop, DropHistory, Order, WhatsAppGroup


pytestmark = pytest.mark.django_db


@pytest.fixture
def request_(user):
    request = RequestFactory().post('/')
    request.user = user
    return request


@pytest.fixture
def messages(monkeypatch):
    sent = []
    monkeypatch.setattr(
        admin.ModelAdmin, 'message_user',
        lambda self, request, message, level=None, **kwargs: sent.append((str(message), level)),
    )
    return sent


def test_models_registered():
    for model in (Article, WhatsAppGroup, Drop, DropHistory, Order):
        assert admin.site.is_registered(model)


class TestDropAdmin:

    def test_sent_drop_not_editable(self, drop, request_):
        model_admin = DropAdmin(Drop, admin.site)
        drop.status = DropStatus.SENT

        assert not model_admin.has_change_permission(request_, drop)

    def test_send_action(self, drop, request_, messages):
        DropAdmin(Drop, admin.site).send_drops(request_, Drop.objects.filter(pk=drop.pk))

        drop.refresh_from_db()
        assert drop.status == DropStatus.SENT
        assert messages[-1][0] == '1 drop(s) envoyé(s).'

    def test_send_action_reports_refusal(self, drop, request_, messages):
        Drop.objects.filter(pk=drop.pk).update(status=DropStatus.SENT)

        DropAdmin(Drop, admin.site).send_drops(request_, Drop.objects.filter(pk=drop.pk))

        assert messages[0][1] == 'warning'
        assert messages[-1][0] == '0 drop(s) envoyé(s).'


class TestDropHistoryAdmin:

    def test_read_only(self, request_):
        model_admin = DropHistoryAdmin(DropHistory, admin.site)
        assert not model_admin.has_add_permission(request_)
        assert not model_admin.has_change_permission(request_)
        assert not model_admin.has_delete_permission(request_)


class TestOrderAdmin:

    def test_mark_picked_up(self, article, request_, user, messages):
        paid = orders.confirm_payment(orders.create(article, 'Awa', '677123456'))
        unpaid = orders.create(article, 'Eric', '699112233')

        OrderAdmin(Order, admin.site).mark_picked_up(request_, Order.objects.all())

        paid.refresh_from_db()
        unpaid.refresh_from_db()
        assert paid.pickup_status == PickupStatus.PICKED_UP
        assert paid.validated_by == user
        assert unpaid.pickup_status == PickupStatus.PENDING
        assert (f"{unpaid}: Le paiement n'est pas confirmé", 'warning') in messages
        assert messages[-1][0] == '1 commande(s) récupérée(s).'

    def test_cancel_orders(self, article, request_, messages):
        order = orders.create(article, 'Awa', '677123456')

        OrderAdmin(Order, admin.site).cancel_orders(request_, Order.objects.all())

        order.refresh_from_db()
        assert order.pickup_status == PickupStatus.CANCELLED

    def test_mark_picked_up_reports_expired_ticket(self, article, request_, messages):
        paid = orders.confirm_payment(orders.create(article, 'Awa', '677123456'))
        Order.objects.filter(pk=paid.pk).update(
            ticket_expires_at=timezone.now() - timedelta(days=1)
        )

        OrderAdmin(Order, admin.site).mark_picked_up(request_, Order.objects.all())

        assert messages == [
            (f'{paid}: Ticket expiré', 'warning'),
            ('0 commande(s) récupérée(s).', None),
        ]

    def test_cancel_orders_reports_refusal(self, article, request_, messages):
        order = orders.cancel(orders.create(article, 'Awa', '677123456'))

        OrderAdmin(Order, admin.site).cancel_orders(request_, Order.objects.all())

        assert messages[0][1] == 'warning'
        assert messages[0][0].startswith(f'{order}: Statut invalide')
        assert 'Annulé' in messages[0][0]
        assert messages[-1][0] == '0 commande(s) annulée(s).'
