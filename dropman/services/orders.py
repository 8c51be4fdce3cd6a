"""
Order lifecycle — creation, payment outcome, ticket issue and pickup.

All state-changing methods run under transaction.atomic() and lock the
order row with select_for_update().

Usage:
    from dropman.services import OrderLifecycle

    order = OrderLifecycle.create(article, 'Awa', '677 12 34 56')
    order = OrderLifecycle.confirm_payment(order)   # issues order.ticket_code
    order = OrderLifecycle.pickup(order.ticket_code, user=cashier)
"""

import logging
from datetime import timedelta

from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from dropman.conf import dropman_settings
from dropman.enums import ArticleStatus, PaymentStatus, PickupStatus
from dropman.exceptions import DropmanError
from dropman.models import Article, Order
from dropman.rules.codes import generate_order_number
from dropman.rules.payments import detect_payment_provider, format_phone_for_payment
from dropman.rules.stock import can_be_ordered
from dropman.rules.tickets import (
    PAYMENT_TRANSITIONS,
    PICKUP_TRANSITIONS,
    can_transition,
    check_pickup,
    generate_ticket_code,
    is_valid_ticket_format,
)

logger = logging.getLogger('dropman')


def _save_with_unique_code(order: Order, field: str, generate, update_fields=None) -> None:
    """
    Assign a freshly generated code and save, retrying on collision.

    The unique constraint on ``field`` is the only uniqueness guarantee;
    each attempt runs in its own savepoint.
    """
    attempts = dropman_settings.TICKET_CODE_ATTEMPTS
    for attempt in range(1, attempts + 1):
        setattr(order, field, generate())
        try:
            with transaction.atomic():
                order.save(update_fields=update_fields)
            return
        except IntegrityError:
            logger.warning(
                "order.code.collision",
                extra={"field": field, "code": getattr(order, field), "attempt": attempt},
            )
    raise DropmanError('TICKET_CODE_EXHAUSTED', field=field, attempts=attempts)


class OrderLifecycle:
    """Order state transitions."""

    @classmethod
    def _lock(cls, order: Order) -> Order:
        return Order.objects.select_for_update().get(pk=order.pk)

    @classmethod
    def _move_payment(cls, order: Order, target: PaymentStatus) -> None:
        if not can_transition(PAYMENT_TRANSITIONS, order.payment_status, target):
            raise DropmanError(
                'INVALID_STATUS',
                order=order.order_number,
                current=order.payment_status,
                target=target,
            )
        order.payment_status = target

    @classmethod
    def _move_pickup(cls, order: Order, target: PickupStatus) -> None:
        if not can_transition(PICKUP_TRANSITIONS, order.pickup_status, target):
            raise DropmanError(
                'INVALID_STATUS',
                order=order.order_number,
                current=order.pickup_status,
                target=target,
            )
        order.pickup_status = target

    @classmethod
    def create(cls, article: Article, customer_name: str, customer_phone: str,
               payment_method: str | None = None) -> Order:
        """
        New order in PENDING/PENDING for one unit of an article.

        The payment method defaults to the operator detected from the phone.

        Raises:
            DropmanError('ARTICLE_UNAVAILABLE'): Article not AVAILABLE
            DropmanError('INSUFFICIENT_STOCK'): Nothing left
        """
        check = can_be_ordered(article)
        if not check:
            code = (
                'ARTICLE_UNAVAILABLE'
                if article.status != ArticleStatus.AVAILABLE
                else 'INSUFFICIENT_STOCK'
            )
            raise DropmanError(code, check.reason, article=article.code)

        phone = format_phone_for_payment(customer_phone)
        order = Order(
            article=article,
            customer_name=customer_name,
            customer_phone=phone,
            amount=article.price,
            payment_method=payment_method or detect_payment_provider(phone) or '',
        )
        with transaction.atomic():
            _save_with_unique_code(order, 'order_number', generate_order_number)

        logger.info(
            "order.created",
            extra={"order": order.order_number, "article": article.code, "amount": order.amount},
        )
        return order

    @classmethod
    def confirm_payment(cls, order: Order) -> Order:
        """
        PENDING → PAID. Issues the ticket code and its expiry.

        Raises:
            DropmanError('INVALID_STATUS'): Payment not PENDING
            DropmanError('TICKET_CODE_EXHAUSTED'): No free code after retries
        """
        with transaction.atomic():
            order = cls._lock(order)
            cls._move_payment(order, PaymentStatus.PAID)

            now = timezone.now()
            order.paid_at = now
            order.ticket_expires_at = now + timedelta(days=dropman_settings.TICKET_TTL_DAYS)
            today = timezone.localdate(now)
            _save_with_unique_code(
                order,
                'ticket_code',
                lambda: generate_ticket_code(today),
                update_fields=[
                    'payment_status', 'paid_at', 'ticket_code',
                    'ticket_expires_at', 'updated_at',
                ],
            )

        logger.info(
            "order.paid",
            extra={"order": order.order_number, "ticket": order.ticket_code},
        )
        return order

    @classmethod
    def fail_payment(cls, order: Order) -> Order:
        """PENDING → FAILED."""
        with transaction.atomic():
            order = cls._lock(order)
            cls._move_payment(order, PaymentStatus.FAILED)
            order.save(update_fields=['payment_status', 'updated_at'])

        logger.info("order.payment.failed", extra={"order": order.order_number})
        return order

    @classmethod
    def refund(cls, order: Order) -> Order:
        """
        PAID → REFUNDED. A pending pickup is cancelled with it.

        Raises:
            DropmanError('INVALID_STATUS'): Not PAID, or already picked up
        """
        with transaction.atomic():
            order = cls._lock(order)
            if order.pickup_status == PickupStatus.PICKED_UP:
                raise DropmanError(
                    'INVALID_STATUS',
                    order=order.order_number,
                    current=order.pickup_status,
                )
            cls._move_payment(order, PaymentStatus.REFUNDED)
            if order.pickup_status == PickupStatus.PENDING:
                order.pickup_status = PickupStatus.CANCELLED
            order.save(update_fields=['payment_status', 'pickup_status', 'updated_at'])

        logger.info("order.refunded", extra={"order": order.order_number})
        return order

    @classmethod
    def cancel(cls, order: Order) -> Order:
        """Pickup PENDING → CANCELLED."""
        with transaction.atomic():
            order = cls._lock(order)
            cls._move_pickup(order, PickupStatus.CANCELLED)
            order.save(update_fields=['pickup_status', 'updated_at'])

        logger.info("order.cancelled", extra={"order": order.order_number})
        return order

    @classmethod
    def find_by_ticket(cls, ticket_code: str) -> Order:
        """
        Raises:
            DropmanError('INVALID_TICKET'): Malformed code
            DropmanError('TICKET_NOT_FOUND'): No order with that code
        """
        code = ticket_code.strip().upper() if isinstance(ticket_code, str) else ticket_code
        if not is_valid_ticket_format(code):
            raise DropmanError('INVALID_TICKET', ticket_code=ticket_code)
        try:
            return Order.objects.select_related('article').get(ticket_code=code)
        except Order.DoesNotExist:
            raise DropmanError('TICKET_NOT_FOUND', ticket_code=code) from None

    @classmethod
    def pickup(cls, ticket_code: str, user=None) -> Order:
        """
        Hand the article over: pickup PENDING → PICKED_UP, stock - 1.

        Raises:
            DropmanError('INVALID_TICKET' | 'TICKET_NOT_FOUND'): See find_by_ticket
            DropmanError('PICKUP_NOT_ALLOWED'): Not paid, already picked up or cancelled
            DropmanError('TICKET_EXPIRED'): Ticket past its expiry
            DropmanError('INSUFFICIENT_STOCK'): Article counter already at zero
        """
        order = cls.find_by_ticket(ticket_code)
        now = timezone.now()

        with transaction.atomic():
            order = cls._lock(order)

            check = check_pickup(order, now)
            if not check:
                code = 'TICKET_EXPIRED' if order.can_pickup else 'PICKUP_NOT_ALLOWED'
                raise DropmanError(
                    code,
                    reason=check.reason,
                    order=order.order_number,
                    payment_status=order.payment_status,
                    pickup_status=order.pickup_status,
                )

            updated = Article.objects.filter(pk=order.article_id, stock__gt=0).update(
                stock=F('stock') - 1,
                updated_at=now,
            )
            if not updated:
                raise DropmanError('INSUFFICIENT_STOCK', article=order.article.code)

            article = Article.objects.get(pk=order.article_id)
            if article.stock == 0 and article.status == ArticleStatus.AVAILABLE:
                article.status = ArticleStatus.OUT_OF_STOCK
                article.save(update_fields=['status', 'updated_at'])

            order.pickup_status = PickupStatus.PICKED_UP
            order.picked_up_at = now
            order.validated_by = user
            order.save(update_fields=['pickup_status', 'picked_up_at', 'validated_by', 'updated_at'])

        logger.info(
            "order.picked_up",
            extra={
                "order": order.order_number,
                "ticket": order.ticket_code,
                "user": getattr(user, 'pk', None),
            },
        )
        return order
