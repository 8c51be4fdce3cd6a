"""
Order and ticket lifecycle — ticket codes and pickup eligibility.

An order carries two independent states:

    payment:  PENDING ──► PAID ──► REFUNDED
                 └──────► FAILED

    pickup:   PENDING ──► PICKED_UP
                 └──────► CANCELLED

Pickup is allowed in exactly one combination: PAID + PENDING.
This module only classifies snapshots; transitions are driven by
dropman.services.orders.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from dropman.enums import PaymentStatus, PickupStatus
from dropman.rules.codes import code_pattern, dated_code
from dropman.rules.stock import RuleCheck

TICKET_PREFIX = 'TKT'

_TICKET_RE = code_pattern(TICKET_PREFIX)

PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: frozenset({PaymentStatus.PAID, PaymentStatus.FAILED}),
    PaymentStatus.PAID: frozenset({PaymentStatus.REFUNDED}),
    PaymentStatus.FAILED: frozenset(),
    PaymentStatus.REFUNDED: frozenset(),
}

PICKUP_TRANSITIONS = {
    PickupStatus.PENDING: frozenset({PickupStatus.PICKED_UP, PickupStatus.CANCELLED}),
    PickupStatus.PICKED_UP: frozenset(),
    PickupStatus.CANCELLED: frozenset(),
}

_PAYMENT_TEXT = {
    PaymentStatus.PENDING: 'En attente',
    PaymentStatus.PAID: 'Payé',
    PaymentStatus.FAILED: 'Échoué',
    PaymentStatus.REFUNDED: 'Remboursé',
}

_PICKUP_TEXT = {
    PickupStatus.PENDING: 'En attente',
    PickupStatus.PICKED_UP: 'Récupéré',
    PickupStatus.CANCELLED: 'Annulé',
}


@dataclass(frozen=True)
class OrderState:
    """Read-only snapshot of the order fields the rules look at."""

    payment_status: str
    pickup_status: str
    ticket_expires_at: datetime | None = None


def generate_ticket_code(on_date: date | None = None) -> str:
    """New ticket code TKT-YYYYMMDD-NNNN for the given date (None = today)."""
    return dated_code(TICKET_PREFIX, on_date)


def is_valid_ticket_format(code: str) -> bool:
    """True iff code is exactly TKT- + 8 digits + - + 4 digits."""
    if not isinstance(code, str):
        return False
    return _TICKET_RE.fullmatch(code) is not None


def can_pickup(order) -> bool:
    """
    Paid and not yet picked up nor cancelled.

    Args:
        order: Any object with .payment_status and .pickup_status
    """
    return (
        order.payment_status == PaymentStatus.PAID
        and order.pickup_status == PickupStatus.PENDING
    )


def can_transition(table: dict, current: str, target: str) -> bool:
    """Whether target is reachable from current in one step."""
    return target in table.get(current, frozenset())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def ticket_expiry(paid_at: datetime, days: int = 7) -> datetime:
    return paid_at + timedelta(days=days)


def is_ticket_expired(expires_at: datetime | None, now: datetime | None = None) -> bool:
    """A ticket without expiry never expires."""
    if expires_at is None:
        return False
    return expires_at < (now or _now())


def days_until_expiry(expires_at: datetime, now: datetime | None = None) -> int:
    """Whole days left, rounded up, never negative."""
    seconds = (expires_at - (now or _now())).total_seconds()
    return max(0, math.ceil(seconds / 86400))


def is_ticket_expiring_soon(expires_at: datetime, now: datetime | None = None) -> bool:
    """One or two days left."""
    return 0 < days_until_expiry(expires_at, now) <= 2


def check_pickup(order, now: datetime | None = None) -> RuleCheck:
    """
    Pickup eligibility with the reason shown at the counter.

    Same verdict as can_pickup, plus an expired ticket is refused
    when the order carries ticket_expires_at.
    """
    if order.payment_status != PaymentStatus.PAID:
        return RuleCheck(False, "Le paiement n'est pas confirmé")
    if order.pickup_status == PickupStatus.PICKED_UP:
        return RuleCheck(False, 'Commande déjà récupérée')
    if order.pickup_status != PickupStatus.PENDING:
        return RuleCheck(False, 'Commande annulée')
    if is_ticket_expired(getattr(order, 'ticket_expires_at', None), now):
        return RuleCheck(False, 'Ticket expiré')
    return RuleCheck(True)


def payment_status_text(status: str) -> str:
    return _PAYMENT_TEXT[PaymentStatus(status)]


def pickup_status_text(status: str) -> str:
    return _PICKUP_TEXT[PickupStatus(status)]


def order_status_text(order, now: datetime | None = None) -> str:
    """Single combined label for an order, pickup state first."""
    if order.pickup_status == PickupStatus.PICKED_UP:
        return 'Récupéré'
    if order.pickup_status == PickupStatus.CANCELLED:
        return 'Annulé'
    if order.payment_status == PaymentStatus.FAILED:
        return 'Paiement échoué'
    if order.payment_status == PaymentStatus.REFUNDED:
        return 'Remboursé'
    if order.payment_status == PaymentStatus.PENDING:
        return 'En attente de paiement'
    if is_ticket_expired(getattr(order, 'ticket_expires_at', None), now):
        return 'Ticket expiré'
    return 'Prêt à récupérer'
