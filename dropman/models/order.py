"""
Order model — purchase, ticket and pickup.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from dropman.enums import PaymentMethod, PaymentStatus, PickupStatus
from dropman.rules import tickets


class Order(models.Model):
    """
    Customer order for one article.

    payment_status and pickup_status evolve independently (see
    dropman.rules.tickets for the state machine). ticket_code is issued
    when the payment is confirmed and never changes afterwards.
    """

    order_number = models.CharField(max_length=20, unique=True, verbose_name=_('Numéro'))
    article = models.ForeignKey(
        'dropman.Article',
        on_delete=models.PROTECT,
        related_name='orders',
        verbose_name=_('Article'),
    )
    customer_name = models.CharField(max_length=100, verbose_name=_('Client'))
    customer_phone = models.CharField(max_length=20, verbose_name=_('Téléphone'))
    amount = models.PositiveIntegerField(verbose_name=_('Montant'))

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        blank=True,
        default='',
        verbose_name=_('Moyen de paiement'),
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        db_index=True,
        verbose_name=_('Paiement'),
    )
    pickup_status = models.CharField(
        max_length=20,
        choices=PickupStatus.choices,
        default=PickupStatus.PENDING,
        db_index=True,
        verbose_name=_('Retrait'),
    )

    ticket_code = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        verbose_name=_('Code ticket'),
    )
    ticket_expires_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Ticket expire le'))

    paid_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Payé le'))
    picked_up_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Récupéré le'))
    validated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Validé par'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Commande')
        verbose_name_plural = _('Commandes')
        ordering = ['-created_at']

    @property
    def can_pickup(self) -> bool:
        return tickets.can_pickup(self)

    @property
    def is_ticket_expired(self) -> bool:
        return tickets.is_ticket_expired(self.ticket_expires_at, timezone.now())

    @property
    def status_text(self) -> str:
        return tickets.order_status_text(self, timezone.now())

    def __str__(self) -> str:
        return f"{self.order_number} | {self.customer_name}"
