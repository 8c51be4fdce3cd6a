"""
Drop and DropHistory models — campaigns and their send ledger.
"""

from datetime import date

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from dropman.enums import DropStatus
from dropman.rules.drops import can_send_drop, is_drop_editable, is_drop_overdue


class Drop(models.Model):
    """
    Time-boxed WhatsApp campaign: a set of articles posted to a set of groups.

    LIFECYCLE:

        DRAFT ──┐
                ├──► SENDING ──► SENT
        SCHEDULED ┘        └───► FAILED
    """

    name = models.CharField(max_length=100, verbose_name=_('Nom'))
    status = models.CharField(
        max_length=20,
        choices=DropStatus.choices,
        default=DropStatus.DRAFT,
        db_index=True,
        verbose_name=_('Statut'),
    )
    articles = models.ManyToManyField(
        'dropman.Article',
        blank=True,
        related_name='drops',
        verbose_name=_('Articles'),
    )
    groups = models.ManyToManyField(
        'dropman.WhatsAppGroup',
        blank=True,
        related_name='drops',
        verbose_name=_('Groupes'),
    )
    scheduled_for = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Programmé pour'),
    )
    sent_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Envoyé le'))
    total_articles_sent = models.PositiveIntegerField(default=0, verbose_name=_('Articles envoyés'))
    total_groups_sent = models.PositiveIntegerField(default=0, verbose_name=_('Groupes atteints'))
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Créé par'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Drop')
        verbose_name_plural = _('Drops')
        ordering = ['-created_at']

    @property
    def is_editable(self) -> bool:
        return is_drop_editable(self.status)

    @property
    def can_send(self) -> bool:
        """Status allows a send (same-day rule not considered)."""
        return can_send_drop(self.status)

    @property
    def is_overdue(self) -> bool:
        return is_drop_overdue(self.status, self.scheduled_for, timezone.now())

    def __str__(self) -> str:
        return self.name


class DropHistoryQuerySet(models.QuerySet):

    def sent_on(self, day: date):
        """Sends on a calendar day (in the current time zone)."""
        return self.filter(sent_at__date=day)

    def for_group(self, group):
        return self.filter(group=group)


class DropHistory(models.Model):
    """
    One article posted to one group. Append-only.

    The same-day rule reads this ledger: an (article, group) pair present
    for a day is blocked for the rest of that day.
    """

    drop = models.ForeignKey(
        'dropman.Drop',
        on_delete=models.CASCADE,
        related_name='history',
        verbose_name=_('Drop'),
    )
    group = models.ForeignKey(
        'dropman.WhatsAppGroup',
        on_delete=models.PROTECT,
        related_name='sends',
        verbose_name=_('Groupe'),
    )
    article = models.ForeignKey(
        'dropman.Article',
        on_delete=models.PROTECT,
        related_name='sends',
        verbose_name=_('Article'),
    )
    message_id = models.CharField(max_length=100, blank=True, default='', verbose_name=_('ID message'))
    sent_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Envoyé le'))

    objects = DropHistoryQuerySet.as_manager()

    class Meta:
        verbose_name = _('Envoi')
        verbose_name_plural = _('Historique des envois')
        ordering = ['-sent_at']
        indexes = [
            models.Index(fields=['group', 'sent_at'], name='dropman_send_group_day_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.article_id} → {self.group_id} @ {self.sent_at:%Y-%m-%d %H:%M}"
