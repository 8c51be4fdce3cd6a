"""
WhatsAppGroup model — broadcast target of drops.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class WhatsAppGroup(models.Model):
    """A WhatsApp group reachable through the messaging gateway."""

    name = models.CharField(max_length=100, verbose_name=_('Nom'))
    waha_group_id = models.CharField(
        max_length=100,
        unique=True,
        verbose_name=_('Identifiant WhatsApp'),
        help_text=_('Ex: 120363012345678901@g.us'),
    )
    member_count = models.PositiveIntegerField(default=0, verbose_name=_('Membres'))
    is_active = models.BooleanField(default=True, verbose_name=_('Actif'))
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Groupe WhatsApp')
        verbose_name_plural = _('Groupes WhatsApp')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
