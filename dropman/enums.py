"""
Enums for Dropman.

Kept outside dropman.models so the pure rule engines can import them
without loading any model.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class StockStatus(models.TextChoices):
    """
    Classification of an article's stock level.

    Evaluated in priority order: OUT before LOW before OK.
    An empty shelf is never reported as merely LOW.
    """
    OUT = 'out', _('Rupture de stock')
    LOW = 'low', _('Stock faible')
    OK = 'ok', _('En stock')


class ArticleStatus(models.TextChoices):
    """Catalog status of an article."""
    AVAILABLE = 'AVAILABLE', _('Disponible')
    OUT_OF_STOCK = 'OUT_OF_STOCK', _('Rupture')
    ARCHIVED = 'ARCHIVED', _('Archivé')


class DropStatus(models.TextChoices):
    """Drop lifecycle status."""
    DRAFT = 'DRAFT', _('Brouillon')
    SCHEDULED = 'SCHEDULED', _('Programmé')
    SENDING = 'SENDING', _("En cours d'envoi")
    SENT = 'SENT', _('Envoyé')
    FAILED = 'FAILED', _('Échoué')


class PaymentStatus(models.TextChoices):
    """
    Payment state of an order.

    PENDING → PAID | FAILED; PAID → REFUNDED. FAILED and REFUNDED are terminal.
    """
    PENDING = 'PENDING', _('En attente')
    PAID = 'PAID', _('Payé')
    FAILED = 'FAILED', _('Échoué')
    REFUNDED = 'REFUNDED', _('Remboursé')


class PickupStatus(models.TextChoices):
    """Pickup state of an order. PENDING → PICKED_UP | CANCELLED, both terminal."""
    PENDING = 'PENDING', _('En attente')
    PICKED_UP = 'PICKED_UP', _('Récupéré')
    CANCELLED = 'CANCELLED', _('Annulé')


class PaymentMethod(models.TextChoices):
    """Supported mobile money operators."""
    MTN_MOMO = 'MTN_MOMO', _('MTN Mobile Money')
    ORANGE_MONEY = 'ORANGE_MONEY', _('Orange Money')
