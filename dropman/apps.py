"""Django app configuration for Dropman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class DropmanConfig(AppConfig):
    """Configuration for Dropman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "dropman"
    verbose_name = _("Drops WhatsApp")
