"""
Dropman configuration.

Usage in settings.py:
    DROPMAN = {
        "MESSAGING_GATEWAY": "myproject.waha.WahaGateway",
        "TICKET_TTL_DAYS": 7,
        "MAX_ARTICLES_PER_DROP": 20,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class DropmanSettings:
    """Dropman configuration settings."""

    # WhatsApp gateway backend (dotted path)
    MESSAGING_GATEWAY: str = ""

    # Days a ticket stays valid after payment
    TICKET_TTL_DAYS: int = 7

    # Ticket code generation attempts before giving up on collisions
    TICKET_CODE_ATTEMPTS: int = 5

    # Hard limits on drop composition
    MAX_ARTICLES_PER_DROP: int = 20
    MAX_GROUPS_PER_DROP: int = 10

    # Used by the sending time estimate (message + pause)
    SECONDS_PER_MESSAGE: int = 3

    # Currency label appended to prices in captions
    CURRENCY: str = "FCFA"


def get_dropman_settings() -> DropmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "DROPMAN", {})
    return DropmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in DropmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_dropman_settings(), name)


dropman_settings = _LazySettings()
