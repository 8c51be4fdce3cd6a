"""
Gateway loader — returns the MessagingGateway configured in settings.

Usage:
    from dropman.adapters import get_messaging_gateway

    gateway = get_messaging_gateway()
    gateway.send_article(group, article, caption)

Settings:
    DROPMAN = {
        "MESSAGING_GATEWAY": "myproject.waha.WahaGateway",
    }

If MESSAGING_GATEWAY is not configured, get_messaging_gateway() raises ImproperlyConfigured.
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from dropman.conf import dropman_settings
from dropman.protocols.messaging import MessagingGateway

logger = logging.getLogger(__name__)


# Cached gateway instance
_lock = threading.Lock()
_gateway: MessagingGateway | None = None


def get_messaging_gateway() -> MessagingGateway:
    """
    Return the configured messaging gateway.

    Raises:
        ImproperlyConfigured: If MESSAGING_GATEWAY is not configured or import fails
    """
    global _gateway

    if _gateway is None:
        with _lock:
            if _gateway is None:  # double-checked
                gateway_path = dropman_settings.MESSAGING_GATEWAY

                if not gateway_path:
                    raise ImproperlyConfigured(
                        "DROPMAN['MESSAGING_GATEWAY'] must be configured. "
                        "Example: 'dropman.adapters.noop.NoopMessagingGateway'"
                    )

                try:
                    gateway_class = import_string(gateway_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import messaging gateway '{gateway_path}': {e}"
                    ) from e

                gateway = gateway_class()
                if not isinstance(gateway, MessagingGateway):
                    raise ImproperlyConfigured(
                        f"'{gateway_path}' does not implement MessagingGateway"
                    )
                _gateway = gateway
                logger.debug("Loaded messaging gateway: %s", gateway_path)

    return _gateway


def reset_messaging_gateway() -> None:
    """Reset the cached gateway. Useful for testing."""
    global _gateway
    _gateway = None
