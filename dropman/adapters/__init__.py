"""
Dropman Adapters.

Implementations of protocols for external systems.
"""

from dropman.adapters.gateway import get_messaging_gateway, reset_messaging_gateway
from dropman.adapters.noop import NoopMessagingGateway

__all__ = [
    "NoopMessagingGateway",
    "get_messaging_gateway",
    "reset_messaging_gateway",
]
