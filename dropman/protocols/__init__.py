"""
Dropman Protocols.

Defines interfaces for external system integration.
"""

from dropman.protocols.messaging import (
    MessagingGateway,
    SendResult,
)

__all__ = [
    "MessagingGateway",
    "SendResult",
]
