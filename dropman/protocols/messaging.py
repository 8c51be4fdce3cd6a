"""
Messaging Protocol — Interface for the WhatsApp gateway.

Dropman defines this protocol, the WhatsApp HTTP API client implements it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from dropman.models import Article, WhatsAppGroup


@dataclass(frozen=True)
class SendResult:
    """Result of posting one article to one group."""

    ok: bool
    message_id: str | None = None
    error: str | None = None


@runtime_checkable
class MessagingGateway(Protocol):
    """
    Protocol for posting drop articles to WhatsApp groups.

    Implementations must not raise for delivery failures: they report
    them as SendResult(ok=False, error=...).
    """

    def send_article(
        self,
        group: WhatsAppGroup,
        article: Article,
        caption: str,
    ) -> SendResult:
        """
        Post one article (image + caption) to a group.

        Args:
            group: Target group (uses group.waha_group_id)
            article: Article being offered
            caption: Text sent with the article

        Returns:
            SendResult with the gateway message id on success
        """
        ...
