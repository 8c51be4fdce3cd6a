"""
Noop Messaging Gateway — Stub adapter for development and testing.

Every send succeeds and the latest ones are remembered in ``sent``;
nothing leaves the process.

Usage in settings.py:
    DROPMAN = {
        "MESSAGING_GATEWAY": "dropman.adapters.noop.NoopMessagingGateway",
    }

WARNING: Do NOT use in production. Customers will never see the drop.
"""

from __future__ import annotations

from collections import deque

from dropman.protocols.messaging import SendResult

# Sends remembered by one instance; older ones are dropped
SENT_HISTORY_SIZE = 1000


class NoopMessagingGateway:
    """
    No-operation gateway implementing ``MessagingGateway``.

    Optionally fails for chosen groups, which lets tests exercise the
    partial-failure path of a drop send.
    """

    def __init__(self, failing_group_ids=(), history_size: int = SENT_HISTORY_SIZE):
        self.failing_group_ids = set(failing_group_ids)
        self.sent: deque[tuple[str, str, str]] = deque(maxlen=history_size)
        self.count = 0

    def send_article(self, group, article, caption: str) -> SendResult:
        if group.waha_group_id in self.failing_group_ids:
            return SendResult(ok=False, error='group unreachable')

        self.count += 1
        self.sent.append((group.waha_group_id, article.code, caption))
        return SendResult(ok=True, message_id=f"noop:{self.count}")
