"""
Exceptions for Dropman.

All service errors are DropmanError with a structured code for programmatic
handling. Rule functions in dropman.rules never raise for in-domain input.
"""

from typing import Any


class BaseError(Exception):
    """
    Exception carrying a machine-readable code and context data.

    Subclasses declare ``_default_messages`` mapping codes to
    human-readable messages.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


class DropmanError(BaseError):
    """
    Structured exception for drop, order and catalog operations.

    Usage:
        try:
            orders.pickup("TKT-20251015-0001")
        except DropmanError as e:
            if e.code == 'PICKUP_NOT_ALLOWED':
                print(e.reason)

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_STATUS': 'Statut invalide pour cette opération',
        'INVALID_TICKET': 'Code ticket invalide (format: TKT-YYYYMMDD-XXXX)',
        'TICKET_NOT_FOUND': 'Ticket introuvable',
        'TICKET_EXPIRED': 'Ticket expiré',
        'PICKUP_NOT_ALLOWED': 'Retrait non autorisé',
        'ARTICLE_UNAVAILABLE': "L'article n'est pas disponible",
        'INSUFFICIENT_STOCK': 'Stock insuffisant',
        'NEGATIVE_STOCK': 'Le stock ne peut pas être négatif',
        'INVALID_DROP': 'Drop invalide',
        'DROP_NOT_SENDABLE': 'Le drop ne peut pas être envoyé',
        'SAME_DAY_BLOCKED': "Tous les articles ont déjà été envoyés aujourd'hui",
        'PARTITION_VIOLATION': 'Validation incohérente avec les articles du drop',
        'TICKET_CODE_EXHAUSTED': 'Impossible de générer un code ticket unique',
    }

    @property
    def reason(self) -> str:
        """Shortcut for data['reason'], falling back to the message."""
        return self.data.get('reason', self.message)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: v if isinstance(v, (int, float, bool, list)) or v is None else str(v)
                for k, v in self.data.items()
            }
        }
