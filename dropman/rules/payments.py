"""
Mobile money helpers — Cameroon numbers, operator detection.
"""

import re

from dropman.enums import PaymentMethod

COUNTRY_CODE = '+237'

_PHONE_RE = re.compile(r"\+2376[0-9]{8}")
_SEPARATORS_RE = re.compile(r"[\s-]")

_MTN_PREFIXES = ('650', '651', '652', '653', '654', '656')
_ORANGE_PREFIXES = ('655', '657', '658', '659')


def format_phone_for_payment(phone: str) -> str:
    """Strip spaces/dashes and ensure the +237 prefix."""
    cleaned = _SEPARATORS_RE.sub('', phone)
    if cleaned.startswith(COUNTRY_CODE):
        return cleaned
    if cleaned.startswith('237'):
        return f"+{cleaned}"
    return f"{COUNTRY_CODE}{cleaned}"


def is_valid_payment_phone(phone: str) -> bool:
    return _PHONE_RE.fullmatch(format_phone_for_payment(phone)) is not None


def detect_payment_provider(phone: str) -> PaymentMethod | None:
    """
    Operator from the number prefix.

    MTN: 67x, 68x, 650-654, 656. Orange: 69x, 655, 657-659.
    """
    digits = re.sub(r"[\s\-+]", '', phone)[-9:]
    if not digits.startswith('6'):
        return None

    prefix = digits[:3]
    if prefix.startswith(('67', '68')) or prefix in _MTN_PREFIXES:
        return PaymentMethod.MTN_MOMO
    if prefix.startswith('69') or prefix in _ORANGE_PREFIXES:
        return PaymentMethod.ORANGE_MONEY
    return None
