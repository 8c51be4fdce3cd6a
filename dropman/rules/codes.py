"""
Dated human-presentable codes: PREFIX-YYYYMMDD-NNNN.

Used for tickets (TKT), orders (ORD) and articles (ART).
The suffix comes from the secrets CSPRNG; uniqueness is only
probabilistic and must be enforced by a storage constraint.
"""

import re
import secrets
from datetime import date

SUFFIX_SPACE = 10_000


def dated_code(prefix: str, on_date: date | None = None) -> str:
    """
    Build a code for the given date (None = today).

    >>> dated_code('TKT', date(2025, 10, 15))  # doctest: +SKIP
    'TKT-20251015-0427'
    """
    day = on_date or date.today()
    suffix = secrets.randbelow(SUFFIX_SPACE)
    return f"{prefix}-{day:%Y%m%d}-{suffix:04d}"


def code_pattern(prefix: str) -> re.Pattern:
    """Compiled full-match pattern for a prefix."""
    return re.compile(rf"{re.escape(prefix)}-[0-9]{{8}}-[0-9]{{4}}")


def generate_article_code(on_date: date | None = None) -> str:
    return dated_code('ART', on_date)


def generate_order_number(on_date: date | None = None) -> str:
    return dated_code('ORD', on_date)
