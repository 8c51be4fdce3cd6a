"""
Drop composition and status rules (beyond the same-day rule).
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from dropman.enums import DropStatus

SENDABLE_STATUSES = frozenset({DropStatus.DRAFT, DropStatus.SCHEDULED})

# Soft limits: above these a warning is shown, not an error
ARTICLES_WARNING_THRESHOLD = 10
GROUPS_WARNING_THRESHOLD = 5


@dataclass(frozen=True)
class InputCheck:
    """Validation outcome: errors block, warnings only inform."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def is_drop_editable(status: str) -> bool:
    return status in SENDABLE_STATUSES


def can_send_drop(status: str) -> bool:
    return status in SENDABLE_STATUSES


def is_scheduled_for_future(scheduled_for: datetime | None, now: datetime | None = None) -> bool:
    if scheduled_for is None:
        return False
    return scheduled_for > (now or datetime.now(timezone.utc))


def is_drop_overdue(status: str, scheduled_for: datetime | None,
                    now: datetime | None = None) -> bool:
    """Scheduled in the past but not sent."""
    if scheduled_for is None or status == DropStatus.SENT:
        return False
    return scheduled_for < (now or datetime.now(timezone.utc))


def estimate_sending_time(article_count: int, group_count: int,
                          seconds_per_message: int = 3) -> int:
    """Minutes needed to post every article in every group (rounded up)."""
    return math.ceil(article_count * group_count * seconds_per_message / 60)


def validate_drop_input(article_ids: Sequence, group_ids: Sequence,
                        scheduled_for: datetime | None = None,
                        now: datetime | None = None,
                        max_articles: int = 20, max_groups: int = 10) -> InputCheck:
    """
    Validate a drop before it is saved.

    Args:
        article_ids: Articles in the drop
        group_ids: Target WhatsApp groups
        scheduled_for: Optional send time (aware datetime)
        now: Reference time (None = current UTC time)
        max_articles: Hard limit on articles
        max_groups: Hard limit on groups
    """
    errors = []
    warnings = []

    if not article_ids:
        errors.append('Au moins un article est requis')
    elif len(article_ids) > max_articles:
        errors.append(f'Maximum {max_articles} articles par drop')
    elif len(article_ids) > ARTICLES_WARNING_THRESHOLD:
        warnings.append(
            f'{len(article_ids)} articles - drop complexe, envisager de diviser'
        )

    if len(group_ids) > max_groups:
        errors.append(f'Maximum {max_groups} groupes par envoi')
    elif len(group_ids) > GROUPS_WARNING_THRESHOLD:
        warnings.append(f"{len(group_ids)} groupes - temps d'envoi prolongé")

    if scheduled_for is not None:
        hours_until = (scheduled_for - (now or datetime.now(timezone.utc))) / timedelta(hours=1)
        if hours_until < 1:
            warnings.append("Programmé dans moins d'1 heure")
        if hours_until > 24 * 7:
            warnings.append('Programmé dans plus de 7 jours')

    if len(set(article_ids)) != len(article_ids):
        errors.append('Articles en double détectés')
    if len(set(group_ids)) != len(group_ids):
        errors.append('Groupes en double détectés')

    return InputCheck(valid=not errors, errors=errors, warnings=warnings)


def validate_drop_before_send(status: str, scheduled_for: datetime | None = None,
                              now: datetime | None = None) -> list[str]:
    """Status/schedule errors preventing a send right now (empty = ok)."""
    errors = []
    if not can_send_drop(status):
        errors.append(f'Le drop ne peut pas être envoyé (statut: {status})')
    if is_scheduled_for_future(scheduled_for, now):
        errors.append('Le drop est programmé pour le futur')
    return errors
