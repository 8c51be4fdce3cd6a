"""
Same-day rule — one article per WhatsApp group per calendar day.

An article already sent to a group today is blocked for that group,
whatever drop it came from. A drop may still go out as long as at least
one group can receive at least one article.

The per-group SameDayValidation records are built from the send history
(see dropman.services.drops); this module only aggregates them.

Usage:
    validations = [build_validation(g.id, g.name, article_ids, sent[g.id]) for g in groups]

    if can_send_drop_with_same_day_rule(validations):
        ...
    summary = get_validation_summary(validations)
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class SameDayValidation:
    """
    Same-day verdict for one group.

    allowed_article_ids and blocked_article_ids partition the drop's
    articles. Built fresh per send attempt and never mutated.
    """

    group_id: str
    group_name: str
    allowed_article_ids: tuple[str, ...] = ()
    blocked_article_ids: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_clear(self) -> bool:
        return not self.blocked_article_ids

    @property
    def is_blocked(self) -> bool:
        return not self.allowed_article_ids and bool(self.blocked_article_ids)

    @property
    def is_partially_blocked(self) -> bool:
        return bool(self.allowed_article_ids) and bool(self.blocked_article_ids)


@dataclass(frozen=True)
class ValidationSummary:
    """Counts shown in the operator confirmation dialog."""

    total_groups: int = 0
    clear_groups: int = 0
    partially_blocked_groups: int = 0
    blocked_groups: int = 0
    total_warnings: int = 0


def build_validation(group_id, group_name: str, article_ids: Sequence,
                     sent_article_ids: Iterable) -> SameDayValidation:
    """
    Split a drop's articles for one group given what it received today.

    Drop order is kept in both lists and duplicates are dropped, so the
    result always partitions article_ids.

    Args:
        group_id: Group identifier
        group_name: Display name used in warnings
        article_ids: Articles of the drop
        sent_article_ids: Articles already sent to the group today
    """
    sent = {str(a) for a in sent_article_ids}
    ordered = list(dict.fromkeys(str(a) for a in article_ids))

    blocked = tuple(a for a in ordered if a in sent)
    allowed = tuple(a for a in ordered if a not in sent)

    warnings = []
    if blocked:
        warnings.append(
            f'⚠️ {len(blocked)} article(s) déjà envoyé(s) à "{group_name}" aujourd\'hui'
        )
    if ordered and not allowed:
        warnings.append(
            f'🚫 BLOQUÉ: Tous les articles ont déjà été envoyés à "{group_name}" aujourd\'hui'
        )

    return SameDayValidation(
        group_id=str(group_id),
        group_name=group_name,
        allowed_article_ids=allowed,
        blocked_article_ids=blocked,
        warnings=tuple(warnings),
    )


def can_send_drop_with_same_day_rule(validations: Iterable[SameDayValidation]) -> bool:
    """
    True iff at least one group still has an allowed article.

    An empty sequence means nobody to send to: False.
    """
    return any(v.allowed_article_ids for v in validations)


def get_all_warnings(validations: Iterable[SameDayValidation]) -> list[str]:
    """All warnings, group by group, in input order. Not deduplicated."""
    return [w for v in validations for w in v.warnings]


def get_validation_summary(validations: Iterable[SameDayValidation]) -> ValidationSummary:
    """
    Classify every group as clear, partially blocked or blocked.

    The three classes are exclusive and exhaustive as long as each record
    partitions the drop's articles; the partition is not checked here
    (see find_partition_violations).
    """
    total = clear = partial = blocked = warnings = 0

    for v in validations:
        total += 1
        warnings += len(v.warnings)
        if not v.blocked_article_ids:
            clear += 1
        elif v.allowed_article_ids:
            partial += 1
        else:
            blocked += 1

    return ValidationSummary(
        total_groups=total,
        clear_groups=clear,
        partially_blocked_groups=partial,
        blocked_groups=blocked,
        total_warnings=warnings,
    )


def is_partition_of(validation: SameDayValidation, article_ids: Iterable) -> bool:
    """Allowed and blocked are disjoint and together cover article_ids exactly."""
    allowed = set(validation.allowed_article_ids)
    blocked = set(validation.blocked_article_ids)
    if allowed & blocked:
        return False
    return allowed | blocked == {str(a) for a in article_ids}


def find_partition_violations(validations: Iterable[SameDayValidation],
                              article_ids: Iterable) -> list[str]:
    """Group ids whose record does not partition article_ids."""
    expected = [str(a) for a in article_ids]
    return [v.group_id for v in validations if not is_partition_of(v, expected)]
