"""
Drop sends — same-day validation against the send ledger, then posting.

Usage:
    from dropman.services import DropSends

    check = DropSends.check(drop)
    if check.can_send:
        report = DropSends.send(drop)
"""

import logging
from dataclasses import dataclass
from datetime import date

from django.db import transaction
from django.utils import timezone

from dropman.adapters.gateway import get_messaging_gateway
from dropman.conf import dropman_settings
from dropman.enums import DropStatus
from dropman.exceptions import DropmanError
from dropman.models import Article, Drop, DropHistory
from dropman.rules.drops import (
    estimate_sending_time,
    validate_drop_before_send,
    validate_drop_input,
)
from dropman.rules.same_day import (
    SameDayValidation,
    ValidationSummary,
    build_validation,
    can_send_drop_with_same_day_rule,
    find_partition_violations,
    get_all_warnings,
    get_validation_summary,
)
from dropman.rules.stock import can_add_to_drop, format_price

logger = logging.getLogger('dropman')


@dataclass(frozen=True)
class DropCheck:
    """Everything the confirmation dialog shows before a send."""

    can_send: bool
    errors: list[str]
    warnings: list[str]
    validations: list[SameDayValidation]
    summary: ValidationSummary
    blocked_by_same_day: bool = False
    invalid_input: bool = False
    estimated_minutes: int = 0


@dataclass
class SendReport:
    """Outcome of a drop send."""

    sent: int = 0
    failed: int = 0
    skipped: int = 0
    groups_reached: int = 0
    articles_sent: int = 0


def build_caption(article: Article) -> str:
    """Text posted with an article."""
    lines = [
        f"🛍️ {article.name}",
        f"💰 {format_price(article.price)} {dropman_settings.CURRENCY}",
    ]
    if article.description:
        lines.append(article.description)
    lines.append(f"🔖 {article.code}")
    return "\n".join(lines)


class DropSends:
    """Same-day validation and sending of drops."""

    @classmethod
    def _split_articles(cls, drop: Drop) -> tuple[list[str], list[tuple[Article, str]]]:
        """Drop articles as (sendable ids, [(unavailable article, reason)])."""
        sendable, unavailable = [], []
        for article in drop.articles.order_by('pk'):
            check = can_add_to_drop(article)
            if check:
                sendable.append(str(article.pk))
            else:
                unavailable.append((article, check.reason))
        return sendable, unavailable

    @classmethod
    def _article_ids(cls, drop: Drop) -> list[str]:
        return cls._split_articles(drop)[0]

    @classmethod
    def validate(cls, drop: Drop, on_date: date | None = None) -> list[SameDayValidation]:
        """
        One SameDayValidation per active group of the drop.

        Args:
            drop: Drop to validate
            on_date: Calendar day to check (None = today, local time zone)
        """
        day = on_date or timezone.localdate()
        article_ids = cls._article_ids(drop)

        validations = []
        for group in drop.groups.filter(is_active=True).order_by('name', 'pk'):
            sent = (
                DropHistory.objects.sent_on(day)
                .for_group(group)
                .filter(article_id__in=article_ids)
                .values_list('article_id', flat=True)
            )
            validations.append(
                build_validation(group.pk, group.name, article_ids, sent)
            )
        return validations

    @classmethod
    def check(cls, drop: Drop, on_date: date | None = None) -> DropCheck:
        """
        Status, composition and same-day checks, without side effects.

        Composition limits come from DROPMAN['MAX_ARTICLES_PER_DROP'] and
        DROPMAN['MAX_GROUPS_PER_DROP']. Articles no longer available are
        left out of the send with a warning.
        """
        errors = validate_drop_before_send(drop.status, drop.scheduled_for, timezone.now())

        # Schedule warnings only matter while the drop is being composed
        composition = validate_drop_input(
            list(drop.articles.values_list('pk', flat=True)),
            list(drop.groups.values_list('pk', flat=True)),
            max_articles=dropman_settings.MAX_ARTICLES_PER_DROP,
            max_groups=dropman_settings.MAX_GROUPS_PER_DROP,
        )
        errors.extend(composition.errors)
        warnings = list(composition.warnings)

        sendable, unavailable = cls._split_articles(drop)
        for article, reason in unavailable:
            warnings.append(f'{article.name} ({article.code}) ne sera pas envoyé: {reason}')
        if unavailable and not sendable:
            errors.append('Aucun article disponible dans le drop')

        validations = cls.validate(drop, on_date)
        if not validations:
            errors.append('Aucun groupe WhatsApp actif')

        blocked_by_same_day = (
            bool(validations) and bool(sendable)
            and not can_send_drop_with_same_day_rule(validations)
        )
        if blocked_by_same_day:
            errors.append(DropmanError('SAME_DAY_BLOCKED').message)

        allowed_pairs = sum(len(v.allowed_article_ids) for v in validations)

        return DropCheck(
            can_send=not errors,
            errors=errors,
            warnings=warnings + get_all_warnings(validations),
            validations=validations,
            summary=get_validation_summary(validations),
            blocked_by_same_day=blocked_by_same_day,
            invalid_input=not composition.valid,
            estimated_minutes=estimate_sending_time(
                allowed_pairs, 1, dropman_settings.SECONDS_PER_MESSAGE,
            ),
        )

    @classmethod
    def send(cls, drop: Drop, gateway=None, on_date: date | None = None) -> SendReport:
        """
        Post every allowed (group, article) pair and record it.

        Blocked pairs are skipped. The drop ends SENT if anything went
        out, FAILED otherwise.

        Raises:
            DropmanError('INVALID_DROP'): Composition limits or duplicates
            DropmanError('DROP_NOT_SENDABLE'): Status, schedule or no article left
            DropmanError('SAME_DAY_BLOCKED'): Every group already got every article today
            DropmanError('PARTITION_VIOLATION'): Inconsistent validation records
        """
        gateway = gateway or get_messaging_gateway()

        with transaction.atomic():
            drop = Drop.objects.select_for_update().get(pk=drop.pk)
            check = cls.check(drop, on_date)

            if not check.can_send:
                if check.blocked_by_same_day:
                    code = 'SAME_DAY_BLOCKED'
                elif check.invalid_input:
                    code = 'INVALID_DROP'
                else:
                    code = 'DROP_NOT_SENDABLE'
                raise DropmanError(code, drop_id=drop.pk, errors=check.errors)

            violations = find_partition_violations(check.validations, cls._article_ids(drop))
            if violations:
                raise DropmanError('PARTITION_VIOLATION', drop_id=drop.pk, groups=violations)

            drop.status = DropStatus.SENDING
            drop.save(update_fields=['status', 'updated_at'])

        articles = {str(a.pk): a for a in drop.articles.all()}
        groups = {str(g.pk): g for g in drop.groups.all()}
        report = SendReport()
        sent_articles = set()

        try:
            for validation in check.validations:
                group = groups[validation.group_id]
                report.skipped += len(validation.blocked_article_ids)
                reached = False

                for article_id in validation.allowed_article_ids:
                    article = articles[article_id]
                    result = gateway.send_article(group, article, build_caption(article))

                    if not result.ok:
                        report.failed += 1
                        logger.warning(
                            "drop.send.failed",
                            extra={
                                "drop_id": drop.pk,
                                "group": group.waha_group_id,
                                "article": article.code,
                                "error": result.error,
                            },
                        )
                        continue

                    DropHistory.objects.create(
                        drop=drop,
                        group=group,
                        article=article,
                        message_id=result.message_id or '',
                    )
                    report.sent += 1
                    sent_articles.add(article_id)
                    reached = True

                if reached:
                    report.groups_reached += 1
        except Exception:
            Drop.objects.filter(pk=drop.pk).update(status=DropStatus.FAILED)
            logger.exception("drop.send.aborted", extra={"drop_id": drop.pk})
            raise

        report.articles_sent = len(sent_articles)

        drop.status = DropStatus.SENT if report.sent else DropStatus.FAILED
        drop.sent_at = timezone.now()
        drop.total_articles_sent = report.articles_sent
        drop.total_groups_sent = report.groups_reached
        drop.save(update_fields=[
            'status', 'sent_at', 'total_articles_sent', 'total_groups_sent', 'updated_at',
        ])

        logger.info(
            "drop.sent",
            extra={
                "drop_id": drop.pk,
                "sent": report.sent,
                "failed": report.failed,
                "skipped": report.skipped,
                "drop_status": drop.status,
            },
        )
        return report
