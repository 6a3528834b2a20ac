"""Summary metrics over a fetched transaction set."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from dashboard.domain.datetimes import wall_clock
from dashboard.domain.models.transaction import DailyBucket, Transaction, TransactionStats
from dashboard.domain.status import StatusFamily, StatusNormalizer

_default_normalizer = StatusNormalizer()


def aggregate(
    transactions: Iterable[Transaction],
    normalizer: StatusNormalizer | None = None,
) -> TransactionStats:
    """Counts per status family and the realized (completed-only) amount."""
    normalizer = normalizer or _default_normalizer
    stats = TransactionStats()
    for transaction in transactions:
        stats.total += 1
        family = normalizer.family(transaction.status)
        if family is StatusFamily.COMPLETED:
            stats.completed_count += 1
            stats.completed_amount_sum += max(transaction.amount, 0.0)
        elif family is StatusFamily.PENDING:
            stats.pending_count += 1
        elif family is StatusFamily.FAILED:
            stats.failed_count += 1
    stats.completed_amount_sum = round(stats.completed_amount_sum, 2)
    return stats


def daily_breakdown(
    transactions: Iterable[Transaction],
    normalizer: StatusNormalizer | None = None,
) -> list[DailyBucket]:
    """Per-day family counts for the dashboard chart, oldest day first.

    Days come from the creation timestamp's own calendar date. Transactions
    whose timestamp could not be parsed are left out.
    """
    normalizer = normalizer or _default_normalizer
    counts: dict[date, dict[StatusFamily, int]] = defaultdict(lambda: defaultdict(int))
    for transaction in transactions:
        created = wall_clock(transaction.created_at)
        if created is None:
            continue
        counts[created.date()][normalizer.family(transaction.status)] += 1

    return [
        DailyBucket(
            day=day,
            label=day.strftime("%d/%m"),
            completed=families[StatusFamily.COMPLETED],
            pending=families[StatusFamily.PENDING],
            failed=families[StatusFamily.FAILED],
            in_progress=families[StatusFamily.IN_PROGRESS],
        )
        for day, families in sorted(counts.items())
    ]
