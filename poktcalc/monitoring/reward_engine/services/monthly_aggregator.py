"""Folds confirmed claims into per-month reward summaries."""

from datetime import datetime, timezone
from typing import Dict, Iterable
import bittensor as bt

from ..models.monthly_reward import MonthKey, MonthlyReward
from ..models.transaction import Transaction


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def weekday_index(moment: datetime) -> int:
    """Day of week with Sunday as 0."""
    return moment.isoweekday() % 7


class MonthlyAggregator:
    """Groups claims by calendar month and derives weekday and timing statistics."""

    def aggregate(self, claims: Iterable[Transaction]) -> Dict[MonthKey, MonthlyReward]:
        """
        Build monthly summaries from claims whose confirmation is resolved.

        Grouping happens first; each month is then sorted by time before its
        weekday buckets and timing statistics are derived.
        """
        months: Dict[MonthKey, MonthlyReward] = {}

        for tx in claims:
            if tx.time is None:
                bt.logging.warning(f"Skipping {tx.hash}: no block time")
                continue
            moment = _as_utc(tx.time)
            key = MonthKey(moment.year, moment.month)
            if key not in months:
                months[key] = MonthlyReward(year=key.year, month=key.month)
            months[key].add_transaction(tx)

        for month in months.values():
            self._finalize(month)

        bt.logging.info(f"Aggregated rewards into {len(months)} months")
        return months

    def _finalize(self, month: MonthlyReward):
        """
        Sort chronologically, then fill weekday buckets and timing statistics.

        Gaps are measured between every adjacent pair of claims; weekday
        buckets only count confirmed relays.
        """
        month.transactions.sort(key=lambda tx: _as_utc(tx.time))

        total_secs = 0.0
        num_gaps = 0
        previous = None
        for tx in month.transactions:
            moment = _as_utc(tx.time)
            if previous is not None:
                total_secs += (moment - previous).total_seconds()
                num_gaps += 1
            previous = moment

            if tx.is_confirmed:
                month.days_of_week[weekday_index(moment)].relays += tx.num_relays

        month.total_secs_between_rewards = total_secs
        month.avg_secs_between_rewards = total_secs / num_gaps if num_gaps else 0.0
