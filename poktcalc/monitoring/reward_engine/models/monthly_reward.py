"""Data models for monthly reward summaries."""

from typing import Dict, Any, List, NamedTuple
from dataclasses import dataclass, field

from ...utils.fixed_point import Dec
from .transaction import Transaction

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class MonthKey(NamedTuple):
    """Calendar month a reward falls in."""
    year: int
    month: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


@dataclass
class DayOfWeek:
    """Confirmed relays for one weekday of a month."""
    name: str
    relays: int = 0


def _empty_days_of_week() -> Dict[int, DayOfWeek]:
    return {index: DayOfWeek(name=name) for index, name in enumerate(DAY_NAMES)}


@dataclass
class MonthlyReward:
    """Rewards earned by a servicer within one calendar month."""
    year: int
    month: int
    total_relays: int = 0
    transactions: List[Transaction] = field(default_factory=list)
    days_of_week: Dict[int, DayOfWeek] = field(default_factory=_empty_days_of_week)
    avg_secs_between_rewards: float = 0.0
    total_secs_between_rewards: float = 0.0

    @property
    def key(self) -> MonthKey:
        return MonthKey(self.year, self.month)

    @property
    def confirmed_transactions(self) -> List[Transaction]:
        return [tx for tx in self.transactions if tx.is_confirmed]

    def add_transaction(self, tx: Transaction):
        """Add a transaction, counting its relays only when confirmed."""
        if tx.is_confirmed:
            self.total_relays += tx.num_relays
        self.transactions.append(tx)

    def pokt_amount(self) -> Dec:
        """Gross POKT earned by confirmed transactions."""
        total = Dec.zero()
        for tx in self.confirmed_transactions:
            total = total.add(tx.reward.pokt_amount)
        return total

    def net_pokt_amount(self) -> Dec:
        """Net POKT earned by confirmed transactions."""
        total = Dec.zero()
        for tx in self.confirmed_transactions:
            total = total.add(tx.reward.net_pokt_amount)
        return total

    def relays_by_chain(self) -> Dict[str, int]:
        """
        Confirmed relays per chain id.

        Unconfirmed claims are left out so the per-chain figures add up to
        `total_relays`.
        """
        by_chain: Dict[str, int] = {}
        for tx in self.confirmed_transactions:
            by_chain[tx.chain_id] = by_chain.get(tx.chain_id, 0) + tx.num_relays
        return by_chain

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the monthly rewards record."""
        return {
            "year": self.year,
            "month": self.month,
            "num_relays": self.total_relays,
            "pokt_amount": str(self.pokt_amount()),
            "net_pokt_amount": str(self.net_pokt_amount()),
            "avg_secs_between_rewards": self.avg_secs_between_rewards,
            "total_secs_between_rewards": self.total_secs_between_rewards,
            "days_of_week": [
                {"day": index, "name": day.name, "num_relays": day.relays}
                for index, day in sorted(self.days_of_week.items())
            ],
            "relays_by_chain": [
                {"chain": chain_id, "num_relays": relays}
                for chain_id, relays in sorted(self.relays_by_chain().items())
            ],
            "transactions": [tx.to_dict() for tx in self.transactions],
        }
