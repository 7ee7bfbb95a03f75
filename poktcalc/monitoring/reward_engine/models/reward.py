"""Data model for per-transaction reward results."""

from typing import Dict, Any
from dataclasses import dataclass, field
from enum import Enum

from ...utils.fixed_point import Dec


class RewardCondition(Enum):
    """Why a reward carries the value it does."""
    COMPUTED = "computed"
    ZERO_RELAYS = "zero_relays"
    ZERO_FLOOR_MULTIPLIER = "zero_floor_multiplier"


@dataclass(frozen=True)
class Reward:
    """Gross and net POKT earned by one claim or proof."""
    pokt_amount: Dec = field(default_factory=Dec.zero)
    net_pokt_amount: Dec = field(default_factory=Dec.zero)
    stake_weight: Dec = field(default_factory=Dec.zero)
    pokt_per_relay: Dec = field(default_factory=Dec.zero)
    condition: RewardCondition = RewardCondition.COMPUTED

    @classmethod
    def zero(cls, condition: RewardCondition = RewardCondition.ZERO_RELAYS) -> 'Reward':
        """Create a zero-valued reward tagged with the reason it is zero."""
        return cls(condition=condition)

    @property
    def is_zero(self) -> bool:
        return self.pokt_amount.is_zero()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "pokt_amount": str(self.pokt_amount),
            "net_pokt_amount": str(self.net_pokt_amount),
            "stake_weight": str(self.stake_weight),
            "pokt_per_relay": str(self.pokt_per_relay),
            "condition": self.condition.value,
        }
