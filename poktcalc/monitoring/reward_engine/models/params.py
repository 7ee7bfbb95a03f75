"""Data models for protocol parameters."""

from typing import Dict, Any, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum

from ...utils.fixed_point import Dec
from ...utils.config import POKT_DENOMINATION

PARAM_GROUPS = ("app_params", "auth_params", "gov_params", "node_params", "pocket_params")


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


class FormulaKind(Enum):
    """Reward formula in force at a height."""
    LEGACY = "legacy"
    STAKE_WEIGHTED = "stake_weighted"


@dataclass(frozen=True)
class Param:
    """A single on-chain parameter entry."""
    key: str
    value: str


@dataclass(frozen=True)
class ParameterBatch:
    """Snapshot of every parameter group at a height."""
    groups: Dict[str, Tuple[Param, ...]] = field(default_factory=dict)

    def get(self, group: str, key: str) -> Optional[str]:
        """Look up a key within a group; None when the key is absent."""
        for param in self.groups.get(group, ()):
            if param.key == key:
                return param.value
        return None

    def validate(self) -> None:
        """
        Check that every parameter group is populated.

        Raises:
            ValueError: Naming the first empty group
        """
        for group in PARAM_GROUPS:
            if not self.groups.get(group):
                raise ValueError(f"{group} is empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the provider's wire shape."""
        return {
            group: [{"param_key": p.key, "param_value": p.value} for p in params]
            for group, params in self.groups.items()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ParameterBatch':
        """Create from the provider's allParams response."""
        groups = {}
        for group in PARAM_GROUPS:
            entries: List[Dict[str, Any]] = data.get(group) or []
            groups[group] = tuple(
                Param(key=entry.get("param_key", ""), value=_as_str(entry.get("param_value")))
                for entry in entries
            )
        return cls(groups=groups)


@dataclass(frozen=True)
class ParameterSet:
    """Protocol parameters resolved for a single height."""
    height: int
    formula: FormulaKind
    relays_to_tokens_multiplier: int
    dao_allocation: int
    proposer_percentage: int
    claim_expiration_blocks: int
    servicer_stake_weight_multiplier: Optional[Dec] = None
    servicer_stake_floor_multiplier: Optional[int] = None
    servicer_stake_floor_multiplier_exponent: Optional[Dec] = None
    servicer_stake_weight_ceiling: Optional[int] = None

    @property
    def is_stake_weighted(self) -> bool:
        return self.formula is FormulaKind.STAKE_WEIGHTED

    def percentage_to_keep(self) -> Dec:
        """Share of a reward left to the servicer after DAO and proposer cuts."""
        return Dec.from_int(100 - self.dao_allocation - self.proposer_percentage).quo_int(100)

    def legacy_pokt_per_relay(self) -> Dec:
        """Flat per-relay rate used before reward scaling was activated."""
        return Dec.from_int(self.relays_to_tokens_multiplier).quo_int(POKT_DENOMINATION).mul(
            self.percentage_to_keep()
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data = {
            "height": self.height,
            "formula": self.formula.value,
            "relays_to_tokens_multiplier": self.relays_to_tokens_multiplier,
            "dao_allocation": self.dao_allocation,
            "proposer_percentage": self.proposer_percentage,
            "claim_expiration_blocks": self.claim_expiration_blocks,
        }
        if self.is_stake_weighted:
            data.update({
                "servicer_stake_weight_multiplier": str(self.servicer_stake_weight_multiplier),
                "servicer_stake_floor_multiplier": self.servicer_stake_floor_multiplier,
                "servicer_stake_floor_multiplier_exponent": str(self.servicer_stake_floor_multiplier_exponent),
                "servicer_stake_weight_ceiling": self.servicer_stake_weight_ceiling,
            })
        return data
