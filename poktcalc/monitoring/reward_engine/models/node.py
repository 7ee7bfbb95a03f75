"""Data model for servicer node state."""

from typing import Dict, Any, List
from dataclasses import dataclass, field


@dataclass(frozen=True)
class NodeInfo:
    """Servicer node as reported by the provider, optionally with its liquid balance."""
    address: str
    public_key: str = ""
    chains: List[str] = field(default_factory=list)
    is_jailed: bool = False
    output_address: str = ""
    service_url: str = ""
    staked_balance: int = 0
    balance: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "address": self.address,
            "public_key": self.public_key,
            "chains": list(self.chains),
            "is_jailed": self.is_jailed,
            "output_address": self.output_address,
            "service_url": self.service_url,
            "staked_balance": self.staked_balance,
            "balance": self.balance,
        }
