"""Data models for servicer claim and proof transactions."""

from typing import Dict, Any, NamedTuple, Optional
from dataclasses import dataclass, field
from datetime import datetime

from ...utils.fixed_point import Dec
from .reward import Reward

TYPE_CLAIM = "pocketcore/claim"
TYPE_PROOF = "pocketcore/proof"


class SessionKey(NamedTuple):
    """Identity of a relay session shared by its claim and its proof."""
    session_height: int
    app_pubkey: str
    chain_id: str


@dataclass(frozen=True)
class Transaction:
    """A servicer transaction as decoded from the provider and enriched."""
    hash: str
    height: int
    type: str
    address: str = ""
    chain_id: str = ""
    num_relays: int = 0
    session_height: int = 0
    app_pubkey: str = ""
    result_code: int = 0
    time: Optional[datetime] = None
    expire_height: int = 0
    pokt_per_relay: Dec = field(default_factory=Dec.zero)
    is_confirmed: bool = False
    reward: Reward = field(default_factory=Reward)

    @property
    def is_claim(self) -> bool:
        return self.type == TYPE_CLAIM

    @property
    def is_proof(self) -> bool:
        return self.type == TYPE_PROOF

    @property
    def session_key(self) -> SessionKey:
        return SessionKey(self.session_height, self.app_pubkey, self.chain_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "hash": self.hash,
            "height": self.height,
            "time": self.time.isoformat() if self.time else None,
            "address": self.address,
            "type": self.type,
            "chain_id": self.chain_id,
            "num_relays": self.num_relays,
            "pokt_per_relay": str(self.pokt_per_relay),
            "session_height": self.session_height,
            "expire_height": self.expire_height,
            "app_pubkey": self.app_pubkey,
            "result_code": self.result_code,
            "is_confirmed": self.is_confirmed,
            "reward": self.reward.to_dict(),
        }
