"""Abstract interface for chain data providers."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, List

from ..models.node import NodeInfo
from ..models.params import ParameterBatch
from ..models.transaction import Transaction

# (address, height) -> staked balance in uPOKT
StakeLookup = Callable[[str, int], int]


class Provider(ABC):
    """Abstract interface for reading Pocket chain state."""

    @abstractmethod
    def height(self) -> int:
        """Return the latest block height."""
        pass

    @abstractmethod
    def block_time(self, height: int) -> datetime:
        """Return the timestamp of the block at a height."""
        pass

    @abstractmethod
    def account_transactions(
        self,
        address: str,
        page: int,
        per_page: int,
        sort: str
    ) -> List[Transaction]:
        """Return one page of an account's transactions."""
        pass

    @abstractmethod
    def transaction(self, tx_hash: str) -> Transaction:
        """Return a single transaction by hash."""
        pass

    @abstractmethod
    def node(self, address: str) -> NodeInfo:
        """Return the current state of a servicer node."""
        pass

    @abstractmethod
    def node_at_height(self, address: str, height: int) -> NodeInfo:
        """Return the state of a servicer node at a height."""
        pass

    @abstractmethod
    def balance(self, address: str) -> int:
        """Return an account's liquid balance in uPOKT."""
        pass

    @abstractmethod
    def param(self, key: str, height: int) -> str:
        """Return a single parameter value at a height, or an empty string."""
        pass

    @abstractmethod
    def all_params(self, height: int, force_refresh: bool = False) -> ParameterBatch:
        """Return every parameter group at a height."""
        pass

    @abstractmethod
    def simulate_relay(self, servicer_url: str, chain_id: str, payload: Dict[str, Any]) -> Any:
        """Send a relay payload straight to a servicer and return its decoded reply."""
        pass
