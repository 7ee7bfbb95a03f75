"""Attaches block time, reward and expiry to raw transactions."""

from dataclasses import replace
from typing import Dict, Optional

from ..interfaces.provider import Provider
from ..models.params import ParameterSet
from ..models.transaction import Transaction
from .parameter_resolver import ParameterResolver
from .reward_calculator import RewardCalculator
from .provider_calls import call_provider


class TransactionEnricher:
    """Enriches transactions using height-specific parameters."""

    def __init__(
        self,
        provider: Provider,
        resolver: ParameterResolver = None,
        calculator: RewardCalculator = None
    ):
        self.provider = provider
        self.resolver = resolver or ParameterResolver(provider)
        self.calculator = calculator or RewardCalculator()

    def stake_at_height(self, address: str, height: int) -> int:
        """Staked balance of a servicer at a height, in uPOKT."""
        node = call_provider("node_at_height", self.provider.node_at_height, address, height)
        return node.staked_balance

    def enrich(
        self,
        tx: Transaction,
        params_cache: Optional[Dict[int, ParameterSet]] = None
    ) -> Transaction:
        """
        Return a copy of `tx` with time, reward, per-relay rate and expiry set.

        Args:
            tx: Raw transaction from the provider
            params_cache: Optional per-call memo of resolved parameters by height

        Raises:
            PoktCalcError: Any resolution, provider or stake lookup failure
        """
        params = self._params_for(tx.height, params_cache)
        block_time = call_provider("block_time", self.provider.block_time, tx.height)
        reward = self.calculator.compute_reward(tx, params, self.stake_at_height)

        return replace(
            tx,
            time=block_time,
            reward=reward,
            pokt_per_relay=reward.pokt_per_relay,
            expire_height=tx.height + params.claim_expiration_blocks,
        )

    def _params_for(self, height: int, params_cache: Optional[Dict[int, ParameterSet]]) -> ParameterSet:
        if params_cache is None:
            return self.resolver.resolve(height)
        if height not in params_cache:
            params_cache[height] = self.resolver.resolve(height)
        return params_cache[height]
