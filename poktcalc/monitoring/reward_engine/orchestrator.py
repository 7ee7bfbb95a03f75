"""Entry point tying parameter resolution, rewards, paging and aggregation together."""

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Tuple
import bittensor as bt

from .interfaces.provider import Provider
from .models.monthly_reward import MonthKey, MonthlyReward
from .models.node import NodeInfo
from .models.params import ParameterSet
from .models.reward import Reward
from .models.transaction import SessionKey, Transaction
from .exceptions import PoktCalcError
from .services.parameter_resolver import ParameterResolver
from .services.reward_calculator import RewardCalculator
from .services.transaction_pager import TransactionPager
from .services.session_matcher import SessionMatcher
from .services.transaction_enricher import TransactionEnricher
from .services.monthly_aggregator import MonthlyAggregator
from .services.provider_calls import call_provider
from ..utils.config import ACCOUNT_TXS_PAGE_SIZE, HISTORY_PAGE_SIZE, HISTORY_SORT


class MonitoringService:
    """Coordinates the reward calculation workflow for a servicer."""

    def __init__(
        self,
        provider: Provider,
        resolver: ParameterResolver = None,
        calculator: RewardCalculator = None,
        pager: TransactionPager = None,
        matcher: SessionMatcher = None,
        aggregator: MonthlyAggregator = None,
        enricher: TransactionEnricher = None,
        listing_page_size: int = ACCOUNT_TXS_PAGE_SIZE,
        history_page_size: int = HISTORY_PAGE_SIZE
    ):
        self.provider = provider
        self.resolver = resolver or ParameterResolver(provider)
        self.calculator = calculator or RewardCalculator()
        self.pager = pager or TransactionPager(provider)
        self.matcher = matcher or SessionMatcher()
        self.aggregator = aggregator or MonthlyAggregator()
        self.enricher = enricher or TransactionEnricher(provider, self.resolver, self.calculator)
        self.listing_page_size = listing_page_size
        self.history_page_size = history_page_size

    def height(self) -> int:
        """Latest block height."""
        return call_provider("height", self.provider.height)

    def params_at_height(self, height: int, force_refresh: bool = False) -> ParameterSet:
        """Protocol parameters in force at a height."""
        return self.resolver.resolve(height, force_refresh)

    def tx_reward(self, tx: Transaction) -> Reward:
        """Reward for a single transaction at its own height."""
        params = self.resolver.resolve(tx.height)
        return self.calculator.compute_reward(tx, params, self.enricher.stake_at_height)

    def transaction(self, tx_hash: str) -> Transaction:
        """Fetch one transaction with its block time and reward."""
        tx = call_provider("transaction", self.provider.transaction, tx_hash)
        return self.enricher.enrich(tx)

    def block_times(self, heights: Iterable[int]) -> Dict[int, datetime]:
        """Timestamp of every requested height; any failure aborts the lookup."""
        times: Dict[int, datetime] = {}
        for height in heights:
            if height not in times:
                times[height] = call_provider("block_times", self.provider.block_time, height)
        return times

    def node(self, address: str) -> NodeInfo:
        """Current node state including its liquid balance."""
        node = call_provider("node", self.provider.node, address)
        balance = call_provider("node", self.provider.balance, address)
        return replace(node, balance=balance)

    def simulate_relay(self, servicer_url: str, chain_id: str, payload: Dict[str, Any]) -> Any:
        """Relay a payload through a servicer and return the chain's reply."""
        return call_provider(
            "simulate_relay", self.provider.simulate_relay, servicer_url, chain_id, payload
        )

    def account_transactions(
        self,
        address: str,
        page: int,
        per_page: int,
        sort: str,
        transaction_type: str = ""
    ) -> List[Transaction]:
        """
        List up to `per_page` enriched transactions for an account.

        Any failure while fetching or enriching aborts the whole listing.
        """
        params_cache: Dict[int, ParameterSet] = {}
        transactions = []
        for tx in self.pager.iter_matching(
            address, page, self.listing_page_size, sort, per_page, transaction_type
        ):
            transactions.append(self.enricher.enrich(tx, params_cache))

        bt.logging.debug(f"Listed {len(transactions)} transactions for {address}")
        return transactions

    def account_claims_and_proofs(
        self,
        address: str
    ) -> Tuple[Dict[SessionKey, Transaction], Dict[SessionKey, Transaction]]:
        """
        Walk an account's complete history and return its enriched claims and proofs.

        Transactions that fail enrichment are logged and left out so a single
        bad record cannot sink the whole history.
        """
        params_cache: Dict[int, ParameterSet] = {}
        enriched: List[Transaction] = []
        skipped = 0

        for txs in self.pager.iter_pages(address, 1, self.history_page_size, HISTORY_SORT):
            for tx in txs:
                if not (tx.is_claim or tx.is_proof):
                    continue
                try:
                    enriched.append(self.enricher.enrich(tx, params_cache))
                except PoktCalcError as e:
                    skipped += 1
                    bt.logging.warning(f"Skipping transaction {tx.hash} at height {tx.height}: {e}")

        if skipped:
            bt.logging.info(f"Skipped {skipped} transactions for {address} during history walk")

        return self.matcher.classify(enriched)

    def rewards_by_month(self, address: str) -> Dict[MonthKey, MonthlyReward]:
        """Monthly reward summaries built from an account's full history."""
        claims, proofs = self.account_claims_and_proofs(address)
        confirmed = self.matcher.confirm(claims, proofs)
        return self.aggregator.aggregate(confirmed.values())
