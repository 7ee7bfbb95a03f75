"""Core services for the reward calculation system."""

from .parameter_resolver import ParameterResolver
from .reward_calculator import RewardCalculator
from .transaction_pager import TransactionPager
from .session_matcher import SessionMatcher
from .transaction_enricher import TransactionEnricher
from .monthly_aggregator import MonthlyAggregator

__all__ = [
    "ParameterResolver",
    "RewardCalculator",
    "TransactionPager",
    "SessionMatcher",
    "TransactionEnricher",
    "MonthlyAggregator",
]
