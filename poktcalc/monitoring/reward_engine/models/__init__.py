"""Data models for the reward calculation system."""

from .reward import Reward, RewardCondition
from .transaction import Transaction, SessionKey, TYPE_CLAIM, TYPE_PROOF
from .params import FormulaKind, Param, ParameterBatch, ParameterSet
from .node import NodeInfo
from .monthly_reward import MonthKey, DayOfWeek, MonthlyReward, DAY_NAMES

__all__ = [
    "Reward",
    "RewardCondition",
    "Transaction",
    "SessionKey",
    "TYPE_CLAIM",
    "TYPE_PROOF",
    "FormulaKind",
    "Param",
    "ParameterBatch",
    "ParameterSet",
    "NodeInfo",
    "MonthKey",
    "DayOfWeek",
    "MonthlyReward",
    "DAY_NAMES",
]
