"""Core interfaces for the reward calculation system."""

from .provider import Provider, StakeLookup

__all__ = [
    "Provider",
    "StakeLookup",
]
