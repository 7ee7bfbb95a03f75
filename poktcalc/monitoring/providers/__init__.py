"""Concrete chain data providers."""

from .pocket_rpc import PocketRpcProvider
from .cached_provider import CachedProvider

__all__ = [
    "PocketRpcProvider",
    "CachedProvider",
]
