"""
Disk-backed caching around any Provider.

Block times and historical node state never change once written, so they are
kept indefinitely. Parameter batches expire and can be bypassed with
force_refresh; incomplete batches are never stored.
"""

import os
from datetime import datetime
from threading import RLock
from typing import Any, Dict, List, Optional

import bittensor as bt
from diskcache import Cache

from ..reward_engine.interfaces import Provider
from ..reward_engine.models import NodeInfo, ParameterBatch, Transaction
from ..utils.config import CACHE_DIRS, DISABLE_PROVIDER_CACHING, PARAMS_CACHE_EXPIRY


class CachedProvider(Provider):
    """Wraps a provider and caches immutable or slow-changing reads."""

    _lock = RLock()

    def __init__(
        self,
        provider: Provider,
        block_cache_dir: str = CACHE_DIRS["block_times"],
        params_cache_dir: str = CACHE_DIRS["params"],
        params_expiry: int = PARAMS_CACHE_EXPIRY,
        enabled: bool = not DISABLE_PROVIDER_CACHING
    ):
        self.provider = provider
        self.params_expiry = params_expiry
        self.enabled = enabled
        self._block_cache: Optional[Cache] = None
        self._params_cache: Optional[Cache] = None
        if enabled:
            self._block_cache = self._open(block_cache_dir)
            self._params_cache = self._open(params_cache_dir)

    @staticmethod
    def _open(directory: str) -> Cache:
        os.makedirs(directory, exist_ok=True)
        return Cache(
            directory=directory,
            size_limit=1e8,  # 100MB
            disk_min_file_size=0,
            disk_pickle_protocol=4,
        )

    def close(self):
        """Close the underlying caches."""
        with self._lock:
            for cache in (self._block_cache, self._params_cache):
                if cache is not None:
                    cache.close()
            self._block_cache = None
            self._params_cache = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _get(self, cache: Optional[Cache], key: str) -> Any:
        if cache is None:
            return None
        try:
            with self._lock:
                return cache.get(key)
        except Exception as e:
            bt.logging.warning(f"Cache get error for key '{key}': {e}")
            return None

    def _set(self, cache: Optional[Cache], key: str, value: Any, expire: Optional[int] = None):
        if cache is None:
            return
        try:
            with self._lock:
                cache.set(key, value, expire=expire)
        except Exception as e:
            bt.logging.warning(f"Cache set error for key '{key}': {e}")

    # cached reads

    def block_time(self, height: int) -> datetime:
        key = f"block_time_{height}"
        cached = self._get(self._block_cache, key)
        if cached is not None:
            return cached
        moment = self.provider.block_time(height)
        self._set(self._block_cache, key, moment)
        return moment

    def node_at_height(self, address: str, height: int) -> NodeInfo:
        key = f"node_{address}_{height}"
        cached = self._get(self._block_cache, key)
        if cached is not None:
            return cached
        node = self.provider.node_at_height(address, height)
        self._set(self._block_cache, key, node)
        return node

    def all_params(self, height: int, force_refresh: bool = False) -> ParameterBatch:
        key = f"all_params_{height}"
        if not force_refresh:
            cached = self._get(self._params_cache, key)
            if cached is not None:
                return cached

        batch = self.provider.all_params(height, force_refresh)
        try:
            batch.validate()
        except ValueError as e:
            bt.logging.warning(f"Not caching parameter batch at height {height}: {e}")
            return batch

        self._set(self._params_cache, key, batch, expire=self.params_expiry)
        return batch

    # pass-through reads

    def height(self) -> int:
        return self.provider.height()

    def account_transactions(self, address: str, page: int, per_page: int, sort: str) -> List[Transaction]:
        return self.provider.account_transactions(address, page, per_page, sort)

    def transaction(self, tx_hash: str) -> Transaction:
        return self.provider.transaction(tx_hash)

    def node(self, address: str) -> NodeInfo:
        return self.provider.node(address)

    def balance(self, address: str) -> int:
        return self.provider.balance(address)

    def param(self, key: str, height: int) -> str:
        return self.provider.param(key, height)

    def simulate_relay(self, servicer_url: str, chain_id: str, payload: Dict[str, Any]) -> Any:
        return self.provider.simulate_relay(servicer_url, chain_id, payload)
