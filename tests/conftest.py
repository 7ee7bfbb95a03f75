"""
Global pytest configuration and fixtures.

Provides a scripted in-memory Provider so services can be exercised without
a Pocket node, and disables retry delays and noisy logging.
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import patch

from poktcalc.monitoring.reward_engine.interfaces import Provider
from poktcalc.monitoring.reward_engine.models import (
    NodeInfo, Param, ParameterBatch, Transaction, TYPE_CLAIM
)

SERVICER = "a1b2c3d4e5f60718293a4b5c6d7e8f9012345678"

BASE_NODE_PARAMS = {
    "pos/RelaysToTokensMultiplier": "8461",
    "pos/DAOAllocation": "10",
    "pos/ProposerPercentage": "5",
    "pos/ServicerStakeWeightMultiplier": "1",
    "pos/ServicerStakeFloorMultiplier": "15000000000",
    "pos/ServicerStakeFloorMultiplierExponent": "1",
    "pos/ServicerStakeWeightCeiling": "60000000000",
}

BASE_POCKET_PARAMS = {
    "pocketcore/ClaimExpiration": "24",
}


def build_batch(node_params=None, pocket_params=None, omit=()):
    """ParameterBatch with every group populated and optional overrides."""
    node = dict(BASE_NODE_PARAMS, **(node_params or {}))
    pocket = dict(BASE_POCKET_PARAMS, **(pocket_params or {}))
    groups = {
        "app_params": (Param("application/MaxApplications", "18446744073709551615"),),
        "auth_params": (Param("auth/MaxMemoCharacters", "75"),),
        "gov_params": (Param("gov/upgrade", "0"),),
        "node_params": tuple(Param(k, v) for k, v in node.items() if k not in omit),
        "pocket_params": tuple(Param(k, v) for k, v in pocket.items() if k not in omit),
    }
    return ParameterBatch(groups=groups)


class FakeProvider(Provider):
    """In-memory provider; every call is recorded in `calls`."""

    def __init__(self):
        self.latest_height = 0
        self.times = {}
        self.default_time = datetime(2022, 3, 1, tzinfo=timezone.utc)
        self.pages = {}
        self.txs = {}
        self.nodes = {}
        self.stakes = {}
        self.default_stake = 30000000000
        self.balances = {}
        self.batches = {}
        self.default_batch = build_batch()
        self.individual_params = {}
        self.relay_responses = {}
        self.failures = {}
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.failures:
            raise self.failures[name]

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)

    def height(self):
        self._record("height")
        return self.latest_height

    def block_time(self, height):
        self._record("block_time", height)
        return self.times.get(height, self.default_time)

    def account_transactions(self, address, page, per_page, sort):
        self._record("account_transactions", address, page, per_page, sort)
        return list(self.pages.get(page, []))

    def transaction(self, tx_hash):
        self._record("transaction", tx_hash)
        return self.txs[tx_hash]

    def node(self, address):
        self._record("node", address)
        return self.nodes[address]

    def node_at_height(self, address, height):
        self._record("node_at_height", address, height)
        stake = self.stakes.get((address, height), self.default_stake)
        return NodeInfo(address=address, staked_balance=stake)

    def balance(self, address):
        self._record("balance", address)
        return self.balances.get(address, 0)

    def param(self, key, height):
        self._record("param", key, height)
        return self.individual_params.get(key, "")

    def all_params(self, height, force_refresh=False):
        self._record("all_params", height, force_refresh)
        return self.batches.get(height, self.default_batch)

    def simulate_relay(self, servicer_url, chain_id, payload):
        self._record("simulate_relay", servicer_url, chain_id, payload)
        return self.relay_responses.get(chain_id, {})


def make_tx(
    tx_hash="tx",
    height=70000,
    tx_type=TYPE_CLAIM,
    num_relays=100,
    session_height=69997,
    app_pubkey="app",
    chain_id="0021",
    result_code=0,
    address=SERVICER,
    **kwargs
):
    """Transaction with sensible claim defaults."""
    return Transaction(
        hash=tx_hash,
        height=height,
        type=tx_type,
        address=address,
        chain_id=chain_id,
        num_relays=num_relays,
        session_height=session_height,
        app_pubkey=app_pubkey,
        result_code=result_code,
        **kwargs
    )


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def fake_provider():
    """Scripted in-memory provider."""
    return FakeProvider()


@pytest.fixture
def batch_factory():
    """Builder for parameter batches with overrides."""
    return build_batch


@pytest.fixture
def tx_factory():
    """Builder for transactions with claim defaults."""
    return make_tx


@pytest.fixture
def servicer_address():
    return SERVICER


@pytest.fixture
def utc_time():
    return utc


@pytest.fixture(autouse=True)
def disable_delays():
    """
    Auto-use fixture that disables sleep calls during testing so retry
    backoff does not slow the suite down.
    """
    with patch('time.sleep') as mock_sleep:
        mock_sleep.return_value = None
        yield


# Performance optimization: disable logging during tests unless explicitly enabled
@pytest.fixture(autouse=True)
def fast_logging():
    """
    Reduce logging verbosity during tests for better performance.
    """
    import logging
    import bittensor as bt

    logging.getLogger().setLevel(logging.WARNING)
    bt.logging.set_debug(False)

    yield

    logging.getLogger().setLevel(logging.INFO)
