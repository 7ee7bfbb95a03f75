"""
Presentation records for the monitoring service.

Each function calls the service and shapes its result into plain
JSON-serializable dicts for whatever front end serves them.
"""

from typing import Any, Dict, Iterable, List, Optional

import bittensor as bt

from .reward_engine import MonitoringService

CHAIN_NAMES = {
    "0001": "Pocket Network",
    "0003": "Avalanche",
    "0004": "Binance Smart Chain",
    "0005": "Fuse",
    "0009": "Polygon",
    "000C": "Gnosis Chain - Archival",
    "0021": "Ethereum",
    "0022": "Ethereum - Archival",
    "0027": "Gnosis Chain",
    "0040": "Harmony Shard 0",
    "0047": "OKExChain",
    "0049": "Fantom",
}

DEFAULT_RELAY_PAYLOAD = {"jsonrpc": "2.0", "method": "eth_blockNumber", "params": [], "id": 1}


def chain_name(chain_id: str) -> str:
    """Human-readable chain name; unknown ids are returned unchanged."""
    return CHAIN_NAMES.get(chain_id, chain_id)


def height(service: MonitoringService) -> Dict[str, Any]:
    return {"height": service.height()}


def transaction(service: MonitoringService, tx_hash: str) -> Dict[str, Any]:
    return service.transaction(tx_hash).to_dict()


def account_transactions(
    service: MonitoringService,
    address: str,
    page: int = 1,
    per_page: int = 50,
    sort: str = "desc",
    transaction_type: str = ""
) -> List[Dict[str, Any]]:
    txs = service.account_transactions(address, page, per_page, sort, transaction_type)
    return [tx.to_dict() for tx in txs]


def block_times(service: MonitoringService, heights: Iterable[int]) -> Dict[int, str]:
    times = service.block_times(heights)
    return {h: moment.isoformat() for h, moment in times.items()}


def node(service: MonitoringService, address: str) -> Dict[str, Any]:
    return service.node(address).to_dict()


def monthly_rewards(service: MonitoringService, address: str) -> List[Dict[str, Any]]:
    """
    Monthly reward summaries for a servicer, newest month first.

    Each record carries the month's confirmed totals, weekday buckets and
    timing statistics. `relays_by_chain` breaks down confirmed relays only, so
    it always sums to `num_relays`; unconfirmed claims appear under
    `transactions` but in no relay total.
    """
    months = service.rewards_by_month(address)

    records = []
    for key in sorted(months, reverse=True):
        record = months[key].to_dict()
        for entry in record["relays_by_chain"]:
            entry["name"] = chain_name(entry["chain"])
        records.append(record)

    bt.logging.debug(f"Built {len(records)} monthly reward records for {address}")
    return records


def simulate_relay(
    service: MonitoringService,
    servicer_url: str,
    chain_id: str,
    payload: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Relay a payload through a servicer and return the chain's reply.

    Without a payload an `eth_blockNumber` call is sent, which any EVM chain
    answers.
    """
    response = service.simulate_relay(servicer_url, chain_id, payload or dict(DEFAULT_RELAY_PAYLOAD))
    return {
        "servicer_url": servicer_url,
        "chain": chain_id,
        "name": chain_name(chain_id),
        "response": response,
    }
