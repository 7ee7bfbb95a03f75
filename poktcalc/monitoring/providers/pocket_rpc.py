"""Provider backed by a Pocket node's v1 HTTP RPC."""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

import bittensor as bt
import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..reward_engine.interfaces import Provider
from ..reward_engine.models import NodeInfo, ParameterBatch, Transaction
from ..utils.config import POCKET_RPC_URL, RPC_MAX_RETRY, RPC_TIMEOUT
from .responses import decode_block_time, decode_node, decode_transaction

RPC_RETRY_CONFIG = {
    "stop": stop_after_attempt(RPC_MAX_RETRY),
    "wait": wait_exponential(multiplier=1, min=1, max=10),
    "retry": retry_if_exception_type((requests.exceptions.ConnectionError, requests.exceptions.Timeout)),
    "reraise": True,
}


class PocketRpcProvider(Provider):
    """
    Reads chain state from a Pocket node.

    Transport errors are retried with exponential backoff; HTTP and decoding
    errors are raised to the caller as-is.
    """

    def __init__(
        self,
        rpc_url: str = POCKET_RPC_URL,
        timeout: int = RPC_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        self.rpc_url = rpc_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @retry(**RPC_RETRY_CONFIG)
    def _post(self, url: str, payload: Dict[str, Any]) -> Any:
        """POST a JSON payload and return the decoded JSON body."""
        try:
            response = self.session.post(url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            bt.logging.warning(f"Pocket RPC {url} error: {e}")
            raise

    def _query(self, route: str, payload: Dict[str, Any]) -> Any:
        return self._post(f"{self.rpc_url}/v1/query/{route}", payload)

    def height(self) -> int:
        return int(self._query("height", {})["height"])

    def block_time(self, height: int) -> datetime:
        return decode_block_time(self._query("block", {"height": height}))

    def account_transactions(self, address: str, page: int, per_page: int, sort: str) -> List[Transaction]:
        data = self._query("accounttxs", {
            "address": address,
            "page": page,
            "per_page": per_page,
            "received": False,
            "prove": False,
            "order": sort,
        })
        return [decode_transaction(tx, address) for tx in (data.get("txs") or [])]

    def transaction(self, tx_hash: str) -> Transaction:
        return decode_transaction(self._query("tx", {"hash": tx_hash}))

    def node(self, address: str) -> NodeInfo:
        return decode_node(self._query("node", {"address": address}))

    def node_at_height(self, address: str, height: int) -> NodeInfo:
        return decode_node(self._query("node", {"address": address, "height": height}))

    def balance(self, address: str) -> int:
        return int(self._query("balance", {"address": address})["balance"])

    def param(self, key: str, height: int) -> str:
        data = self._query("param", {"key": key, "height": height}) or {}
        value = data.get("param_value")
        return "" if value is None else str(value)

    def all_params(self, height: int, force_refresh: bool = False) -> ParameterBatch:
        # the node always answers live; force_refresh only matters to caches
        return ParameterBatch.from_dict(self._query("allparams", {"height": height}) or {})

    def simulate_relay(self, servicer_url: str, chain_id: str, payload: Dict[str, Any]) -> Any:
        """
        Send a relay through a servicer's simulation route.

        The servicer must run with relay simulation enabled; the payload is
        forwarded to the chain as a JSON-encoded POST body.
        """
        body = {
            "relay_network_id": chain_id,
            "payload": {
                "data": json.dumps(payload),
                "method": "POST",
                "path": "",
                "headers": {"Content-Type": "application/json"},
            },
        }
        return self._post(f"{servicer_url.rstrip('/')}/v1/client/sim", body)
