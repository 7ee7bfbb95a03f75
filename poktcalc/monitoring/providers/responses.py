"""
Decoding of Pocket RPC JSON responses into domain records.

Claims carry their session identity in the message header while proofs carry
it in the merkle leaf, so the two are decoded from different paths.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict

from ..reward_engine.exceptions import TransactionDecodeError
from ..reward_engine.models import NodeInfo, Transaction, TYPE_CLAIM, TYPE_PROOF

_FRACTION = re.compile(r"\.(\d+)")


def _as_int(field: str, value: Any, default: int = 0) -> int:
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise TransactionDecodeError(field, value, "not an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise TransactionDecodeError(field, value, "not an integer") from e


def parse_block_time(value: str) -> datetime:
    """
    Parse an RFC3339 block timestamp into an aware UTC datetime.

    Tendermint reports nanoseconds; anything past microseconds is dropped.
    """
    if not isinstance(value, str) or not value:
        raise TransactionDecodeError("time", value, "missing timestamp")
    text = value.strip().replace("Z", "+00:00")
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        moment = datetime.fromisoformat(text)
    except ValueError as e:
        raise TransactionDecodeError("time", value, str(e)) from e
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def decode_block_time(data: Dict[str, Any]) -> datetime:
    """Extract the header time from a block response."""
    header = (data.get("block") or {}).get("header") or {}
    return parse_block_time(header.get("time"))


def decode_transaction(data: Dict[str, Any], address: str = "") -> Transaction:
    """
    Decode a single transaction response.

    Args:
        data: Transaction JSON as returned by the RPC
        address: Account the transaction was fetched for, used when the
            message itself does not name a sender
    """
    message = (data.get("stdTx") or {}).get("msg") or {}
    value = message.get("value") or {}
    header = value.get("header") or {}
    tx_type = message.get("type", "")

    session_height = 0
    app_pubkey = ""
    chain_id = header.get("chain", "")

    if tx_type == TYPE_PROOF:
        leaf = (value.get("leaf") or {}).get("value") or {}
        session_height = _as_int("session_block_height", leaf.get("session_block_height"))
        app_pubkey = (leaf.get("aat") or {}).get("app_pub_key", "")
        chain_id = leaf.get("blockchain", "")
    elif tx_type == TYPE_CLAIM:
        session_height = _as_int("session_height", header.get("session_height"))
        app_pubkey = header.get("app_public_key", "")

    return Transaction(
        hash=data.get("hash", ""),
        height=_as_int("height", data.get("height")),
        type=tx_type,
        address=value.get("from_address") or address,
        chain_id=chain_id,
        num_relays=_as_int("total_proofs", value.get("total_proofs")),
        session_height=session_height,
        app_pubkey=app_pubkey,
        result_code=_as_int("code", (data.get("tx_result") or {}).get("code")),
    )


def decode_node(data: Dict[str, Any]) -> NodeInfo:
    """Decode a node query response."""
    return NodeInfo(
        address=data.get("address", ""),
        public_key=data.get("public_key", ""),
        chains=list(data.get("chains") or []),
        is_jailed=bool(data.get("jailed", False)),
        output_address=data.get("output_address", ""),
        service_url=data.get("service_url", ""),
        staked_balance=_as_int("tokens", data.get("tokens")),
    )
