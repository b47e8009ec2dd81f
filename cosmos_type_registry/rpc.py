from __future__ import annotations

import binascii
import logging
from base64 import b64decode
from typing import Optional

import httpx

from cosmos_type_registry.exceptions import TxFetchError

logger = logging.getLogger(__name__)


def fetch_tx_bytes(
    rpc_url: str,
    tx_hash: str,
    client: Optional[httpx.Client] = None,
    timeout: float = 60,
) -> bytes:
    """Fetch the raw bytes of a committed transaction from a CometBFT RPC node."""
    tx_hash = tx_hash.upper()
    if tx_hash.startswith("0X"):
        tx_hash = tx_hash[2:]
    url = rpc_url.rstrip("/") + "/tx"
    params = {"hash": f"0x{tx_hash}"}

    logger.debug("Fetching tx %s from %s", tx_hash, rpc_url)
    if client is None:
        resp = httpx.get(url, params=params, timeout=timeout)
    else:
        resp = client.get(url, params=params, timeout=timeout)
    resp.raise_for_status()

    try:
        body = resp.json()
    except ValueError as exc:
        raise TxFetchError(f"RPC response for tx {tx_hash} is not JSON") from exc
    if not isinstance(body, dict):
        raise TxFetchError(f"RPC response for tx {tx_hash} is not a JSON object")
    if body.get("error"):
        raise TxFetchError(f"RPC error fetching tx {tx_hash}: {body['error']}")
    try:
        encoded_tx = body["result"]["tx"]
    except (KeyError, TypeError) as exc:
        raise TxFetchError(f"RPC response for tx {tx_hash} has no result.tx") from exc
    try:
        return b64decode(encoded_tx, validate=True)
    except (binascii.Error, TypeError) as exc:
        raise TxFetchError(f"RPC response for tx {tx_hash} has malformed result.tx") from exc
