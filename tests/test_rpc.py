from base64 import b64encode

import httpx
import pytest

from cosmos_type_registry import TxFetchError
from cosmos_type_registry.rpc import fetch_tx_bytes

RPC_URL = "https://rpc.example.org/"
TX_BYTES = b"\x0a\x03abc"


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_tx_bytes():
    seen = []

    def handler(request):
        seen.append(request.url)
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": -1, "result": {"tx": b64encode(TX_BYTES).decode()}},
        )

    assert fetch_tx_bytes(RPC_URL, "0xabcdef", client=_client(handler)) == TX_BYTES
    assert seen[0].path == "/tx"
    assert seen[0].params["hash"] == "0xABCDEF"


def test_fetch_tx_bytes_rpc_error():
    def handler(request):
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": -1, "error": {"code": -32603, "message": "tx not found"}},
        )

    with pytest.raises(TxFetchError, match="tx not found"):
        fetch_tx_bytes(RPC_URL, "ABCDEF", client=_client(handler))


def test_fetch_tx_bytes_missing_result():
    def handler(request):
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": -1, "result": {}})

    with pytest.raises(TxFetchError, match="no result.tx"):
        fetch_tx_bytes(RPC_URL, "ABCDEF", client=_client(handler))


def test_fetch_tx_bytes_http_error():
    def handler(request):
        return httpx.Response(502)

    with pytest.raises(httpx.HTTPStatusError):
        fetch_tx_bytes(RPC_URL, "ABCDEF", client=_client(handler))


@pytest.mark.parametrize(
    "content, match",
    [
        ({"json": [1]}, "not a JSON object"),
        ({"text": "<html>Bad Gateway</html>"}, "not JSON"),
        ({"json": {"result": {"tx": "not base64!"}}}, "malformed result.tx"),
        ({"json": {"result": {"tx": 12}}}, "malformed result.tx"),
        ({"json": {"result": None}}, "no result.tx"),
    ],
)
def test_fetch_tx_bytes_unusable_body(content, match):
    def handler(request):
        return httpx.Response(200, **content)

    with pytest.raises(TxFetchError, match=match):
        fetch_tx_bytes(RPC_URL, "ABCDEF", client=_client(handler))
