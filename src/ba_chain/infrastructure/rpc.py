"""Base JSON-RPC client over httpx.

Each call is one POST of {"jsonrpc": "2.0", "id", "method", "params"}.
Transport failures, non-2xx responses and JSON-RPC error objects all raise
ChainRPCError; callers decide whether to fall back.
"""

import itertools
import logging
from typing import Any

import httpx

from src.ba_common.errors import ChainRPCError, InvalidRPCResponseError

logger = logging.getLogger("ba.chain")


def hex_to_int(value: str) -> int:
    return int(value, 16)


class BaseRPCClient:
    def __init__(
        self,
        rpc_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.rpc_url = rpc_url
        self._timeout = timeout
        self._transport = transport
        self._ids = itertools.count(1)

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        body = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.post(self.rpc_url, json=body)
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("RPC %s failed: %s", method, exc)
            raise ChainRPCError(method, str(exc)) from exc

        if payload.get("error"):
            err = payload["error"]
            logger.error("RPC %s returned error: %s", method, err)
            raise ChainRPCError(method, f"[{err.get('code')}] {err.get('message')}")
        return payload.get("result")

    async def client_version(self) -> str:
        return str(await self.call("web3_clientVersion") or "unknown")

    async def get_balance(self, address: str) -> int:
        """Balance in wei at the latest block."""
        result = await self.call("eth_getBalance", [address, "latest"])
        if not result:
            raise InvalidRPCResponseError("eth_getBalance")
        return hex_to_int(result)

    async def gas_price(self) -> int:
        result = await self.call("eth_gasPrice")
        if not result:
            raise InvalidRPCResponseError("eth_gasPrice")
        return hex_to_int(result)

    async def estimate_gas(self, to: str, data: str, from_address: str) -> int:
        result = await self.call(
            "eth_estimateGas", [{"from": from_address, "to": to, "data": data}]
        )
        if not result:
            raise InvalidRPCResponseError("eth_estimateGas")
        return hex_to_int(result)

    async def get_transaction_receipt(self, tx_hash: str) -> dict[str, Any] | None:
        """Receipt dict, or None while the transaction is not yet mined."""
        result = await self.call("eth_getTransactionReceipt", [tx_hash])
        return result or None
