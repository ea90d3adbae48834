"""Unit tests for the Base RPC client, gas math and the chain service."""

import json

import httpx
import pytest

from src.ba_chain.application.service import ChainApplicationService
from src.ba_chain.domain import explorer
from src.ba_chain.domain.gas import (
    FALLBACK_GAS_PRICE_WEI,
    TRANSFER_GAS_LIMIT,
    calculate_fee_breakdown,
    fallback_transfer_estimate,
)
from src.ba_chain.infrastructure.rpc import BaseRPCClient
from src.ba_common.errors import ChainRPCError, InvalidAddressError, InvalidRPCResponseError

_ADDR = "0x" + "ab" * 20


def _rpc(results: dict[str, object], calls: list[str] | None = None) -> BaseRPCClient:
    """RPC client whose transport answers each method from results.

    A value that is a list is consumed one item per call.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method = body["method"]
        if calls is not None:
            calls.append(method)
        result = results[method]
        if isinstance(result, list):
            result = result.pop(0)
        if isinstance(result, dict) and "error" in result:
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], **result})
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return BaseRPCClient("https://rpc.test", transport=httpx.MockTransport(handler))


def _failing_rpc() -> BaseRPCClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="unavailable")

    return BaseRPCClient("https://rpc.test", transport=httpx.MockTransport(handler))


def _service(rpc: BaseRPCClient, max_polls: int = 3) -> tuple[ChainApplicationService, list[float]]:
    sleeps: list[float] = []

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)

    service = ChainApplicationService(
        rpc, "https://basescan.org", max_polls=max_polls, poll_interval=0.5, sleep=fake_sleep
    )
    return service, sleeps


class TestRpcClient:
    @pytest.mark.asyncio
    async def test_balance_hex_decoded(self) -> None:
        rpc = _rpc({"eth_getBalance": hex(10**18)})
        assert await rpc.get_balance(_ADDR) == 10**18

    @pytest.mark.asyncio
    async def test_empty_balance_is_invalid_response(self) -> None:
        rpc = _rpc({"eth_getBalance": None})
        with pytest.raises(InvalidRPCResponseError):
            await rpc.get_balance(_ADDR)

    @pytest.mark.asyncio
    async def test_rpc_error_object_raises(self) -> None:
        rpc = _rpc({"eth_gasPrice": {"error": {"code": -32000, "message": "boom"}}})
        with pytest.raises(ChainRPCError, match="boom"):
            await rpc.gas_price()

    @pytest.mark.asyncio
    async def test_http_failure_raises(self) -> None:
        with pytest.raises(ChainRPCError):
            await _failing_rpc().client_version()


class TestGasMath:
    def test_fallback_transfer_cost(self) -> None:
        est = fallback_transfer_estimate()
        assert est.is_fallback
        assert est.gas_price_gwei == pytest.approx(0.1)
        assert est.cost_eth == pytest.approx(0.0000021)

    def test_fee_breakdown(self) -> None:
        fb = calculate_fee_breakdown(1.0, 0.001, royalty_percentage=10)
        assert fb.platform_fee == pytest.approx(0.025)
        assert fb.royalty_fee == pytest.approx(0.1)
        assert fb.total_cost == pytest.approx(1.126)
        assert fb.is_cheap_gas
        assert fb.savings == pytest.approx(0.0008)

    def test_zero_gas_has_no_savings(self) -> None:
        assert calculate_fee_breakdown(1.0, 0.0).savings == 0.0


class TestExplorer:
    def test_links(self) -> None:
        base = "https://basescan.org/"
        assert explorer.transaction_link(base, "0xdead").url == "https://basescan.org/tx/0xdead"
        assert explorer.address_link(base, _ADDR).label == "0xabab...abab"
        assert explorer.contract_link(base, _ADDR).url.endswith(f"/address/{_ADDR}")
        assert explorer.token_link(base, _ADDR, "ART").label == "ART"
        assert explorer.block_link(base, 12).url == "https://basescan.org/block/12"

    def test_unknown_resource(self) -> None:
        with pytest.raises(ValueError):
            explorer.explorer_url("https://basescan.org", "wallet", "x")


class TestChainService:
    @pytest.mark.asyncio
    async def test_account_balance_formatted(self) -> None:
        service, _ = _service(_rpc({"eth_getBalance": hex(1_234_560_000_000_000_000)}))
        out = await service.account_balance(_ADDR.upper().replace("0X", "0x"))
        assert out.balance == "1.2346"
        assert out.balance_wei == "1234560000000000000"
        assert out.explorer_url == f"https://basescan.org/address/{_ADDR}"

    @pytest.mark.asyncio
    async def test_account_balance_rejects_bad_address(self) -> None:
        service, _ = _service(_rpc({}))
        with pytest.raises(InvalidAddressError):
            await service.account_balance("0x12")

    @pytest.mark.asyncio
    async def test_current_gas_from_rpc(self) -> None:
        service, _ = _service(_rpc({"eth_gasPrice": hex(2_000_000_000)}))
        est = await service.current_gas()
        assert not est.is_fallback
        assert est.gas_limit == TRANSFER_GAS_LIMIT
        assert est.gas_price_wei == 2_000_000_000

    @pytest.mark.asyncio
    async def test_current_gas_falls_back_when_rpc_down(self) -> None:
        service, _ = _service(_failing_rpc())
        est = await service.current_gas()
        assert est.is_fallback
        assert est.gas_price_wei == FALLBACK_GAS_PRICE_WEI

    @pytest.mark.asyncio
    async def test_estimate_transaction(self) -> None:
        service, _ = _service(_rpc({"eth_estimateGas": hex(50_000), "eth_gasPrice": hex(10**8)}))
        est = await service.estimate_transaction(_ADDR, "0x")
        assert est.gas_limit == 50_000
        assert not est.is_fallback

    @pytest.mark.asyncio
    async def test_fee_breakdown_with_fallback_gas(self) -> None:
        service, _ = _service(_failing_rpc())
        out = await service.fee_breakdown(1.0, 5)
        assert out.gas.is_fallback
        assert out.estimated_gas_cost == pytest.approx(0.0000021)
        assert out.royalty_fee == pytest.approx(0.05)

    @pytest.mark.asyncio
    async def test_tx_status_single_lookup_pending(self) -> None:
        service, sleeps = _service(_rpc({"eth_getTransactionReceipt": None}))
        out = await service.transaction_status("0xdead", wait=False)
        assert out.status == "pending"
        assert out.polls == 1
        assert sleeps == []

    @pytest.mark.asyncio
    async def test_tx_status_waits_until_mined(self) -> None:
        receipt = {"status": "0x1", "blockNumber": "0x10", "gasUsed": "0x5208"}
        service, sleeps = _service(_rpc({"eth_getTransactionReceipt": [None, None, receipt]}))
        out = await service.transaction_status("0xdead", wait=True)
        assert out.status == "success"
        assert out.block_number == 16
        assert out.gas_used == "21000"
        assert out.polls == 3
        assert sleeps == [0.5, 0.5]
        assert out.explorer.url == "https://basescan.org/tx/0xdead"

    @pytest.mark.asyncio
    async def test_tx_status_reverted(self) -> None:
        receipt = {"status": "0x0", "blockNumber": "0x1", "gasUsed": "0x1"}
        service, _ = _service(_rpc({"eth_getTransactionReceipt": receipt}))
        assert (await service.transaction_status("0xbeef", wait=False)).status == "failed"

    @pytest.mark.asyncio
    async def test_tx_status_gives_up_after_max_polls(self) -> None:
        service, sleeps = _service(_rpc({"eth_getTransactionReceipt": [None] * 3}), max_polls=3)
        out = await service.transaction_status("0xdead", wait=True)
        assert out.status == "pending"
        assert out.polls == 3
        assert len(sleeps) == 2
