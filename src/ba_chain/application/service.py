"""ChainApplicationService — Base RPC reads, gas estimates, receipt polling.

Gas estimation falls back to fixed defaults when the RPC is unreachable and
flags the result; every other RPC failure propagates as ChainRPCError.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.ba_chain.application.schemas import (
    BalanceOut,
    ExplorerLinkOut,
    FeeBreakdownOut,
    RpcHealthOut,
    TxStatusOut,
)
from src.ba_chain.domain import explorer
from src.ba_chain.domain.gas import (
    TRANSFER_GAS_LIMIT,
    GasEstimate,
    calculate_fee_breakdown,
    fallback_contract_estimate,
    fallback_transfer_estimate,
)
from src.ba_chain.infrastructure.rpc import BaseRPCClient, hex_to_int
from src.ba_common import fees
from src.ba_common.address import ZERO_ADDRESS, normalize_address
from src.ba_common.enums import TxStatus
from src.ba_common.errors import AppError

logger = logging.getLogger("ba.chain")


class ChainApplicationService:
    def __init__(
        self,
        rpc: BaseRPCClient,
        explorer_url: str,
        max_polls: int,
        poll_interval: float,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._rpc = rpc
        self._explorer_url = explorer_url
        self._max_polls = max_polls
        self._poll_interval = poll_interval
        self._sleep = sleep

    async def health(self) -> RpcHealthOut:
        version = await self._rpc.client_version()
        return RpcHealthOut(rpc_url=self._rpc.rpc_url, client_version=version)

    async def account_balance(self, address: str) -> BalanceOut:
        address = normalize_address(address)
        wei = await self._rpc.get_balance(address)
        return BalanceOut(
            address=address,
            balance=fees.format_eth(fees.wei_to_eth(wei)),
            balance_wei=str(wei),
            explorer_url=explorer.address_link(self._explorer_url, address).url,
        )

    async def current_gas(self) -> GasEstimate:
        try:
            price = await self._rpc.gas_price()
        except AppError as exc:
            logger.warning("gas price unavailable, using fallback: %s", exc.message)
            return fallback_transfer_estimate()
        return GasEstimate(TRANSFER_GAS_LIMIT, price)

    async def estimate_transaction(
        self, to: str, data: str, from_address: str | None = None
    ) -> GasEstimate:
        """Gas for a contract call; falls back to 100000 gas at 0.1 gwei."""
        to = normalize_address(to)
        sender = normalize_address(from_address) if from_address else ZERO_ADDRESS
        try:
            limit = await self._rpc.estimate_gas(to, data, sender)
            price = await self._rpc.gas_price()
        except AppError as exc:
            logger.warning("gas estimate for %s unavailable, using fallback: %s", to, exc.message)
            return fallback_contract_estimate()
        return GasEstimate(limit, price)

    async def fee_breakdown(self, price: float, royalty_percentage: float) -> FeeBreakdownOut:
        gas = await self.current_gas()
        breakdown = calculate_fee_breakdown(price, gas.cost_eth, royalty_percentage)
        return FeeBreakdownOut.from_domain(breakdown, gas)

    async def transaction_status(self, tx_hash: str, wait: bool) -> TxStatusOut:
        """Look up a receipt once, or poll until mined / max polls reached."""
        max_polls = self._max_polls if wait else 1
        receipt, polls = await self._poll_receipt(tx_hash, max_polls)
        link = ExplorerLinkOut.from_domain(explorer.transaction_link(self._explorer_url, tx_hash))

        if receipt is None:
            return TxStatusOut(hash=tx_hash, status=TxStatus.PENDING.value, polls=polls, explorer=link)

        status = TxStatus.SUCCESS if receipt.get("status") == "0x1" else TxStatus.FAILED
        block = receipt.get("blockNumber")
        gas_used = receipt.get("gasUsed")
        return TxStatusOut(
            hash=tx_hash,
            status=status.value,
            block_number=hex_to_int(block) if block else None,
            gas_used=str(hex_to_int(gas_used)) if gas_used else None,
            polls=polls,
            explorer=link,
        )

    async def _poll_receipt(
        self, tx_hash: str, max_polls: int
    ) -> tuple[dict[str, Any] | None, int]:
        for poll in range(1, max_polls + 1):
            try:
                receipt = await self._rpc.get_transaction_receipt(tx_hash)
            except AppError as exc:
                if max_polls == 1:
                    raise
                logger.warning("receipt poll %d for %s failed: %s", poll, tx_hash, exc.message)
                receipt = None
            if receipt is not None:
                return receipt, poll
            if poll < max_polls:
                await self._sleep(self._poll_interval)

        if max_polls > 1:
            logger.warning(
                "transaction %s still pending after %d polls", tx_hash, max_polls
            )
        return None, max_polls
