"""Pydantic response schemas for ba_chain."""

from src.ba_chain.domain.explorer import ExplorerLink
from src.ba_chain.domain.gas import FeeBreakdown, GasEstimate
from src.ba_common.schemas import CamelModel


class RpcHealthOut(CamelModel):
    rpc_url: str
    client_version: str


class BalanceOut(CamelModel):
    address: str
    balance: str  # ETH, 4 decimals
    balance_wei: str
    explorer_url: str


class GasEstimateOut(CamelModel):
    gas_limit: str
    gas_price: str  # wei
    gas_price_gwei: float
    estimated_gas_cost: str  # wei
    estimated_gas_cost_eth: float
    is_fallback: bool

    @classmethod
    def from_domain(cls, est: GasEstimate) -> "GasEstimateOut":
        return cls(
            gas_limit=str(est.gas_limit),
            gas_price=str(est.gas_price_wei),
            gas_price_gwei=est.gas_price_gwei,
            estimated_gas_cost=str(est.cost_wei),
            estimated_gas_cost_eth=est.cost_eth,
            is_fallback=est.is_fallback,
        )


class FeeBreakdownOut(CamelModel):
    item_price: float
    platform_fee: float
    platform_fee_bps: int
    royalty_fee: float
    royalty_percentage: float
    estimated_gas_cost: float
    total_cost: float
    is_cheap_gas: bool
    savings: float
    gas: GasEstimateOut

    @classmethod
    def from_domain(cls, fb: FeeBreakdown, gas: GasEstimate) -> "FeeBreakdownOut":
        return cls(
            item_price=fb.item_price,
            platform_fee=fb.platform_fee,
            platform_fee_bps=fb.platform_fee_bps,
            royalty_fee=fb.royalty_fee,
            royalty_percentage=fb.royalty_percentage,
            estimated_gas_cost=fb.estimated_gas_cost,
            total_cost=fb.total_cost,
            is_cheap_gas=fb.is_cheap_gas,
            savings=fb.savings,
            gas=GasEstimateOut.from_domain(gas),
        )


class ExplorerLinkOut(CamelModel):
    url: str
    label: str

    @classmethod
    def from_domain(cls, link: ExplorerLink) -> "ExplorerLinkOut":
        return cls(url=link.url, label=link.label)


class TxStatusOut(CamelModel):
    hash: str
    status: str  # pending / success / failed
    block_number: int | None = None
    gas_used: str | None = None
    polls: int
    explorer: ExplorerLinkOut
