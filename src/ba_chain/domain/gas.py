"""Gas estimates and the pre-purchase fee breakdown.

All values here are derived and stateless. Amounts are ETH floats for
display; wei integers are kept alongside where the RPC provided them.
"""

from dataclasses import dataclass

from src.ba_common import fees

TRANSFER_GAS_LIMIT = 21_000
FALLBACK_GAS_PRICE_WEI = 100_000_000  # 0.1 gwei, typical Base
FALLBACK_CONTRACT_GAS_LIMIT = 100_000
CHEAP_GAS_THRESHOLD_ETH = 0.01
MAINNET_SAVINGS_FACTOR = 0.8


@dataclass(frozen=True)
class GasEstimate:
    gas_limit: int
    gas_price_wei: int
    is_fallback: bool = False

    @property
    def gas_price_gwei(self) -> float:
        return fees.wei_to_gwei(self.gas_price_wei)

    @property
    def cost_wei(self) -> int:
        return self.gas_limit * self.gas_price_wei

    @property
    def cost_eth(self) -> float:
        return fees.wei_to_eth(self.cost_wei)


@dataclass(frozen=True)
class FeeBreakdown:
    item_price: float
    platform_fee: float
    platform_fee_bps: int
    royalty_fee: float
    royalty_percentage: float
    estimated_gas_cost: float
    total_cost: float
    is_cheap_gas: bool
    savings: float


def fallback_transfer_estimate() -> GasEstimate:
    return GasEstimate(TRANSFER_GAS_LIMIT, FALLBACK_GAS_PRICE_WEI, is_fallback=True)


def fallback_contract_estimate() -> GasEstimate:
    return GasEstimate(FALLBACK_CONTRACT_GAS_LIMIT, FALLBACK_GAS_PRICE_WEI, is_fallback=True)


def calculate_fee_breakdown(
    item_price: float,
    gas_cost_eth: float,
    royalty_percentage: float = 0,
) -> FeeBreakdown:
    """total = price + 2.5% platform fee + royalty + gas."""
    platform = fees.platform_fee(item_price)
    royalty = fees.royalty_fee(item_price, royalty_percentage)
    return FeeBreakdown(
        item_price=item_price,
        platform_fee=platform,
        platform_fee_bps=fees.PLATFORM_FEE_BPS,
        royalty_fee=royalty,
        royalty_percentage=royalty_percentage,
        estimated_gas_cost=gas_cost_eth,
        total_cost=item_price + platform + royalty + gas_cost_eth,
        is_cheap_gas=gas_cost_eth < CHEAP_GAS_THRESHOLD_ETH,
        savings=gas_cost_eth * MAINNET_SAVINGS_FACTOR if gas_cost_eth > 0 else 0.0,
    )
