"""Fee arithmetic for marketplace purchases and gas breakdowns.

Prices are carried as float ETH on the wire. Arithmetic goes through
Decimal built from the float's repr so that floor() never lands one unit
low because of binary rounding (e.g. 40 * 0.025).
"""

import math
from decimal import ROUND_FLOOR, Decimal

PLATFORM_FEE_BPS = 250  # 2.5%
_BPS_DENOMINATOR = 10_000

# MAX_PRICE x MAX_QUANTITY stays below the NUMERIC(36, 18) ceiling of 1e18.
MAX_PRICE = 1e12
MAX_QUANTITY = 100_000

WEI_PER_ETH = 10**18
WEI_PER_GWEI = 10**9


def _dec(value: float | int) -> Decimal:
    return Decimal(str(value))


def is_valid_price(price: float) -> bool:
    return math.isfinite(price) and 0 < price <= MAX_PRICE


def total_price(price: float, quantity: int) -> float:
    """price x quantity, exact in decimal."""
    return float(_dec(price) * quantity)


def platform_fee_floor(total: float) -> int:
    """floor(total x 2.5%) — purchase-side fee, whole units."""
    fee = _dec(total) * PLATFORM_FEE_BPS / _BPS_DENOMINATOR
    return int(fee.to_integral_value(rounding=ROUND_FLOOR))


def seller_amount(total: float, platform_fee: int) -> float:
    return float(_dec(total) - platform_fee)


def platform_fee(price: float) -> float:
    """Fractional platform fee used in the pre-purchase breakdown."""
    return float(_dec(price) * PLATFORM_FEE_BPS / _BPS_DENOMINATOR)


def royalty_fee(price: float, royalty_percentage: float) -> float:
    return float(_dec(price) * _dec(royalty_percentage) / 100)


def wei_to_eth(wei: int) -> float:
    return wei / WEI_PER_ETH


def wei_to_gwei(wei: int) -> float:
    return wei / WEI_PER_GWEI


def format_eth(value: float, decimals: int = 4) -> str:
    """Fixed-point display: 1.23456 -> '1.2346'."""
    if math.isnan(value):
        raise ValueError("value must be a number")
    return f"{value:.{decimals}f}"
