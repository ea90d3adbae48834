"""Purchase price split: total, 2.5% platform fee (floored), seller remainder."""

import math
from dataclasses import dataclass

from src.ba_common import fees
from src.ba_common.errors import InvalidPriceError


@dataclass(frozen=True)
class PurchaseQuote:
    total_price: float
    platform_fee: int
    seller_amount: float


def quote_purchase(price: float, quantity: int) -> PurchaseQuote:
    """total = price x qty; fee = floor(total x 0.025); seller gets the rest.

    >>> quote_purchase(2, 2)
    PurchaseQuote(total_price=4.0, platform_fee=0, seller_amount=4.0)
    """
    if quantity < 1:
        raise ValueError(f"quantity must be >= 1, got {quantity}")
    if not math.isfinite(price):
        raise InvalidPriceError(price)
    total = fees.total_price(price, quantity)
    if not math.isfinite(total):
        raise InvalidPriceError(total)
    fee = fees.platform_fee_floor(total)
    return PurchaseQuote(
        total_price=total,
        platform_fee=fee,
        seller_amount=fees.seller_amount(total, fee),
    )
