"""Unit tests for purchase pricing and fee arithmetic."""

import pytest

from src.ba_common import fees
from src.ba_common.errors import InvalidPriceError
from src.ba_marketplace.domain.pricing import quote_purchase


class TestQuotePurchase:
    def test_small_purchase_fee_floors_to_zero(self) -> None:
        q = quote_purchase(2, 2)
        assert q.total_price == 4.0
        assert q.platform_fee == 0
        assert q.seller_amount == 4.0

    def test_fee_is_floor_of_two_and_a_half_percent(self) -> None:
        q = quote_purchase(100, 1)
        assert q.platform_fee == 2  # floor(2.5)
        assert q.seller_amount == 98.0

    def test_exact_multiple_not_rounded_down(self) -> None:
        # 40 * 0.025 == 1 exactly; binary float would give 0.99999...
        assert quote_purchase(40, 1).platform_fee == 1

    def test_total_plus_fee_partition(self) -> None:
        q = quote_purchase(0.3, 7)
        assert q.total_price == pytest.approx(2.1)
        assert q.platform_fee + q.seller_amount == pytest.approx(q.total_price)

    def test_overflowing_total_raises_invalid_price(self) -> None:
        with pytest.raises(InvalidPriceError):
            quote_purchase(1e308, 2)

    def test_largest_valid_order_stays_finite(self) -> None:
        q = quote_purchase(fees.MAX_PRICE, fees.MAX_QUANTITY)
        assert q.total_price == pytest.approx(1e17)
        assert q.platform_fee == int(2.5e15)

    def test_quantity_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            quote_purchase(1, 0)


class TestFees:
    def test_platform_fee_fractional(self) -> None:
        assert fees.platform_fee(1.0) == pytest.approx(0.025)

    def test_royalty_fee(self) -> None:
        assert fees.royalty_fee(2.0, 10) == pytest.approx(0.2)

    def test_wei_conversions(self) -> None:
        assert fees.wei_to_eth(10**18) == 1.0
        assert fees.wei_to_gwei(100_000_000) == pytest.approx(0.1)

    def test_format_eth_four_decimals(self) -> None:
        assert fees.format_eth(1.23456) == "1.2346"
        assert fees.format_eth(0) == "0.0000"

    def test_format_eth_rejects_nan(self) -> None:
        with pytest.raises(ValueError):
            fees.format_eth(float("nan"))


class TestPriceBounds:
    @pytest.mark.parametrize("price", [0.0001, 1, fees.MAX_PRICE])
    def test_accepted(self, price: float) -> None:
        assert fees.is_valid_price(price)

    @pytest.mark.parametrize(
        "price", [0, -1, fees.MAX_PRICE * 10, float("inf"), float("-inf"), float("nan")]
    )
    def test_rejected(self, price: float) -> None:
        assert not fees.is_valid_price(price)
