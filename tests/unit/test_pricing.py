"""Unit tests for BOM pricing and margins."""

from __future__ import annotations

import pytest

from rackbuilder.domain import (
    BOMLineItem,
    PricedOption,
    calculate_discounted_margin,
    calculate_total_margin,
)


def _item(price: float, cost: float, quantity: int = 1, enabled: bool = True) -> BOMLineItem:
    return BOMLineItem(
        product_id="p",
        name="Product",
        part_number="PN",
        unit_price=price,
        unit_cost=cost,
        quantity=quantity,
        enabled=enabled,
    )


class TestBOMLineItem:
    """Tests for a single line."""

    def test_revenue_cost_and_margin(self) -> None:
        item = _item(100.0, 60.0, quantity=3)

        assert item.revenue == 300.0
        assert item.cost == 180.0
        assert item.margin_percentage == pytest.approx(40.0)

    def test_options_are_added_once(self) -> None:
        item = BOMLineItem(
            product_id="p",
            name="Product",
            part_number="PN",
            unit_price=100.0,
            unit_cost=50.0,
            quantity=2,
            options=(PricedOption(name="Opt", price=20.0, cost=5.0),),
        )

        assert item.revenue == 220.0
        assert item.cost == 105.0

    def test_zero_revenue_margin(self) -> None:
        assert _item(0.0, 0.0).margin_percentage == 0.0

    def test_rejects_bad_quantity(self) -> None:
        with pytest.raises(ValueError, match="Quantity"):
            _item(10.0, 5.0, quantity=0)

    def test_rejects_negative_price(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            _item(-1.0, 0.0)


class TestMargins:
    """Tests for BOM totals."""

    def test_total_margin_skips_disabled_items(self) -> None:
        summary = calculate_total_margin(
            [_item(100.0, 50.0), _item(1000.0, 900.0, enabled=False)]
        )

        assert summary.total_revenue == 100.0
        assert summary.total_cost == 50.0
        assert summary.gross_profit == 50.0
        assert summary.margin_percentage == pytest.approx(50.0)

    def test_empty_bom(self) -> None:
        summary = calculate_total_margin([])

        assert summary.total_revenue == 0.0
        assert summary.margin_percentage == 0.0

    def test_discounted_margin(self) -> None:
        result = calculate_discounted_margin([_item(100.0, 60.0)], 20)

        assert result.discounted_revenue == pytest.approx(80.0)
        assert result.discount_amount == pytest.approx(20.0)
        assert result.discounted_margin == pytest.approx(25.0)

    def test_full_discount(self) -> None:
        result = calculate_discounted_margin([_item(100.0, 60.0)], 100)

        assert result.discounted_revenue == 0.0
        assert result.discounted_margin == 0.0

    @pytest.mark.parametrize("pct", [-1, 100.5])
    def test_discount_out_of_range(self, pct: float) -> None:
        with pytest.raises(ValueError, match="between 0 and 100"):
            calculate_discounted_margin([_item(100.0, 60.0)], pct)
