"""Bill of materials price, cost and margin aggregation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PricedOption:
    """An option or customization priced on top of a line item."""

    name: str
    price: float = 0.0
    cost: float = 0.0


@dataclass(frozen=True)
class BOMLineItem:
    """One priced line of a bill of materials.

    Attributes:
        product_id: Catalog id of the product.
        name: Display name.
        part_number: Part number printed on the quote.
        unit_price: List price per unit.
        unit_cost: Internal cost per unit.
        quantity: Number of units.
        enabled: Disabled lines stay on the BOM but are not totalled.
        options: Options priced once per line, not per unit.
    """

    product_id: str
    name: str
    part_number: str
    unit_price: float
    unit_cost: float = 0.0
    quantity: int = 1
    enabled: bool = True
    options: tuple[PricedOption, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")
        if self.unit_price < 0 or self.unit_cost < 0:
            raise ValueError("Price and cost cannot be negative")

    @property
    def revenue(self) -> float:
        return self.unit_price * self.quantity + sum(o.price for o in self.options)

    @property
    def cost(self) -> float:
        return self.unit_cost * self.quantity + sum(o.cost for o in self.options)

    @property
    def margin_percentage(self) -> float:
        """Gross margin as a percentage of revenue (0 when revenue is 0)."""
        if self.revenue == 0:
            return 0.0
        return (self.revenue - self.cost) / self.revenue * 100


@dataclass(frozen=True)
class MarginSummary:
    """Totals across the enabled lines of a BOM."""

    total_revenue: float
    total_cost: float

    @property
    def gross_profit(self) -> float:
        return self.total_revenue - self.total_cost

    @property
    def margin_percentage(self) -> float:
        if self.total_revenue == 0:
            return 0.0
        return self.gross_profit / self.total_revenue * 100


@dataclass(frozen=True)
class DiscountSummary:
    """Effect of a quote-level discount on revenue and margin."""

    discounted_revenue: float
    discount_amount: float
    discounted_margin: float


def calculate_total_margin(items: list[BOMLineItem]) -> MarginSummary:
    """Total revenue and cost over enabled line items."""
    enabled = [item for item in items if item.enabled]
    return MarginSummary(
        total_revenue=sum(item.revenue for item in enabled),
        total_cost=sum(item.cost for item in enabled),
    )


def calculate_discounted_margin(
    items: list[BOMLineItem], discount_percentage: float
) -> DiscountSummary:
    """Apply a percentage discount to the BOM total.

    Args:
        items: BOM line items.
        discount_percentage: Discount between 0 and 100.

    Returns:
        DiscountSummary with the discounted revenue and resulting margin.

    Raises:
        ValueError: If the discount is outside 0-100.
    """
    if not 0 <= discount_percentage <= 100:
        raise ValueError("Discount percentage must be between 0 and 100")

    totals = calculate_total_margin(items)
    discounted_revenue = totals.total_revenue * (1 - discount_percentage / 100)
    if discounted_revenue == 0:
        discounted_margin = 0.0
    else:
        discounted_margin = (discounted_revenue - totals.total_cost) / discounted_revenue * 100
    return DiscountSummary(
        discounted_revenue=discounted_revenue,
        discount_amount=totals.total_revenue - discounted_revenue,
        discounted_margin=discounted_margin,
    )
