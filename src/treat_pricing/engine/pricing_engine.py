"""
Pricing Engine - Line pricing and cart totals with traceability.

Resolution order for a single line:
1. An active sale (recurrence matches the evaluation date) replaces all
   other pricing for the line
2. Otherwise a bulk rule applies once the quantity reaches its bundle size
3. Otherwise every unit is charged at the catalog price

The evaluation date is always supplied by the caller; nothing here reads the
system clock.
"""
from datetime import date
from typing import Iterable, Mapping

from .models import Item, LineItem, ProductNotFoundError, Result, TwoForOne
from .rule_matcher import apply_bulk_price, apply_sale_price, find_active_sale


TWO_FOR_ONE_WARNING = "Two-for-one sale on '{name}' charged at full price"


def _check_quantity(quantity: int):
    if quantity < 0:
        raise ValueError(f"Quantity must be non-negative, got {quantity}")


def price_line(item: Item, quantity: int, on: date) -> LineItem:
    """Price `quantity` units of `item` on `on`, recording each step taken."""
    _check_quantity(quantity)

    line = LineItem(name=item.name, quantity=quantity, unit_price=item.price)
    line.add_trace("Catalog Price", f"Unit price for {item.name}", f"${item.price:.2f}")

    sale = find_active_sale(item, on)
    if sale is not None:
        line.extended_price, traces = apply_sale_price(sale.sale_price, quantity, item.price)
        line.rule_applied = "sale"
        line.add_trace("Sale Active", f"{sale.date.describe()} matches {on.isoformat()}")
        for trace_msg in traces:
            line.add_trace("Rule Applied", trace_msg, f"${line.extended_price:.2f}")
        if isinstance(sale.sale_price, TwoForOne):
            line.add_warning(TWO_FOR_ONE_WARNING.format(name=item.name))
        return line

    if item.sale is not None:
        line.add_trace("Sale Inactive", f"{item.sale.date.describe()} does not match {on.isoformat()}")

    bulk = item.bulk_pricing
    if bulk is not None and quantity >= bulk.amount:
        line.extended_price, traces = apply_bulk_price(bulk, quantity, item.price)
        line.rule_applied = "bulk"
        for trace_msg in traces:
            line.add_trace("Bulk Pricing", trace_msg, f"${line.extended_price:.2f}")
        return line

    if bulk is not None:
        line.add_trace("Bulk Pricing", f"Quantity {quantity} below bundle size {bulk.amount}")

    line.extended_price = quantity * item.price
    line.add_trace("Extension", f"Quantity {quantity} × ${item.price:.2f}", f"${line.extended_price:.2f}")
    return line


def price_for(item: Item, quantity: int, on: date) -> float:
    """Amount owed for `quantity` units of `item` on `on`."""
    return price_line(item, quantity, on).extended_price


def find_item(catalog: Iterable[Item], name: str) -> Item:
    """First catalog item whose name equals `name`."""
    for item in catalog:
        if item.name == name:
            return item
    raise ProductNotFoundError(name)


def total(cart: Mapping[str, int], catalog: Iterable[Item], on: date) -> float:
    """Sum of line prices for every (name, quantity) entry in `cart`."""
    catalog = list(catalog)
    amount = 0.0
    for name, quantity in cart.items():
        amount += price_for(find_item(catalog, name), quantity, on)
    return amount


class PricingEngine:
    """
    Prices carts against a fixed catalog.

    The catalog is indexed by name on construction; the first item wins when
    names repeat, matching the first-match lookup of `find_item`.
    """

    def __init__(self, items: Iterable[Item]):
        self.items = list(items)
        self._by_name: dict[str, Item] = {}
        for item in self.items:
            self._by_name.setdefault(item.name, item)

    def find_item(self, name: str) -> Item:
        """Resolve a product name to its catalog item."""
        try:
            return self._by_name[name]
        except KeyError:
            raise ProductNotFoundError(name) from None

    def price_for(self, name: str, quantity: int, on: date) -> float:
        """Line price for one product."""
        return price_for(self.find_item(name), quantity, on)

    def total(self, cart: Mapping[str, int], on: date) -> float:
        """Cart total on `on`; raises ProductNotFoundError for unknown names."""
        amount = 0.0
        for name, quantity in cart.items():
            amount += self.price_for(name, quantity, on)
        return amount

    def calculate(self, cart: Mapping[str, int], on: date) -> Result:
        """
        Price a whole cart with full traceability.

        Args:
            cart: Dict of {product name: quantity}
            on: Evaluation date

        Returns:
            Result dataclass with lines, trace, and warnings
        """
        result = Result(date=on, total=0.0)
        result.add_trace("Evaluation Date", f"Pricing {len(cart)} product(s)", on.isoformat())

        for name, quantity in cart.items():
            line = price_line(self.find_item(name), quantity, on)
            result.lines.append(line)
            result.total += line.extended_price

            # Bubble up line warnings
            for warning in line.warnings:
                if warning not in result.warnings:
                    result.add_warning(warning)

        result.add_trace("Total", "Sum of line totals", f"${result.total:.2f}")
        return result
