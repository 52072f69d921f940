"""
Rule Matcher - Matches sale recurrences and applies discount formulas.

Used by the pricing engine to decide whether an item's sale is active on the
evaluation date and, if so, what the line costs under the sale.
"""
from datetime import date
from typing import Optional

from .models import (
    BulkPricing,
    Discount,
    Item,
    PercentageOff,
    QuantityForFixedPrice,
    Sale,
    TwoForOne,
)


def find_active_sale(item: Item, on: date) -> Optional[Sale]:
    """Return the item's sale if its recurrence matches `on`, else None."""
    if item.sale is None:
        return None
    if item.sale.date.matches(on):
        return item.sale
    return None


def bundle_price(quantity: int, bundle_size: int, bundle_total: float, unit_price: float) -> float:
    """Whole bundles at `bundle_total`, leftover units at `unit_price`."""
    bundles, remainder = divmod(quantity, bundle_size)
    return bundles * bundle_total + remainder * unit_price


def apply_bulk_price(bulk: BulkPricing, quantity: int, unit_price: float) -> tuple[float, list[str]]:
    """
    Apply a bulk rule to a quantity.

    Returns (line_price, trace_messages).
    """
    bundles, remainder = divmod(quantity, bulk.amount)
    price = bundle_price(quantity, bulk.amount, bulk.total_price, unit_price)
    traces = [
        f"{bundles} × {bulk.amount}-for-${bulk.total_price:.2f}"
        f" + {remainder} × ${unit_price:.2f}"
    ]
    return price, traces


def apply_sale_price(discount: Discount, quantity: int, unit_price: float) -> tuple[float, list[str]]:
    """
    Apply a sale discount to a quantity.

    Returns (line_price, trace_messages).
    """
    traces = []

    if isinstance(discount, QuantityForFixedPrice):
        bundles, remainder = divmod(quantity, discount.quantity)
        price = bundle_price(quantity, discount.quantity, discount.price, unit_price)
        traces.append(
            f"Sale {bundles} × {discount.quantity}-for-${discount.price:.2f}"
            f" + {remainder} × ${unit_price:.2f}"
        )

    elif isinstance(discount, PercentageOff):
        price = quantity * unit_price * (100 - discount.percent) / 100
        traces.append(f"Sale {discount.percent}% off {quantity} × ${unit_price:.2f}")

    elif isinstance(discount, TwoForOne):
        # Both units of a pair and the leftover unit are charged at full price.
        pairs, remainder = divmod(quantity, 2)
        price = (2 * pairs + remainder) * unit_price
        traces.append(f"Two-for-one on {pairs} pair(s) + {remainder} single(s), no reduction")

    else:
        raise TypeError(f"Unsupported sale discount: {discount!r}")

    return price, traces
