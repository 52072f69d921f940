"""
Catalog Loader - Parses the treats JSON document into validated Items.

Wire format (one entry of the top-level "treats" array):

    {
      "id": 3,
      "name": "Cookie",
      "imageURL": "http://...",
      "price": 1.25,
      "bulkPricing": {"amount": 6, "totalPrice": 6.0},
      "sale": {"date": {"DayOfWeek": "Fri"},
               "salePrice": {"QuantityForFixedPrice": [8, 6.0]}}
    }

Sale variants are externally tagged: `date` is {"DayOfWeek": "Fri"} or
{"MonthAndDay": [10, 1]}; `salePrice` is {"QuantityForFixedPrice": [n, p]},
{"PercentageOff": pct} or the bare string "TwoForOne".
"""
import json
from pathlib import Path
from typing import Any, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..engine.models import (
    BulkPricing,
    CatalogValidationError,
    DayOfWeek,
    Discount,
    Item,
    MonthAndDay,
    PercentageOff,
    QuantityForFixedPrice,
    Recurrence,
    Sale,
    TwoForOne,
)


class BulkPricingSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    amount: int
    total_price: float = Field(alias='totalPrice')


class SaleSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    date: dict[str, Any]
    sale_price: Union[str, dict[str, Any]] = Field(alias='salePrice')


class ItemSchema(BaseModel):
    """Wire shape of a single catalog entry."""
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    id: int
    name: str
    image_url: str = Field(default='', alias='imageURL')
    price: float
    bulk_pricing: Optional[BulkPricingSchema] = Field(default=None, alias='bulkPricing')
    sale: Optional[SaleSchema] = None


def _single_tag(value: dict, kind: str) -> tuple[str, Any]:
    if len(value) != 1:
        raise CatalogValidationError(
            f"{kind} must have exactly one variant tag, got {sorted(value)}"
        )
    return next(iter(value.items()))


def _pair(payload: Any, tag: str) -> tuple[Any, Any]:
    if not isinstance(payload, (list, tuple)) or len(payload) != 2:
        raise CatalogValidationError(f"{tag} expects two values, got {payload!r}")
    return payload[0], payload[1]


def parse_recurrence(value: dict) -> Recurrence:
    """Build a sale recurrence from its tagged wire form."""
    tag, payload = _single_tag(value, "sale date")

    if tag == 'DayOfWeek':
        if isinstance(payload, int) and not isinstance(payload, bool):
            return DayOfWeek(payload)
        return DayOfWeek.from_name(payload)

    if tag == 'MonthAndDay':
        month, day = _pair(payload, tag)
        return MonthAndDay(month, day)

    raise CatalogValidationError(f"Unknown sale date variant '{tag}'")


def parse_discount(value: Union[str, dict]) -> Discount:
    """Build a sale discount from its tagged wire form."""
    if isinstance(value, str):
        if value == 'TwoForOne':
            return TwoForOne()
        raise CatalogValidationError(f"Unknown sale price variant '{value}'")

    tag, payload = _single_tag(value, "sale price")

    if tag == 'QuantityForFixedPrice':
        quantity, price = _pair(payload, tag)
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise CatalogValidationError(f"{tag} price must be a number, got {price!r}")
        return QuantityForFixedPrice(quantity, float(price))

    if tag == 'PercentageOff':
        return PercentageOff(payload)

    if tag == 'TwoForOne':
        return TwoForOne()

    raise CatalogValidationError(f"Unknown sale price variant '{tag}'")


def item_from_schema(schema: ItemSchema) -> Item:
    """Convert a validated wire entry into an engine Item."""
    bulk = None
    if schema.bulk_pricing is not None:
        bulk = BulkPricing(schema.bulk_pricing.amount, schema.bulk_pricing.total_price)

    sale = None
    if schema.sale is not None:
        sale = Sale(
            date=parse_recurrence(schema.sale.date),
            sale_price=parse_discount(schema.sale.sale_price),
        )

    return Item(
        id=schema.id,
        name=schema.name,
        price=schema.price,
        image_url=schema.image_url,
        bulk_pricing=bulk,
        sale=sale,
    )


def parse_items(entries: list) -> list[Item]:
    """Validate a list of raw catalog entries; names must be unique."""
    items = []
    seen = set()

    for index, entry in enumerate(entries):
        label = entry.get('name', f"#{index}") if isinstance(entry, dict) else f"#{index}"
        try:
            item = item_from_schema(ItemSchema.model_validate(entry))
        except ValidationError as e:
            raise CatalogValidationError(f"Item '{label}': {e}") from e
        except CatalogValidationError as e:
            raise CatalogValidationError(f"Item '{label}': {e}") from e

        if item.name in seen:
            raise CatalogValidationError(f"Duplicate item name '{item.name}' in catalog")
        seen.add(item.name)
        items.append(item)

    return items


def parse_catalog(json_text: str, key: str = 'treats') -> list[Item]:
    """
    Parse a catalog JSON document.

    Args:
        json_text: Document text with a top-level array under `key`
        key: Name of the array field

    Returns:
        List of validated Items, in document order
    """
    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        raise CatalogValidationError(f"Catalog is not valid JSON: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get(key), list):
        raise CatalogValidationError(f"Catalog must contain a '{key}' array")

    return parse_items(data[key])


def load_catalog(path: Path, key: str = 'treats', verbose: bool = False) -> list[Item]:
    """Load and validate a catalog file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found at {path}.")

    with open(path, 'r', encoding='utf-8') as f:
        items = parse_catalog(f.read(), key=key)

    if verbose:
        print(f"✅ Loaded {len(items)} items from {path}")
    return items


def describe_bulk(item: Item) -> Optional[str]:
    if item.bulk_pricing is None:
        return None
    return f"{item.bulk_pricing.amount} for ${item.bulk_pricing.total_price:.2f}"


def describe_sale(item: Item) -> Optional[str]:
    if item.sale is None:
        return None
    discount = item.sale.sale_price
    if isinstance(discount, QuantityForFixedPrice):
        offer = f"{discount.quantity} for ${discount.price:.2f}"
    elif isinstance(discount, PercentageOff):
        offer = f"{discount.percent}% off"
    else:
        offer = "two for one"
    return f"{offer}, {item.sale.date.describe()}"


def catalog_frame(items: list[Item]) -> pd.DataFrame:
    """Tabular view of the catalog, indexed by product name."""
    rows = [
        {
            'Name': item.name,
            'ID': item.id,
            'Price': item.price,
            'Bulk': describe_bulk(item),
            'Sale': describe_sale(item),
            'Image': item.image_url,
        }
        for item in items
    ]
    frame = pd.DataFrame(rows, columns=['Name', 'ID', 'Price', 'Bulk', 'Sale', 'Image'])
    return frame.set_index('Name')
