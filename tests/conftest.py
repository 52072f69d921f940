import os
import sys
from datetime import date

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

# api.state reads these at import; keep the suite on the packaged catalog and an in-memory cart
os.environ.pop("TREAT_PRICING_CART", None)
os.environ.pop("TREAT_PRICING_CATALOG", None)

from treat_pricing.engine.models import (
    BulkPricing,
    DayOfWeek,
    Item,
    MonthAndDay,
    PercentageOff,
    QuantityForFixedPrice,
    Sale,
)


# 0001-01-01 is a Monday with no sales in any fixture
NO_SALE_DATE = date(1, 1, 1)

# 2021-10-01 is both a Friday and October 1
FRIDAY_OCTOBER_FIRST = date(2021, 10, 1)


@pytest.fixture
def bakery():
    """The four treats with bulk pricing only."""
    return [
        Item(id=1, name="Brownie", price=2.0, bulk_pricing=BulkPricing(4, 7.0)),
        Item(id=2, name="Key Lime Cheesecake", price=8.0),
        Item(id=3, name="Cookie", price=1.25, bulk_pricing=BulkPricing(6, 6.0)),
        Item(id=4, name="Mini Gingerbread Donut", price=0.5),
    ]


@pytest.fixture
def bakery_on_sale():
    """Cheesecake 25% off every October 1, cookies 8 for $6 every Friday."""
    return [
        Item(
            id=2,
            name="Key Lime Cheesecake",
            price=8.0,
            sale=Sale(date=MonthAndDay(10, 1), sale_price=PercentageOff(25)),
        ),
        Item(
            id=3,
            name="Cookie",
            price=1.25,
            bulk_pricing=BulkPricing(6, 6.0),
            sale=Sale(date=DayOfWeek.from_name("Fri"), sale_price=QuantityForFixedPrice(8, 6.0)),
        ),
    ]
