"""Engine subpackage - catalog models, rule evaluation and cart totals."""
from .pricing_engine import PricingEngine, price_for, price_line, total
from .models import (
    BulkPricing,
    CatalogValidationError,
    DayOfWeek,
    Item,
    LineItem,
    MonthAndDay,
    PercentageOff,
    ProductNotFoundError,
    QuantityForFixedPrice,
    Result,
    Sale,
    TwoForOne,
)

__all__ = [
    'PricingEngine', 'price_for', 'price_line', 'total',
    'Item', 'BulkPricing', 'Sale', 'DayOfWeek', 'MonthAndDay',
    'QuantityForFixedPrice', 'PercentageOff', 'TwoForOne',
    'LineItem', 'Result', 'CatalogValidationError', 'ProductNotFoundError',
]
