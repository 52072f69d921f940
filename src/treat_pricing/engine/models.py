"""
Data models for the pricing engine.

Catalog items carry at most one bulk rule and one sale rule. Sale recurrences
and sale discounts are closed tagged unions: each variant is a frozen
dataclass and the evaluator dispatches on the concrete type.

Uses dataclasses for structured, type-safe data representation.
"""
import calendar
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union


class CatalogValidationError(ValueError):
    """Raised when catalog data or a pricing rule fails validation."""


class ProductNotFoundError(LookupError):
    """Raised when a cart names a product absent from the catalog."""

    def __init__(self, name: str):
        super().__init__(f"Product '{name}' not found in catalog")
        self.name = name


WEEKDAY_NAMES = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)


def _require_non_negative(value: float, label: str):
    if not math.isfinite(value) or value < 0:
        raise CatalogValidationError(f"{label} must be a finite non-negative amount, got {value}")


def _require_positive_int(value: int, label: str):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise CatalogValidationError(f"{label} must be a positive integer, got {value!r}")


# ---------------------------------------------------------------------------
# Sale recurrences
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DayOfWeek:
    """Sale recurs every week on `weekday` (0 = Monday, as date.weekday())."""
    weekday: int

    def __post_init__(self):
        if isinstance(self.weekday, bool) or self.weekday not in range(7):
            raise CatalogValidationError(
                f"weekday must be 0 (Monday) through 6 (Sunday), got {self.weekday!r}"
            )

    @classmethod
    def from_name(cls, name: str) -> 'DayOfWeek':
        """Build from a weekday name; accepts 'Fri' and 'Friday', any case."""
        key = str(name).strip().lower()
        for index, day_name in enumerate(WEEKDAY_NAMES):
            if key in (day_name.lower(), day_name[:3].lower()):
                return cls(index)
        raise CatalogValidationError(f"Unknown weekday '{name}'")

    def matches(self, on: date) -> bool:
        return on.weekday() == self.weekday

    def describe(self) -> str:
        return f"every {WEEKDAY_NAMES[self.weekday]}"


@dataclass(frozen=True)
class MonthAndDay:
    """Sale recurs every year on the given month and day."""
    month: int
    day: int

    def __post_init__(self):
        if isinstance(self.month, bool) or self.month not in range(1, 13):
            raise CatalogValidationError(f"month must be 1-12, got {self.month!r}")
        if isinstance(self.day, bool) or self.day not in range(1, 32):
            raise CatalogValidationError(f"day must be 1-31, got {self.day!r}")

    def matches(self, on: date) -> bool:
        return on.month == self.month and on.day == self.day

    def describe(self) -> str:
        return f"every {calendar.month_name[self.month]} {self.day}"


Recurrence = Union[DayOfWeek, MonthAndDay]


# ---------------------------------------------------------------------------
# Sale discounts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QuantityForFixedPrice:
    """Every `quantity` units cost `price` while the sale is active."""
    quantity: int
    price: float

    def __post_init__(self):
        _require_positive_int(self.quantity, "sale bundle size")
        _require_non_negative(self.price, "sale bundle price")


@dataclass(frozen=True)
class PercentageOff:
    """Unit price reduced by `percent` (0-100, not a fraction)."""
    percent: Union[int, float]

    def __post_init__(self):
        if isinstance(self.percent, bool) or not isinstance(self.percent, (int, float)):
            raise CatalogValidationError(f"percent must be a number, got {self.percent!r}")
        if not 0 <= self.percent <= 100:
            raise CatalogValidationError(
                f"invalid value: {self.percent}, expected a value between 0 and 100"
            )


@dataclass(frozen=True)
class TwoForOne:
    """Two-for-one deal. See rule_matcher.apply_sale_price for the formula."""


Discount = Union[QuantityForFixedPrice, PercentageOff, TwoForOne]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Sale:
    """A date-conditioned override of normal and bulk pricing."""
    date: Recurrence
    sale_price: Discount


@dataclass(frozen=True)
class BulkPricing:
    """Every `amount` units bought together cost `total_price`."""
    amount: int
    total_price: float

    def __post_init__(self):
        _require_positive_int(self.amount, "bulk amount")
        _require_non_negative(self.total_price, "bulk total price")


@dataclass(frozen=True)
class Item:
    """A single catalog product."""
    id: int
    name: str
    price: float
    image_url: str = ""
    bulk_pricing: Optional[BulkPricing] = None
    sale: Optional[Sale] = None

    def __post_init__(self):
        if not self.name:
            raise CatalogValidationError(f"Item {self.id} has no name")
        _require_non_negative(self.price, f"price of '{self.name}'")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass
class LineItem:
    """A single priced line in a quote result."""
    name: str
    quantity: int
    unit_price: float
    extended_price: float = 0.0
    rule_applied: str = "unit"  # "sale", "bulk" or "unit"
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this line item."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        """Add a warning for this line item."""
        self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)


@dataclass
class Result:
    """Complete result of pricing a cart on a given date."""
    date: date
    total: float
    lines: list[LineItem] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the result-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        """Add a result-level warning."""
        self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable result trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_legacy_dict(self) -> dict:
        """Convert to the flat dict format printed by the CLI."""
        return {
            "Date": self.date.isoformat(),
            "Total": self.total,
            "Lines": [
                {
                    "Name": line.name,
                    "Quantity": line.quantity,
                    "Unit Price": line.unit_price,
                    "Total": line.extended_price,
                    "Rule": line.rule_applied,
                }
                for line in self.lines
            ]
        }
