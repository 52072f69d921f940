"""
Cart Service - Shopping cart with pluggable persistence.

The cart maps product names to quantities. Every mutation is written through
to a store collaborator so cart contents can outlive the process. Adding a
product that is already in the cart replaces its quantity.

A cart instance assumes a single writer; callers sharing one cart across
requests must serialize mutations themselves.
"""
import csv
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Protocol

from ..engine.models import Item
from ..engine.pricing_engine import total


logger = logging.getLogger(__name__)


class CartStore(Protocol):
    """Storage collaborator holding a name → quantity mapping."""

    def get_all(self) -> dict[str, int]: ...

    def set(self, name: str, quantity: int) -> None: ...

    def clear(self) -> None: ...


class InMemoryCartStore:
    """Dict-backed store; contents live as long as the instance."""

    def __init__(self):
        self._entries: dict[str, int] = {}

    def get_all(self) -> dict[str, int]:
        return dict(self._entries)

    def set(self, name: str, quantity: int) -> None:
        self._entries[name] = quantity

    def clear(self) -> None:
        self._entries.clear()


class CsvCartStore:
    """File-backed store writing `name,quantity` rows to a CSV file."""

    CSV_COLUMNS = ['name', 'quantity']

    def __init__(self, path: Path):
        self.path = Path(path)

    def get_all(self) -> dict[str, int]:
        """Read every entry; a missing file is an empty cart."""
        entries = {}
        if not self.path.exists():
            return entries

        with open(self.path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            for row in reader:
                if not row.get('name'):
                    continue
                entries[row['name']] = int(row.get('quantity') or 0)

        return entries

    def set(self, name: str, quantity: int) -> None:
        entries = self.get_all()
        entries[name] = quantity
        self._write(entries)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            logger.debug("Removed cart file %s", self.path)

    def _write(self, entries: dict[str, int]):
        """Write entries back to CSV."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=self.CSV_COLUMNS)
            writer.writeheader()
            for name, quantity in entries.items():
                writer.writerow({'name': name, 'quantity': str(quantity)})


class ShoppingCart:
    """A name → quantity cart priced against a catalog."""

    def __init__(self, store: Optional[CartStore] = None):
        self.store = store if store is not None else InMemoryCartStore()
        self.products: dict[str, int] = {}

    def add(self, name: str, quantity: int):
        """Set the quantity for `name`, replacing any previous quantity."""
        if quantity < 0:
            raise ValueError(f"Quantity must be non-negative, got {quantity}")
        self.store.set(name, quantity)
        self.products[name] = quantity

    def clear(self):
        """Remove every entry from the cart and its store."""
        self.store.clear()
        self.products.clear()

    def load(self):
        """Replace the in-memory entries with the store's contents."""
        self.products = self.store.get_all()
        logger.info("Loaded %d cart entries", len(self.products))

    def items(self) -> dict[str, int]:
        """Snapshot of the current entries."""
        return dict(self.products)

    def total(self, catalog: Iterable[Item], on: date) -> float:
        """Price the cart on `on`; raises ProductNotFoundError for unknown names."""
        return total(self.products, catalog, on)
