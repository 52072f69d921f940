"""Shopping cart behaviour and storage collaborators."""
import pytest

from treat_pricing.engine.models import ProductNotFoundError
from treat_pricing.services.cart_service import CsvCartStore, InMemoryCartStore, ShoppingCart

from conftest import FRIDAY_OCTOBER_FIRST, NO_SALE_DATE


@pytest.fixture
def cart():
    return ShoppingCart()


def test_cart_scenarios(cart, bakery):
    cart.add("Cookie", 7)
    assert cart.total(bakery, NO_SALE_DATE) == pytest.approx(7.25)

    cart.clear()
    cart.add("Cookie", 1)
    cart.add("Brownie", 4)
    cart.add("Key Lime Cheesecake", 1)
    assert cart.total(bakery, NO_SALE_DATE) == pytest.approx(16.25)

    cart.clear()
    cart.add("Cookie", 8)
    assert cart.total(bakery, NO_SALE_DATE) == pytest.approx(8.50)

    cart.clear()
    cart.add("Cookie", 1)
    cart.add("Brownie", 1)
    cart.add("Key Lime Cheesecake", 1)
    cart.add("Mini Gingerbread Donut", 2)
    assert cart.total(bakery, NO_SALE_DATE) == pytest.approx(12.25)

    cart.clear()
    assert cart.total(bakery, NO_SALE_DATE) == 0


def test_cart_sales(cart, bakery_on_sale):
    cart.add("Cookie", 8)
    cart.add("Key Lime Cheesecake", 4)
    assert cart.total(bakery_on_sale, FRIDAY_OCTOBER_FIRST) == pytest.approx(30.0)


def test_add_replaces_quantity(cart, bakery):
    cart.add("Brownie", 4)
    cart.add("Brownie", 1)
    assert cart.items() == {"Brownie": 1}
    assert cart.total(bakery, NO_SALE_DATE) == pytest.approx(2.0)


def test_add_rejects_negative_quantity(cart):
    with pytest.raises(ValueError):
        cart.add("Brownie", -1)
    assert cart.items() == {}


def test_unknown_product_fails_total(cart, bakery):
    cart.add("Eclair", 1)
    with pytest.raises(ProductNotFoundError):
        cart.total(bakery, NO_SALE_DATE)


def test_items_is_a_snapshot(cart):
    cart.add("Cookie", 2)
    snapshot = cart.items()
    snapshot["Cookie"] = 99
    assert cart.items() == {"Cookie": 2}


def test_in_memory_store_mirrors_cart():
    store = InMemoryCartStore()
    cart = ShoppingCart(store)
    cart.add("Cookie", 3)
    cart.add("Brownie", 2)
    assert store.get_all() == {"Cookie": 3, "Brownie": 2}

    cart.clear()
    assert store.get_all() == {}


def test_csv_store_persists_between_carts(tmp_path, bakery):
    path = tmp_path / "cart" / "cart.csv"

    first = ShoppingCart(CsvCartStore(path))
    first.add("Cookie", 7)
    first.add("Brownie", 4)
    first.add("Cookie", 8)
    assert path.exists()

    second = ShoppingCart(CsvCartStore(path))
    assert second.items() == {}
    second.load()
    assert second.items() == {"Cookie": 8, "Brownie": 4}
    assert second.total(bakery, NO_SALE_DATE) == pytest.approx(8.5 + 7.0)

    second.clear()
    assert not path.exists()
    assert CsvCartStore(path).get_all() == {}


def test_csv_store_missing_file_is_empty(tmp_path):
    store = CsvCartStore(tmp_path / "nothing.csv")
    assert store.get_all() == {}
    store.clear()


class FailingStore(InMemoryCartStore):
    """Store whose writes always fail, as a full disk would."""

    def set(self, name, quantity):
        raise OSError("disk full")

    def clear(self):
        raise OSError("disk full")


def test_failed_store_write_leaves_cart_unchanged(bakery):
    cart = ShoppingCart(FailingStore())
    with pytest.raises(OSError):
        cart.add("Cookie", 3)
    assert cart.items() == {}
    assert cart.total(bakery, NO_SALE_DATE) == 0


def test_failed_store_clear_keeps_entries():
    store = FailingStore()
    store._entries["Cookie"] = 3
    cart = ShoppingCart(store)
    cart.load()
    with pytest.raises(OSError):
        cart.clear()
    assert cart.items() == {"Cookie": 3}
    assert cart.items() == store.get_all()
