"""
Shared API state - the engine and the session cart.
"""
import threading

from ..config.settings import get_settings
from ..data.catalog_loader import load_catalog
from ..engine import PricingEngine
from ..services.cart_service import CsvCartStore, InMemoryCartStore, ShoppingCart


settings = get_settings()

engine = PricingEngine(load_catalog(settings.catalog_path, key=settings.catalog_key))

if settings.cart_store_path:
    cart = ShoppingCart(CsvCartStore(settings.cart_store_path))
    cart.load()
else:
    cart = ShoppingCart(InMemoryCartStore())

cart_lock = threading.Lock()
