"""
Centralized settings and path configuration for treat pricing.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


PACKAGE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_CATALOG = PACKAGE_DIR / 'data' / 'treats.json'


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    # Walk up from this file to find the project root
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 4 levels up from this file
    return current.parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Catalog document and the top-level array holding its items
    catalog_path: Path
    catalog_key: str = 'treats'

    # Persistent cart contents (None keeps the cart in memory)
    cart_store_path: Optional[Path] = None

    # API server
    api_host: str = '0.0.0.0'
    api_port: int = 8000

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()

        catalog_path = Path(os.environ.get('TREAT_PRICING_CATALOG', DEFAULT_CATALOG))
        cart_env = os.environ.get('TREAT_PRICING_CART')

        return cls(
            project_root=root,
            catalog_path=catalog_path,
            catalog_key=os.environ.get('TREAT_PRICING_CATALOG_KEY', 'treats'),
            cart_store_path=Path(cart_env) if cart_env else None,
            api_port=int(os.environ.get('TREAT_PRICING_PORT', 8000)),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
