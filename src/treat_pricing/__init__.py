"""
Treat Pricing Package

Prices bakery shopping carts against a catalog whose items may carry
bulk-purchase rules and recurring date-based sales.
"""

__version__ = "1.0.0"
