"""
Command-line quote tool.

Usage:
    treat-quote Cookie=8 "Key Lime Cheesecake=4" --date 2021-10-01
"""
import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from .config.settings import get_settings
from .data.catalog_loader import load_catalog
from .engine import CatalogValidationError, PricingEngine, ProductNotFoundError


def parse_entry(text: str) -> tuple[str, int]:
    """Parse a NAME=QTY argument."""
    name, sep, qty = text.rpartition('=')
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Expected NAME=QTY, got '{text}'")
    try:
        quantity = int(qty)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Quantity must be an integer in '{text}'")
    if quantity < 0:
        raise argparse.ArgumentTypeError(f"Quantity must be non-negative in '{text}'")
    return name.strip(), quantity


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='treat-quote', description="Price a cart of treats.")
    parser.add_argument('entries', nargs='*', type=parse_entry, metavar='NAME=QTY',
                        help="cart entry; repeating a name replaces its quantity")
    parser.add_argument('--date', type=date.fromisoformat, default=None,
                        help="evaluation date (YYYY-MM-DD), defaults to today")
    parser.add_argument('--catalog', type=Path, default=None, help="catalog JSON file")
    parser.add_argument('--json', action='store_true', help="print the quote as JSON")
    parser.add_argument('--trace', action='store_true', help="print the pricing trace")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    on = args.date or date.today()

    # Last write wins, as in the cart
    cart = dict(args.entries)

    try:
        items = load_catalog(args.catalog or settings.catalog_path, key=settings.catalog_key)
        result = PricingEngine(items).calculate(cart, on)
    except (FileNotFoundError, CatalogValidationError, ProductNotFoundError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(result.to_legacy_dict(), indent=2))
        return 0

    for line in result.lines:
        print(f"  {line.name:<28} x{line.quantity:<4} {line.rule_applied:<5} ${line.extended_price:>8.2f}")
        if args.trace:
            print("    " + line.get_trace_text().replace("\n", "\n    "))
    for warning in result.warnings:
        print(f"  ⚠️  {warning}")
    print(f"Total ({on.isoformat()}): ${result.total:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
