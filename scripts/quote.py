#!/usr/bin/env python
"""
Price a cart from the command line.

Usage:
    python scripts/quote.py Cookie=7 Brownie=4 --date 2021-10-01
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from treat_pricing.cli import main


if __name__ == "__main__":
    sys.exit(main())
