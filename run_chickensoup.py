#!/usr/bin/env python3
"""
Healing Chicken Soup: quick launcher.

Usage:
    python run_chickensoup.py [options]

Run ``python run_chickensoup.py --help`` for full options.
"""

from chickensoup.app import main

if __name__ == "__main__":
    main()
