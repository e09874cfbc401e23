#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py photo.png 4 -f -c
    python main.py sprites/ 2 --all

Equivalent to ``python -m pixelator`` or the ``pixelator`` console script.
"""

from pixelator.cli import app

if __name__ == "__main__":
    app()
