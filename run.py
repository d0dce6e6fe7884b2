#!/usr/bin/env python3
"""
Run the Quotes API development server.
"""

from quotes_api.cli import main

if __name__ == "__main__":
    raise SystemExit(main(["serve"]))
