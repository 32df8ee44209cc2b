#!/usr/bin/env python3
"""Entry point for the Portfolio Risk Engine."""

from risk_engine.cli import main

if __name__ == "__main__":
    main()
