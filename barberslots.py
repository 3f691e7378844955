#!/usr/bin/env python3
"""
Convenience entry point for running barberslots directly.

Usage: python barberslots.py [command] [options]
"""

from barberslots.cli.app import app

if __name__ == "__main__":
    app()
