#!/usr/bin/env python3
"""
Convenience entry point for running drivemapper directly.

Usage: python map_drives.py [command] [options]
"""

from drivemapper.cli.app import app

if __name__ == "__main__":
    app()
