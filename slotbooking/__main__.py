"""
Convenience entry point for running slotbooking as a module.

Usage: python -m slotbooking [command] [options]
"""

from .cli.app import app

if __name__ == "__main__":
    app()
