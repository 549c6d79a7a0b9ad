"""
Entry point for running ProvisionKit CLI as a module.

Usage: python -m provisionkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
