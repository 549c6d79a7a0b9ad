"""
Entry point for running ProvisionKit CLI as a module.

Usage: python -m provisionkit [command] [options]
"""

from provisionkit.cli.parser import main

if __name__ == "__main__":
    main()
