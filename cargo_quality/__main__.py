"""
Main entry point for the cargo-quality package.

This allows the package to be run as a module:
python -m cargo_quality
"""

from .cli.commands import main

if __name__ == '__main__':
    main()
