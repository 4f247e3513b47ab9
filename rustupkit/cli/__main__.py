"""
Entry point for running RustupKit CLI as a module.

Usage: python -m rustupkit.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
