"""
Entry point for running RustupKit CLI as a module.

Usage: python -m rustupkit [command] [options]
"""

from rustupkit.cli.parser import main

if __name__ == "__main__":
    main()
