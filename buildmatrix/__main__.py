"""
Entry point for running buildmatrix as a module.

Usage: python -m buildmatrix [command] [options]
"""

from buildmatrix.cli.parser import main

if __name__ == "__main__":
    main()
