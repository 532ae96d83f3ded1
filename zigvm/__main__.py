"""
Entry point for running the zigvm CLI as a module.

Usage: python -m zigvm [command] [options]
"""

from zigvm.cli.parser import main

if __name__ == "__main__":
    main()
