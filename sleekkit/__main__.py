"""
Entry point for running SleekKit CLI as a module.

Usage: python -m sleekkit [command] [options]
"""

from sleekkit.cli.parser import main

if __name__ == "__main__":
    main()
