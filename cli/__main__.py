"""
Entry point for running storage-demo as a module.

Usage:
    python -m cli
    python -m cli screen --text hello
    python -m cli permissions status
    python -m cli --api-level 22 screen
"""

from .commands import main

if __name__ == "__main__":
    main()
