#!/usr/bin/env python3
"""
storage-demo — Console screen

Type text and save/load it through four storage backends: key-value
preferences, an app-private file, a permission-gated shared file and a
single-record database table.

Usage:
    python storage-demo.py [--home DIR] [--api-level N] [screen | permissions ...]

This file is a thin wrapper around the storage_platform package.
For the modular implementation, see the storage_platform/, cli/, and web/ directories.
"""

from cli.commands import main

if __name__ == "__main__":
    main()
