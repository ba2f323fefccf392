#!/usr/bin/env python3
"""
storage-demo — Web UI

Starts a local web server exposing the storage screen in the browser.
This is an alternative to the console screen (storage-demo.py). Both
interfaces share the same controller and data directory.

Usage:
    python storage-demo-web.py [--port 8000] [--host 127.0.0.1]

Then open http://localhost:8000 in your browser.
"""

from web.__main__ import main

if __name__ == "__main__":
    main()
