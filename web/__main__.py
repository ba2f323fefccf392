"""
Entry point for running the web UI as a module.

Usage:
    python -m web [--port 8000] [--host 127.0.0.1] [--home DIR] [--api-level N]
"""

import argparse
import os

import uvicorn

from storage_platform.config import API_LEVEL_ENV, HOME_ENV


def main():
    parser = argparse.ArgumentParser(
        description="storage-demo — Web UI (local browser interface)"
    )
    parser.add_argument(
        "--port", type=int, default=8000,
        help="Port to serve on (default: 8000)"
    )
    parser.add_argument(
        "--host", type=str, default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument("--home", help="Data directory (sets STORAGE_DEMO_HOME)")
    parser.add_argument(
        "--api-level", type=int,
        help="Simulated platform API level (sets STORAGE_DEMO_API_LEVEL)",
    )
    parser.add_argument(
        "--reload", action="store_true",
        help="Enable auto-reload for development"
    )

    args = parser.parse_args()

    # The app is imported by uvicorn, so settings travel through the environment.
    if args.home:
        os.environ[HOME_ENV] = args.home
    if args.api_level is not None:
        os.environ[API_LEVEL_ENV] = str(args.api_level)

    print("\n  storage-demo — Web UI")
    print(f"  Open http://{args.host}:{args.port} in your browser\n")

    uvicorn.run(
        "web.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
