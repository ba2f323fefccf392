"""
CLI subcommand implementations for the storage-demo system.

Subcommands::

    storage-demo screen [--text T]
    storage-demo permissions status
    storage-demo permissions grant  {write,read,all}
    storage-demo permissions revoke {write,read,all}
    storage-demo permissions reset
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from storage_platform.context import build_context
from storage_platform.models import StoragePermission
from storage_platform.services import StorageController

from .interface import ConsoleDialogPresenter, print_permissions
from .session_loop import run_interactive_screen


PERMISSION_CHOICES = {
    "write": [StoragePermission.WRITE],
    "read": [StoragePermission.READ],
    "all": list(StoragePermission),
}


def _build_context(args):
    home = Path(args.home) if args.home else None
    if args.api_level is not None and args.api_level <= 0:
        print(f"Error: Invalid --api-level {args.api_level}. Expected a positive integer.")
        sys.exit(1)
    return build_context(home=home, api_level=args.api_level)


# ---------------------------------------------------------------------------
# Subcommand: screen
# ---------------------------------------------------------------------------

def cmd_screen(args):
    """Run the interactive storage screen."""
    ctx = _build_context(args)
    controller = StorageController(ctx, ConsoleDialogPresenter())

    print(f"\nstorage-demo — data in {ctx.home}")
    reset = controller.start()
    try:
        reset.result(timeout=5.0)
    except Exception as e:
        print(f"Warning: could not reset the database: {e}")

    if args.text:
        controller.set_text(args.text)

    run_interactive_screen(controller)


# ---------------------------------------------------------------------------
# Subcommand: permissions
# ---------------------------------------------------------------------------

def cmd_permissions(args):
    """Inspect or change the simulated permission grants."""
    ctx = _build_context(args)
    platform = ctx.platform
    action = args.permissions_action

    if action == "grant":
        for permission in PERMISSION_CHOICES[args.permission]:
            platform.grant(permission)
            print(f"  ✓ Granted {permission.value}")
    elif action == "revoke":
        for permission in PERMISSION_CHOICES[args.permission]:
            platform.revoke(permission)
            print(f"  ✓ Revoked {permission.value}")
    elif action == "reset":
        platform.reset()
        print("  ✓ Permission grants and denials cleared.")

    controller = StorageController(ctx, ConsoleDialogPresenter())
    print(f"\nAPI level: {platform.api_level}")
    print_permissions(controller.permission_states())


# ---------------------------------------------------------------------------
# Argument parser and entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="storage-demo",
        description="Save and load text through preferences, files and a database",
    )
    parser.add_argument("--home", help="Data directory (default: platform data dir or STORAGE_DEMO_HOME)")
    parser.add_argument(
        "--api-level", type=int, default=None,
        help="Simulated platform API level (default: STORAGE_DEMO_API_LEVEL or 30)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # --- screen ---
    p_screen = subparsers.add_parser("screen", help="Run the interactive screen (default)")
    p_screen.add_argument("--text", default="", help="Initial text field contents")

    # --- permissions ---
    p_perms = subparsers.add_parser("permissions", help="Manage simulated permissions")
    sp_perms = p_perms.add_subparsers(dest="permissions_action", required=True)

    sp_perms.add_parser("status", help="Show permission status")
    sp_grant = sp_perms.add_parser("grant", help="Grant a permission")
    sp_grant.add_argument("permission", choices=sorted(PERMISSION_CHOICES))
    sp_revoke = sp_perms.add_parser("revoke", help="Revoke a permission")
    sp_revoke.add_argument("permission", choices=sorted(PERMISSION_CHOICES))
    sp_perms.add_parser("reset", help="Forget all grants and denials")

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv=None):
    """Entry point for the CLI."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "permissions":
        cmd_permissions(args)
    else:
        if args.command is None:
            args.text = ""
        cmd_screen(args)
