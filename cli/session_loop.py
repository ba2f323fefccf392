"""
Interactive screen loop for the storage-demo CLI.

The loop is the interactive context: background table results are drained
from the controller's dispatcher before every prompt.
"""

from concurrent.futures import TimeoutError as TaskTimeout
from typing import Callable, Optional

from storage_platform.services import StorageController

from .interface import print_help, print_permissions, print_screen

# Seconds to wait for a table read before returning to the prompt
DB_LOAD_WAIT = 5.0

_STORAGE_ACTIONS = {
    ("prefs", "save"): "save_prefs",
    ("prefs", "load"): "load_prefs",
    ("internal", "save"): "save_internal",
    ("internal", "load"): "load_internal",
    ("external", "save"): "save_external",
    ("external", "load"): "load_external",
    ("db", "save"): "save_db",
    ("db", "load"): "load_db",
}


def handle_command(controller: StorageController, line: str) -> bool:
    """Apply one console command. Returns False when the user quits."""
    command, _, rest = line.strip().partition(" ")
    command = command.lower()

    if command in ("quit", "exit", "q"):
        return False

    if command in ("type", "text"):
        controller.set_text(rest)
    elif command == "clear":
        controller.clear_text()
    elif command == "show":
        pass
    elif command == "permissions":
        print_permissions(controller.permission_states())
        return True
    elif command in ("help", "?", ""):
        print_help()
        return True
    else:
        action = _STORAGE_ACTIONS.get((command, rest.strip().lower()))
        if action is None:
            print(f"  Unknown command: {line.strip()}  (type 'help')")
            return True
        result = getattr(controller, action)()
        if action == "load_db":
            try:
                result.result(timeout=DB_LOAD_WAIT)
            except TaskTimeout:
                print("  [db load still running; result will appear later]")
            except Exception as e:
                print(f"  [db load failed: {e}]")
        elif action in ("save_internal", "load_internal") and result is False:
            print("  [operation failed; see log]")

    controller.dispatcher.drain()
    print_screen(controller.text)
    return True


def run_interactive_screen(
    controller: StorageController,
    input_fn: Optional[Callable[[str], str]] = None,
):
    """Run the read-eval loop until the user quits or input ends."""
    input_fn = input_fn or input
    print_help()
    print_screen(controller.text)

    while True:
        controller.dispatcher.drain()
        try:
            line = input_fn("\n> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not handle_command(controller, line):
            break
