"""
Console rendering and dialogs for the storage-demo CLI.
"""

from typing import Callable, Optional

from storage_platform.models import PermissionDialog


HELP_TEXT = """\
Commands:
  type <text>                  replace the text field
  clear                        empty the text field
  prefs save | prefs load      key-value preferences
  internal save | internal load    app-private file
  external save | external load    shared file (asks for permission)
  db save | db load            single-record database table
  show                         print the text field
  permissions                  print permission status
  help | quit"""


def print_screen(text: str):
    """Print the text field."""
    print("\n" + "-" * 60)
    print(f"  Text: {text}" if text else "  Text: (empty)")
    print("-" * 60)


def print_permissions(states: dict[str, str]):
    print("\nPermissions:")
    for permission, state in states.items():
        print(f"  {permission:<24} {state}")


def print_help():
    print(HELP_TEXT)


class ConsoleDialogPresenter:
    """Presents permission dialogs as console prompts.

    Answers are delivered synchronously, so a whole request cycle completes
    before the gate returns.
    """

    def __init__(self, input_fn: Optional[Callable[[str], str]] = None):
        self._input = input_fn or input

    def present(self, dialog: PermissionDialog, respond: Callable[[bool], None]) -> None:
        print("\n" + "=" * 60)
        print(dialog.title.upper())
        print("=" * 60)
        print(f"  {dialog.message}")

        if dialog.negative_label:
            prompt = f"  (y) {dialog.positive_label} / (n) {dialog.negative_label}? "
        else:
            prompt = f"  (y) {dialog.positive_label} / (n) close? "

        try:
            choice = self._input(prompt).strip().lower()
        except (EOFError, KeyboardInterrupt):
            choice = ""

        respond(choice.startswith("y") or choice == dialog.positive_label.lower())
