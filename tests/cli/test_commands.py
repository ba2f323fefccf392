"""Tests for CLI commands, console dialogs and the screen loop."""

from types import SimpleNamespace

import pytest

from cli.commands import build_parser, cmd_permissions, main
from cli.interface import ConsoleDialogPresenter, print_screen
from cli.session_loop import handle_command, run_interactive_screen
from storage_platform.config import DB_EMPTY_TEXT, EXTERNAL_FILE
from storage_platform.models import PermissionState, StoragePermission
from storage_platform.permission_gate import dialog_for
from storage_platform.services import StorageController


def _answers(*values):
    it = iter(values)
    return lambda prompt: next(it)


def _console_controller(ctx, *answers):
    return StorageController(ctx, ConsoleDialogPresenter(input_fn=_answers(*answers)))


class TestConsoleDialogPresenter:
    def test_yes_accepts(self, capsys):
        prompts = []

        def _input(prompt):
            prompts.append(prompt)
            return "y"

        got = []
        presenter = ConsoleDialogPresenter(input_fn=_input)
        presenter.present(dialog_for(PermissionState.DENIED, StoragePermission.WRITE), got.append)
        assert got == [True]
        assert "We respect your decision" in capsys.readouterr().out
        assert prompts == ["  (y) I changed my mind / (n) Ok? "]

    def test_label_accepts(self):
        got = []
        presenter = ConsoleDialogPresenter(input_fn=_answers("I understand"))
        presenter.present(dialog_for(PermissionState.NEEDS_EXPLANATION, StoragePermission.WRITE), got.append)
        assert got == [True]

    def test_eof_declines(self):
        def _eof(prompt):
            raise EOFError

        got = []
        presenter = ConsoleDialogPresenter(input_fn=_eof)
        presenter.present(dialog_for(PermissionState.NEEDS_REQUEST, StoragePermission.READ), got.append)
        assert got == [False]


class TestHandleCommand:
    def test_type_and_clear(self, storage_ctx, capsys):
        controller = _console_controller(storage_ctx)
        assert handle_command(controller, "type hello world") is True
        assert controller.text == "hello world"
        handle_command(controller, "clear")
        assert controller.text == ""
        assert "Text: (empty)" in capsys.readouterr().out

    def test_prefs_round_trip(self, storage_ctx):
        controller = _console_controller(storage_ctx)
        handle_command(controller, "type remembered")
        handle_command(controller, "prefs save")
        handle_command(controller, "clear")
        handle_command(controller, "prefs load")
        assert controller.text == "Load - remembered"

    def test_external_save_prompts_and_writes(self, storage_ctx):
        controller = _console_controller(storage_ctx, "y")
        handle_command(controller, "type hello")
        handle_command(controller, "external save")
        assert (storage_ctx.external_dir / EXTERNAL_FILE).read_bytes() == b"hello"

    def test_db_load_waits_and_drains(self, storage_ctx):
        controller = _console_controller(storage_ctx)
        handle_command(controller, "db load")
        assert controller.text == DB_EMPTY_TEXT

    def test_db_save_then_load(self, storage_ctx):
        controller = _console_controller(storage_ctx)
        handle_command(controller, "type row")
        task = controller.save_db()
        task.result(timeout=5)
        handle_command(controller, "db load")
        assert controller.text == "Load - row"

    def test_internal_load_failure_is_reported(self, storage_ctx, capsys):
        controller = _console_controller(storage_ctx)
        handle_command(controller, "internal load")
        assert "operation failed" in capsys.readouterr().out

    def test_unknown_command(self, storage_ctx, capsys):
        controller = _console_controller(storage_ctx)
        assert handle_command(controller, "cloud save") is True
        assert "Unknown command" in capsys.readouterr().out

    def test_permissions_listing(self, storage_ctx, capsys):
        controller = _console_controller(storage_ctx)
        handle_command(controller, "permissions")
        out = capsys.readouterr().out
        assert "WRITE_EXTERNAL_STORAGE" in out
        assert "needs_request" in out

    @pytest.mark.parametrize("line", ["quit", "exit", "q"])
    def test_quit(self, storage_ctx, line):
        assert handle_command(_console_controller(storage_ctx), line) is False


class TestInteractiveScreen:
    def test_loop_runs_until_quit(self, storage_ctx):
        controller = _console_controller(storage_ctx)
        run_interactive_screen(
            controller,
            input_fn=_answers("type abc", "internal save", "clear", "internal load", "quit"),
        )
        assert controller.text == "Load - abc"

    def test_loop_stops_on_eof(self, storage_ctx):
        def _eof(prompt):
            raise EOFError

        controller = _console_controller(storage_ctx)
        run_interactive_screen(controller, input_fn=_eof)
        assert controller.text == ""


def test_print_screen_shows_text(capsys):
    print_screen("shown")
    assert "Text: shown" in capsys.readouterr().out


class TestParser:
    def test_no_subcommand_defaults_to_screen(self):
        args = build_parser().parse_args([])
        assert args.command is None

    def test_global_options(self):
        args = build_parser().parse_args(["--home", "/tmp/x", "--api-level", "22", "screen", "--text", "hi"])
        assert args.home == "/tmp/x"
        assert args.api_level == 22
        assert args.text == "hi"

    def test_permission_choice_is_validated(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["permissions", "grant", "camera"])


class TestPermissionsCommand:
    def _args(self, tmp_path, action, permission=None, api_level=None):
        return SimpleNamespace(
            home=str(tmp_path), api_level=api_level,
            permissions_action=action, permission=permission,
        )

    def test_grant_then_status(self, tmp_path, capsys):
        cmd_permissions(self._args(tmp_path, "grant", "write"))
        cmd_permissions(self._args(tmp_path, "status"))
        out = capsys.readouterr().out
        assert "Granted WRITE_EXTERNAL_STORAGE" in out
        assert "WRITE_EXTERNAL_STORAGE   granted" in out

    def test_reset(self, tmp_path, capsys):
        cmd_permissions(self._args(tmp_path, "grant", "all"))
        cmd_permissions(self._args(tmp_path, "reset"))
        out = capsys.readouterr().out
        assert "cleared" in out
        assert out.rstrip().endswith("needs_request")

    def test_invalid_api_level_exits(self, tmp_path):
        with pytest.raises(SystemExit):
            cmd_permissions(self._args(tmp_path, "status", api_level=0))


def test_main_screen_reads_until_eof(tmp_path, monkeypatch, capsys):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    main(["--home", str(tmp_path), "screen", "--text", "start"])
    out = capsys.readouterr().out
    assert f"data in {tmp_path}" in out
    assert "Text: start" in out
