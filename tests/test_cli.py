"""Tests for wayfile.cli — CLI entrypoint and subcommands."""

import sys
import types

import pytest

from wayfile.cli import main
from wayfile.routing.route import Route
from wayfile.routing.router import Router


def _handler() -> str:
    return "ok"


def _make_router(*paths: str, **route_kwargs) -> Router:
    router = Router()
    for path in paths:
        router.add(Route(path=path, handler=_handler, methods=frozenset({"GET"}), **route_kwargs))
    return router


@pytest.fixture
def _fake_routers(monkeypatch: pytest.MonkeyPatch) -> None:
    mod = types.ModuleType("_fake_wayfile_cli")
    mod.router = _make_router("/robots.txt", "/{asset:path:file}")  # type: ignore[attr-defined]
    mod.broken = _make_router("/docs/{n:file}", defaults={"n": "index"})  # type: ignore[attr-defined]
    mod.empty = Router()  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_wayfile_cli", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("command", ["classify", "routes", "check"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0


class TestCLIMissingArgs:
    @pytest.mark.parametrize("command", ["classify", "routes", "check"])
    def test_missing_argument(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command])
        assert exc_info.value.code == 2


class TestCLINoCommand:
    def test_no_command_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "wayfile" in capsys.readouterr().out


class TestClassify:
    def test_verdicts(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["classify", "/a/b/c.txt", "/a/b.d/c", "foo."])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith("'/a/b/c.txt'")
        assert lines[0].endswith("  file")
        assert lines[1].endswith("not-file")
        assert lines[2].endswith("not-file")


@pytest.mark.usefixtures("_fake_routers")
class TestRoutesCommand:
    def test_lists_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_wayfile_cli:router"])
        out = capsys.readouterr().out
        assert "METHOD" in out
        assert "/robots.txt" in out
        assert "/{asset:path:file}" in out
        assert "_handler" in out

    def test_empty_router(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_wayfile_cli:empty"])
        assert "No routes registered." in capsys.readouterr().out

    def test_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_fake_wayfile_cli:missing"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_routers")
class TestCheckCommand:
    def test_warnings_exit_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["check", "_fake_wayfile_cli:router", "--no-color"])
        out = capsys.readouterr().out
        assert "robots.txt" in out
        assert "No errors" in out

    def test_errors_exit_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_fake_wayfile_cli:broken", "--no-color"])
        assert exc_info.value.code == 1
        assert "rejected by constraint 'file'" in capsys.readouterr().out
