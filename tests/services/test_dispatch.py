"""Tests for dry-run rendering, env rendering, and exec."""

from __future__ import annotations

import os

import pytest

from rod.errors import EncodingError, ExecutionFailure
from rod.services.command import BuiltCommand
from rod.services.dispatch import execute, render_command_line, render_env
from tests.conftest import ExecRecorder


class TestRenderCommandLine:
    def test_env_prefix(self) -> None:
        built = BuiltCommand(program="ls", args=["-l"], env={"FOO": "bar"})
        assert render_command_line(built) == "env FOO=bar ls -l"

    def test_no_env(self) -> None:
        built = BuiltCommand(program="grep", args=["foo"])
        assert render_command_line(built) == "grep foo"

    def test_env_order_is_map_order(self) -> None:
        built = BuiltCommand(program="bat", env={"B": "2", "A": "1"})
        assert render_command_line(built) == "env B=2 A=1 bat"

    def test_deterministic(self) -> None:
        built = BuiltCommand(program="delta", args=["--dark", "a"], env={"X": "y", "Z": "w"})
        assert render_command_line(built) == render_command_line(built)

    @pytest.mark.parametrize(
        "built",
        [
            BuiltCommand(program="ls\udcff"),
            BuiltCommand(program="ls", args=["ok", "bad\udc80"]),
            BuiltCommand(program="ls", env={"FOO": "\udcfe"}),
        ],
    )
    def test_unrenderable_value(self, built: BuiltCommand) -> None:
        with pytest.raises(EncodingError):
            render_command_line(built)


class TestRenderEnv:
    def test_export(self) -> None:
        assert render_env({"A": "1", "B": "x y"}) == ["export A=1", "export B=x y"]

    def test_no_export(self) -> None:
        assert render_env({"A": "1"}, export=False) == ["A=1"]

    def test_empty(self) -> None:
        assert render_env({}) == []


class TestExecute:
    def test_layers_env_over_inherited(
        self, exec_recorder: ExecRecorder, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("INHERITED", "yes")
        monkeypatch.setenv("BAT_THEME", "old")
        execute(BuiltCommand(program="bat", args=["-p"], env={"BAT_THEME": "GitHub"}))
        [(file, argv, env)] = exec_recorder.calls
        assert file == "bat"
        assert argv == ["bat", "-p"]
        assert env["INHERITED"] == "yes"
        assert env["BAT_THEME"] == "GitHub"
        assert os.environ["BAT_THEME"] == "old"

    def test_missing_program(self) -> None:
        with pytest.raises(ExecutionFailure) as excinfo:
            execute(BuiltCommand(program="rod-test-no-such-program-4a1f"))
        assert excinfo.value.exit_code == 127

    def test_permission_denied(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def denied(*_args: object) -> None:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(os, "execvpe", denied)
        with pytest.raises(ExecutionFailure, match="Permission denied") as excinfo:
            execute(BuiltCommand(program="./script.sh"))
        assert excinfo.value.exit_code == 126
