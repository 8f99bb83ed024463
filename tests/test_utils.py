"""Unit tests for shared utilities (webic.utils).

Tests cover:
- run_command: captured output, exit status, timeout, cwd
- load_json / save_json
- is_newer
- format_duration
- Rich output helpers escape user text
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from webic.utils import (
    clear_screen,
    ensure_dir,
    format_duration,
    is_newer,
    load_json,
    print_error,
    print_warning,
    run_command,
    save_json,
)


# ---------------------------------------------------------------------------
# run_command
# ---------------------------------------------------------------------------


class TestRunCommand:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_captures_stdout(self):
        returncode, stdout, stderr = await run_command("echo hello", capture=True)
        assert returncode == 0
        assert stdout == "hello"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_nonzero_exit(self):
        returncode, _, _ = await run_command("exit 3", capture=True)
        assert returncode == 3

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_argument_list(self, tmp_path: Path):
        returncode, stdout, _ = await run_command(
            [sys.executable, "-c", "import os; print(os.getcwd())"],
            cwd=tmp_path,
            capture=True,
        )
        assert returncode == 0
        assert Path(stdout).resolve() == tmp_path.resolve()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_timeout(self):
        returncode, _, stderr = await run_command(
            [sys.executable, "-c", "import time; time.sleep(10)"],
            timeout=0.5,
            capture=True,
        )
        assert returncode == -1
        assert "timed out" in stderr

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_uncaptured_returns_empty_strings(self):
        returncode, stdout, stderr = await run_command("true")
        assert (returncode, stdout, stderr) == (0, "", "")


# ---------------------------------------------------------------------------
# load_json / save_json
# ---------------------------------------------------------------------------


class TestJsonIO:
    @pytest.mark.unit
    def test_round_trip_keeps_key_order(self, tmp_path: Path):
        data = {"zeta": 1, "alpha": [1, 2], "mid": {"b": True, "a": None}}
        path = tmp_path / "nested" / "data.json"
        save_json(data, path)
        assert list(load_json(path)) == ["zeta", "alpha", "mid"]
        assert load_json(path) == data

    @pytest.mark.unit
    def test_save_format(self, tmp_path: Path):
        path = tmp_path / "data.json"
        save_json({"name": "café"}, path)
        assert path.read_text(encoding="utf-8") == '{\n  "name": "café"\n}\n'

    @pytest.mark.unit
    def test_load_rejects_non_object(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            load_json(path)

    @pytest.mark.unit
    def test_load_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(json.JSONDecodeError):
            load_json(path)

    @pytest.mark.unit
    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


class TestFileHelpers:
    @pytest.mark.unit
    def test_ensure_dir_creates_parents(self, tmp_path: Path):
        created = ensure_dir(tmp_path / "a" / "b")
        assert created.is_dir()
        assert ensure_dir(created) == created

    @pytest.mark.unit
    def test_is_newer_missing_target(self, tmp_path: Path):
        source = tmp_path / "source.txt"
        source.write_text("x", encoding="utf-8")
        assert is_newer(source, tmp_path / "target.txt")

    @pytest.mark.unit
    def test_is_newer_compares_mtime(self, tmp_path: Path):
        source = tmp_path / "source.txt"
        target = tmp_path / "target.txt"
        source.write_text("x", encoding="utf-8")
        target.write_text("x", encoding="utf-8")

        os.utime(source, (1_000, 1_000))
        os.utime(target, (2_000, 2_000))
        assert not is_newer(source, target)

        os.utime(source, (3_000, 3_000))
        assert is_newer(source, target)

    @pytest.mark.unit
    def test_is_newer_same_mtime(self, tmp_path: Path):
        source = tmp_path / "source.txt"
        target = tmp_path / "target.txt"
        source.write_text("x", encoding="utf-8")
        target.write_text("x", encoding="utf-8")
        os.utime(source, (1_000, 1_000))
        os.utime(target, (1_000, 1_000))
        assert not is_newer(source, target)


# ---------------------------------------------------------------------------
# format_duration
# ---------------------------------------------------------------------------


class TestFormatDuration:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0.042, "42ms"),
            (0, "0ms"),
            (-1, "0ms"),
            (3.7, "3.7s"),
            (65.2, "1m 5s"),
            (120, "2m 0s"),
        ],
    )
    def test_format(self, seconds: float, expected: str):
        assert format_duration(seconds) == expected


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestOutputHelpers:
    @pytest.mark.unit
    def test_print_error_escapes_markup(self):
        with patch("webic.utils.console") as console:
            print_error("bad [value] here")
        printed = console.print.call_args[0][0]
        assert "\\[value]" in printed
        assert printed.startswith("\n[red]! ")

    @pytest.mark.unit
    def test_print_warning_escapes_markup(self):
        with patch("webic.utils.console") as console:
            print_warning("careful [bold]")
        assert "\\[bold]" in console.print.call_args[0][0]

    @pytest.mark.unit
    def test_clear_screen_only_on_terminal(self):
        with patch("webic.utils.console") as console:
            console.is_terminal = False
            clear_screen()
            console.clear.assert_not_called()

            console.is_terminal = True
            clear_screen()
            console.clear.assert_called_once()
