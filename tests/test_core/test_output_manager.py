"""Tests for the stdout/stderr discipline of OutputManager."""

from __future__ import annotations

import json

import pytest

from authacquire.output import OutputFormat, OutputManager, error, get_output, info


class TestDataOutput:
    def test_print_data_goes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_data("Bearer abc")
        captured = capsys.readouterr()
        assert captured.out == "Bearer abc\n"
        assert captured.err == ""

    def test_json_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = OutputManager(format=OutputFormat.JSON, no_color=True)
        output.print_table(["type", "acquirer"], [["basic", "BasicAcquirer"]])
        assert json.loads(capsys.readouterr().out) == [
            {"type": "basic", "acquirer": "BasicAcquirer"}
        ]

    def test_plain_table_is_tsv(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        output.print_table(["name", "type"], [["billing", "jwt"]])
        assert capsys.readouterr().out == "name\ttype\nbilling\tjwt\n"

    def test_plain_dict(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).format_response({"name": "p"})
        assert capsys.readouterr().out == "name\tp\n"


class TestDiagnostics:
    def test_messages_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        output.info("fetching")
        output.error("boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "fetching\nError: boom\n"

    def test_quiet_keeps_errors(self, capsys: pytest.CaptureFixture[str]) -> None:
        output = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        output.info("hidden")
        output.suggest("hidden")
        output.warning("shown")
        assert capsys.readouterr().err == "Warning: shown\n"

    def test_debug_requires_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("x")
        OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True).debug("y")
        assert capsys.readouterr().err == "[debug] y\n"

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert OutputManager().format == OutputFormat.PLAIN


class TestGlobalOutput:
    def test_helpers_use_installed_manager(
        self, quiet_output: OutputManager, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert get_output() is quiet_output
        info("hidden")
        error("shown")
        assert capsys.readouterr().err == "Error: shown\n"
