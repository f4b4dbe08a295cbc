"""Tests for the output system -- stream discipline, debug tracing, colour control."""

from __future__ import annotations

import pytest

from memey.output import OutputManager, _should_disable_color, get_output, reset_output, set_output


class TestStreams:
    def test_print_data_goes_to_stdout(self, capsys) -> None:
        OutputManager(no_color=True).print_data("https://i.imgflip.com/x.jpg")
        captured = capsys.readouterr()
        assert captured.out == "https://i.imgflip.com/x.jpg\n"
        assert captured.err == ""

    def test_diagnostics_go_to_stderr(self, capsys) -> None:
        output = OutputManager(no_color=True)
        output.info("Added: Doge")
        output.warning("careful")
        output.error("No memes found.")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == [
            "Added: Doge",
            "Warning: careful",
            "Error: No memes found.",
        ]

    def test_markup_in_messages_is_not_interpreted(self, capsys) -> None:
        OutputManager().error("[bold]Y U No[/bold]")
        assert "[bold]Y U No[/bold]" in capsys.readouterr().err


class TestFlags:
    def test_debug_only_when_verbose(self, capsys) -> None:
        OutputManager(no_color=True).debug("nope")
        OutputManager(no_color=True, verbose=True).debug("Meme Found: 1")
        assert capsys.readouterr().err == "[debug] Meme Found: 1\n"

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_dumb_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True


class TestGlobalInstance:
    def test_set_and_reset(self) -> None:
        manager = OutputManager(verbose=True)
        set_output(manager)
        assert get_output() is manager
        reset_output()
        assert get_output() is not manager
