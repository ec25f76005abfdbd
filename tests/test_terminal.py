"""Tests for pi.multiline.terminal.AnsiTerminal escape output."""

from __future__ import annotations

import io

import pytest

from pi.multiline.terminal import AnsiTerminal


class BrokenStream(io.StringIO):
    def write(self, s: str) -> int:
        raise BrokenPipeError("stdout closed")


def _term() -> tuple[AnsiTerminal, io.StringIO]:
    stream = io.StringIO()
    return AnsiTerminal(stream), stream


class TestText:
    def test_write(self) -> None:
        term, stream = _term()
        term.write("abc")
        assert stream.getvalue() == "abc"

    def test_write_line(self) -> None:
        term, stream = _term()
        term.write_line("abc")
        assert stream.getvalue() == "abc\r\n"


class TestMotion:
    @pytest.mark.parametrize(
        "method,code",
        [("move_up", "A"), ("move_down", "B"), ("move_right", "C"), ("move_left", "D")],
    )
    def test_csi_sequences(self, method: str, code: str) -> None:
        term, stream = _term()
        getattr(term, method)(3)
        assert stream.getvalue() == f"\x1b[3{code}"

    @pytest.mark.parametrize("method", ["move_up", "move_down", "move_left", "move_right"])
    def test_zero_writes_nothing(self, method: str) -> None:
        term, stream = _term()
        getattr(term, method)(0)
        assert stream.getvalue() == ""


class TestClearing:
    def test_clear_current_line(self) -> None:
        term, stream = _term()
        term.clear_current_line()
        assert stream.getvalue() == "\r\x1b[2K"

    def test_clear_preceding_lines_zero(self) -> None:
        term, stream = _term()
        term.clear_preceding_lines(0)
        assert stream.getvalue() == ""

    def test_clear_one_preceding_line(self) -> None:
        term, stream = _term()
        term.clear_preceding_lines(1)
        assert stream.getvalue() == "\x1b[1A\r\x1b[2K"

    def test_clear_three_preceding_lines(self) -> None:
        term, stream = _term()
        term.clear_preceding_lines(3)
        assert stream.getvalue() == (
            "\x1b[3A"
            "\r\x1b[2K\x1b[1B"
            "\r\x1b[2K\x1b[1B"
            "\r\x1b[2K"
            "\x1b[2A"
        )


class TestErrors:
    def test_write_errors_propagate(self) -> None:
        term = AnsiTerminal(BrokenStream())
        with pytest.raises(OSError):
            term.write("x")

    def test_motion_errors_propagate(self) -> None:
        term = AnsiTerminal(BrokenStream())
        with pytest.raises(OSError):
            term.move_up(1)


class TestWriteLog:
    def test_output_is_mirrored(self, tmp_path) -> None:
        log = tmp_path / "writes.log"
        stream = io.StringIO()
        term = AnsiTerminal(stream, write_log=str(log))
        term.write("hi")
        term.move_left(2)
        assert log.read_text(encoding="utf-8") == "hi\x1b[2D"
        assert stream.getvalue() == "hi\x1b[2D"

    def test_defaults_to_stdout(self, capsys) -> None:
        AnsiTerminal().write("to stdout")
        assert capsys.readouterr().out == "to stdout"
