"""Terminal primitives consumed by the renderers.

Provides a ``Terminal`` protocol describing the relative-motion primitives
the rendering engine needs, and a concrete ``AnsiTerminal`` that emits ANSI
escape sequences to a text stream.

Every primitive raises :class:`OSError` when the underlying write fails.
Nothing here retries or hides the failure: a renderer that sees an error
can no longer vouch for what is on screen.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

__all__ = [
    "Terminal",
    "AnsiTerminal",
]

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"
_CURSOR_RIGHT_FMT = "\x1b[{}C"
_CURSOR_LEFT_FMT = "\x1b[{}D"
_CLEAR_LINE = "\r\x1b[2K"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Write-only, position-relative terminal operations."""

    def write(self, text: str) -> None:
        """Write *text* at the cursor without a trailing line break."""
        ...

    def write_line(self, text: str) -> None:
        """Write *text*, then move to column 0 of the next line."""
        ...

    def clear_current_line(self) -> None:
        """Erase the cursor's line and return to its column 0."""
        ...

    def clear_preceding_lines(self, n: int) -> None:
        """Erase the *n* lines above the cursor.

        The cursor ends on the topmost erased line, column 0.
        """
        ...

    def move_up(self, n: int) -> None: ...

    def move_down(self, n: int) -> None: ...

    def move_left(self, n: int) -> None: ...

    def move_right(self, n: int) -> None: ...


# ---------------------------------------------------------------------------
# AnsiTerminal implementation
# ---------------------------------------------------------------------------


class AnsiTerminal:
    """Terminal backed by a text stream, ``sys.stdout`` by default.

    Each primitive is flushed immediately so the screen never lags behind
    the renderer's bookkeeping.  When *write_log* is set every chunk sent to
    the stream is also appended to that file, which is handy for replaying
    a session's raw output.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        write_log: str | None = None,
    ) -> None:
        self._stream = stream
        self._write_log_path = write_log or ""

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capture and similar swaps are honoured.
        return self._stream if self._stream is not None else sys.stdout

    # -- text ---------------------------------------------------------------

    def write(self, text: str) -> None:
        self._raw_write(text)

    def write_line(self, text: str) -> None:
        self._raw_write(text + "\r\n")

    # -- clearing -----------------------------------------------------------

    def clear_current_line(self) -> None:
        self._raw_write(_CLEAR_LINE)

    def clear_preceding_lines(self, n: int) -> None:
        if n <= 0:
            return
        out = [_CURSOR_UP_FMT.format(n)]
        for i in range(n):
            out.append(_CLEAR_LINE)
            if i < n - 1:
                out.append(_CURSOR_DOWN_FMT.format(1))
        # Back up to the first erased line.
        if n > 1:
            out.append(_CURSOR_UP_FMT.format(n - 1))
        self._raw_write("".join(out))

    # -- cursor motion ------------------------------------------------------

    def move_up(self, n: int) -> None:
        if n > 0:
            self._raw_write(_CURSOR_UP_FMT.format(n))

    def move_down(self, n: int) -> None:
        if n > 0:
            self._raw_write(_CURSOR_DOWN_FMT.format(n))

    def move_left(self, n: int) -> None:
        if n > 0:
            self._raw_write(_CURSOR_LEFT_FMT.format(n))

    def move_right(self, n: int) -> None:
        if n > 0:
            self._raw_write(_CURSOR_RIGHT_FMT.format(n))

    # -- private: raw write -------------------------------------------------

    def _raw_write(self, data: str) -> None:
        """Write *data* to the stream and flush; errors propagate."""
        stream = self.stream
        stream.write(data)
        stream.flush()

        if self._write_log_path:
            with open(self._write_log_path, "a", encoding="utf-8") as f:
                f.write(data)
