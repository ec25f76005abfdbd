"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

This module provides a ``VirtualTerminal`` class that satisfies the
``pi.multiline.terminal.Terminal`` protocol without performing any real
I/O.  Every primitive call is recorded for assertions, and a small screen
model tracks what would be visible and where the cursor would be.
"""

from __future__ import annotations


class VirtualTerminal:
    """In-memory terminal that records every primitive call.

    Row 0 of the screen model is the row the cursor starts on; rows are
    added as the cursor moves below the last one.

    Parameters
    ----------
    fail_after:
        If set, the primitive call with this 0-based sequence number (and
        every later one) raises ``OSError`` instead of taking effect.
    """

    def __init__(self, fail_after: int | None = None) -> None:
        self.calls: list[tuple] = []
        self.fail_after = fail_after
        self._rows: list[str] = [""]
        self._row = 0
        self._col = 0

    # -- Terminal protocol --------------------------------------------------

    def write(self, text: str) -> None:
        self._record("write", text)
        self._put(text)

    def write_line(self, text: str) -> None:
        self._record("write_line", text)
        self._put(text)
        self._row += 1
        self._col = 0
        self._ensure_row()

    def clear_current_line(self) -> None:
        self._record("clear_current_line")
        self._rows[self._row] = ""
        self._col = 0

    def clear_preceding_lines(self, n: int) -> None:
        self._record("clear_preceding_lines", n)
        if n <= 0:
            return
        if n > self._row:
            raise AssertionError(f"cannot clear {n} lines above row {self._row}")
        for r in range(self._row - n, self._row):
            self._rows[r] = ""
        self._row -= n
        self._col = 0

    def move_up(self, n: int) -> None:
        self._record("move_up", n)
        if n > self._row:
            raise AssertionError(f"cannot move up {n} from row {self._row}")
        self._row -= n

    def move_down(self, n: int) -> None:
        self._record("move_down", n)
        self._row += n
        self._ensure_row()

    def move_left(self, n: int) -> None:
        self._record("move_left", n)
        if n > self._col:
            raise AssertionError(f"cannot move left {n} from column {self._col}")
        self._col -= n

    def move_right(self, n: int) -> None:
        self._record("move_right", n)
        self._col += n

    # -- Test helpers -------------------------------------------------------

    @property
    def screen(self) -> list[str]:
        """Visible rows, without trailing blanks or trailing empty rows."""
        rows = [r.rstrip() for r in self._rows]
        while rows and not rows[-1]:
            rows.pop()
        return rows

    @property
    def position(self) -> tuple[int, int]:
        """Physical cursor as ``(row, column)``."""
        return self._row, self._col

    @property
    def writes(self) -> list[str]:
        """Text passed to ``write`` and ``write_line``, in order."""
        return [c[1] for c in self.calls if c[0] in ("write", "write_line")]

    @property
    def write_count(self) -> int:
        return len(self.calls)

    def non_write_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] not in ("write", "write_line")]

    def clear_calls(self) -> None:
        """Forget recorded calls; the screen model is kept."""
        self.calls.clear()

    # -- internals ----------------------------------------------------------

    def _record(self, name: str, *args: object) -> None:
        if self.fail_after is not None and len(self.calls) >= self.fail_after:
            raise OSError(f"simulated failure in {name}")
        self.calls.append((name, *args))

    def _ensure_row(self) -> None:
        while len(self._rows) <= self._row:
            self._rows.append("")

    def _put(self, text: str) -> None:
        row = self._rows[self._row]
        if len(row) < self._col:
            row = row.ljust(self._col)
        self._rows[self._row] = row[: self._col] + text + row[self._col + len(text) :]
        self._col += len(text)
