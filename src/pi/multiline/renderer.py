"""Rendering engine for the multi-line prompt.

Two renderers share the ``Renderer`` protocol:

* :class:`FullRenderer` paints the whole buffer and keeps the
  :class:`~pi.multiline.state.PreviousDrawState` that mirrors the screen.
* :class:`LazyRenderer` wraps a ``FullRenderer``, remembers the lines it
  last painted, and on ``redraw`` repaints only what :func:`find_diff`
  says has changed.

The terminal is write-only and every motion is relative, so all cursor
arithmetic goes through the shadow draw state.  Any ``OSError`` from the
terminal propagates immediately; the draw state then only reflects the
primitives that completed before the failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Protocol, Sequence, Union

from pi.multiline.gutter import Gutter, GutterFn, as_gutter
from pi.multiline.state import Cursor, PreviousDrawState, PromptState, PromptView
from pi.multiline.terminal import Terminal

__all__ = [
    "Renderer",
    "FullRenderer",
    "LazyRenderer",
    "Diff",
    "NoChange",
    "CursorOnly",
    "SingleLine",
    "FullRedraw",
    "find_diff",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Renderer protocol
# ---------------------------------------------------------------------------


class Renderer(Protocol):
    """Something that can paint a :class:`PromptState` onto a terminal."""

    @property
    def draw_state(self) -> PreviousDrawState: ...

    def draw(self, state: PromptState) -> None:
        """Paint the prompt starting at the current cursor position."""
        ...

    def redraw(self, state: PromptState) -> None:
        """Bring the screen up to date with *state*."""
        ...

    def clear_draw(self, state: PromptState) -> None:
        """Erase everything the last draw left on screen."""
        ...


# ---------------------------------------------------------------------------
# FullRenderer
# ---------------------------------------------------------------------------


class FullRenderer:
    """Draws the entire buffer every time.

    Besides the ``Renderer`` operations this class exposes the cursor
    primitives the lazy renderer builds on.  They are the only code that
    moves the shadow cursor, always in step with a terminal call.
    """

    def __init__(
        self,
        terminal: Terminal,
        gutter: Union[Gutter, GutterFn, None] = None,
    ) -> None:
        self.terminal = terminal
        self.gutter = as_gutter(gutter)
        self._draw_state = PreviousDrawState()

    @classmethod
    def with_gutter(
        cls, terminal: Terminal, gutter: Union[Gutter, GutterFn]
    ) -> FullRenderer:
        return cls(terminal, gutter)

    @property
    def draw_state(self) -> PreviousDrawState:
        return self._draw_state

    # -- Renderer protocol --------------------------------------------------

    def draw(self, state: PromptState) -> None:
        buffers = state.buffers

        if not buffers:
            if self.gutter is not None:
                self.terminal.write(self.gutter.render(0, state.view()))
            self._draw_state = replace(self._draw_state, height=1)
            return

        view = state.view()
        last = len(buffers) - 1
        for i in range(len(buffers)):
            self.draw_line(state, i, view)
            if i < last:
                # No line break after the final line.
                self.new_line()

        self._draw_state = PreviousDrawState(
            height=len(buffers),
            cursor=Cursor(last, len(buffers[last])),
        )

        self.draw_cursor(state)

    def clear_draw(self, state: PromptState) -> None:
        self.move_cursor_to_bottom()
        self.terminal.clear_current_line()
        self.terminal.clear_preceding_lines(max(0, self._draw_state.height - 1))
        self._draw_state = PreviousDrawState()

    def redraw(self, state: PromptState) -> None:
        self.clear_draw(state)
        self.draw(state)

    # -- drawing helpers ----------------------------------------------------

    def draw_cursor(self, state: PromptState) -> None:
        """Move the physical cursor to the logical cursor.

        The column is clamped to the line length so a stale index left
        behind by a deletion never runs past the text.
        """
        self.move_cursor_to_line(state.cursor.line)
        self.move_cursor_to_index(min(state.cursor.index, state.current_line_len()))

    def draw_line(
        self, state: PromptState, line: int, view: PromptView | None = None
    ) -> None:
        """Write the gutter and text of *line*.  Does not track the cursor.

        Pass *view* when drawing several lines so the buffer is copied once.
        """
        if self.gutter is not None:
            if view is None:
                view = state.view()
            self.terminal.write(self.gutter.render(line, view))
        self.terminal.write(state.buffers[line])

    def new_line(self) -> None:
        self.terminal.write_line("")

    def record_line_written(self, length: int) -> None:
        """Note that a line of *length* characters was just written."""
        self._draw_state = replace(
            self._draw_state,
            cursor=self._draw_state.cursor.with_index(length),
        )

    # -- cursor primitives --------------------------------------------------

    def move_cursor_to_bottom(self) -> None:
        pds = self._draw_state
        self.move_cursor_down(max(0, pds.height - pds.cursor.line - 1))

    def move_cursor_to_line(self, line: int) -> None:
        current = self._draw_state.cursor.line
        if current > line:
            self.move_cursor_up(current - line)
        elif current < line:
            self.move_cursor_down(line - current)

    def move_cursor_to_index(self, index: int) -> None:
        current = self._draw_state.cursor.index
        if index < current:
            self.move_cursor_left(current - index)
        elif index > current:
            self.move_cursor_right(index - current)

    def move_cursor_to_end(self, state: PromptState) -> None:
        """Move to the end of the current line.

        Only valid while the physical cursor is on ``state.cursor.line``.
        """
        self.move_cursor_to_index(state.current_line_len())

    def move_cursor_to_start(self) -> None:
        self.move_cursor_left(self._draw_state.cursor.index)

    def move_cursor_up(self, n: int) -> None:
        if n == 0:
            return
        self.terminal.move_up(n)
        cursor = self._draw_state.cursor
        self._draw_state = replace(self._draw_state, cursor=cursor.with_line(cursor.line - n))

    def move_cursor_down(self, n: int) -> None:
        if n == 0:
            return
        self.terminal.move_down(n)
        cursor = self._draw_state.cursor
        self._draw_state = replace(self._draw_state, cursor=cursor.with_line(cursor.line + n))

    def move_cursor_left(self, n: int) -> None:
        if n == 0:
            return
        self.terminal.move_left(n)
        cursor = self._draw_state.cursor
        self._draw_state = replace(self._draw_state, cursor=cursor.with_index(cursor.index - n))

    def move_cursor_right(self, n: int) -> None:
        if n == 0:
            return
        self.terminal.move_right(n)
        cursor = self._draw_state.cursor
        self._draw_state = replace(self._draw_state, cursor=cursor.with_index(cursor.index + n))


# ---------------------------------------------------------------------------
# Diff classification
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NoChange:
    """Screen already matches the buffer and cursor."""


@dataclass(frozen=True)
class CursorOnly:
    """Text unchanged, only the cursor moved."""


@dataclass(frozen=True)
class SingleLine:
    """Exactly one line differs."""

    line: int


@dataclass(frozen=True)
class FullRedraw:
    """Line count changed or several lines differ."""


Diff = Union[NoChange, CursorOnly, SingleLine, FullRedraw]


def find_diff(
    old: Sequence[str],
    new: Sequence[str],
    drawn_cursor: Cursor,
    cursor: Cursor,
) -> Diff:
    """Classify the change between the painted lines and the buffer.

    Two or more changed lines always escalate to :class:`FullRedraw`, even
    when the edit is a contiguous insertion or deletion.
    """
    if len(old) != len(new):
        return FullRedraw()

    changed = [i for i, (a, b) in enumerate(zip(old, new)) if a != b]

    if not changed:
        if drawn_cursor != cursor:
            return CursorOnly()
        return NoChange()
    if len(changed) == 1:
        return SingleLine(changed[0])
    return FullRedraw()


# ---------------------------------------------------------------------------
# LazyRenderer
# ---------------------------------------------------------------------------


class LazyRenderer:
    """Repaints only what changed since the previous render."""

    def __init__(self, inner: FullRenderer) -> None:
        self.inner = inner
        self._lines: list[str] = []

    @classmethod
    def wrap(cls, renderer: FullRenderer) -> LazyRenderer:
        return cls(renderer)

    @property
    def draw_state(self) -> PreviousDrawState:
        return self.inner.draw_state

    @property
    def lines(self) -> tuple[str, ...]:
        """The buffer lines as they were last painted."""
        return tuple(self._lines)

    # -- Renderer protocol --------------------------------------------------

    def draw(self, state: PromptState) -> None:
        self.inner.draw(state)
        self._lines = list(state.buffers)

    def clear_draw(self, state: PromptState) -> None:
        self._lines = []
        self.inner.clear_draw(state)

    def redraw(self, state: PromptState) -> None:
        diff = find_diff(
            self._lines, state.buffers, self.inner.draw_state.cursor, state.cursor
        )
        logger.debug("redraw: %r", diff)

        match diff:
            case NoChange():
                pass
            case CursorOnly():
                self.inner.draw_cursor(state)
            case SingleLine(line=line):
                self.redraw_line(state, line)
            case FullRedraw():
                self.clear_draw(state)
                self.draw(state)

    # -- single-line repaint ------------------------------------------------

    def redraw_line(self, state: PromptState, line: int) -> None:
        """Repaint *line* in place, then restore the logical cursor."""
        self.inner.move_cursor_to_line(line)
        self.inner.terminal.clear_current_line()
        self.inner.draw_line(state, line)

        text = state.buffers[line]
        self.inner.record_line_written(len(text))
        self._lines[line] = text

        self.inner.draw_cursor(state)
