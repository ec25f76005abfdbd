"""Value types shared by the prompt and its renderers.

``Cursor`` and ``PreviousDrawState`` are immutable; a renderer replaces its
draw state wholesale instead of mutating it, so every change is visible at
the single call-site that records it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "Cursor",
    "PreviousDrawState",
    "PromptState",
    "PromptView",
]


@dataclass(frozen=True)
class Cursor:
    """A logical position inside the buffer.

    ``line`` is a 0-based index into the buffer lines and ``index`` is a
    column offset into that line's text.
    """

    line: int = 0
    index: int = 0

    def __post_init__(self) -> None:
        if self.line < 0 or self.index < 0:
            raise ValueError(
                f"cursor coordinates must be non-negative, got {self.line}:{self.index}"
            )

    def with_line(self, line: int) -> Cursor:
        return Cursor(line, self.index)

    def with_index(self, index: int) -> Cursor:
        return Cursor(self.line, index)


@dataclass(frozen=True)
class PreviousDrawState:
    """What the renderer last left on the physical screen.

    The terminal cannot be asked where its cursor is, so this is the only
    record of the drawn block's height and of the physical cursor position.
    ``cursor.index`` is measured from the end of the gutter.
    """

    height: int = 0
    cursor: Cursor = field(default_factory=Cursor)


@dataclass(frozen=True)
class PromptView:
    """Read-only view of a :class:`PromptState` handed to gutters."""

    buffers: tuple[str, ...]
    cursor: Cursor

    def is_empty(self) -> bool:
        return not self.buffers


@dataclass
class PromptState:
    """The text being edited and the logical cursor.

    The editing layer mutates ``buffers`` and ``cursor`` between renders;
    renderers only read them.
    """

    buffers: list[str] = field(default_factory=list)
    cursor: Cursor = field(default_factory=Cursor)

    def current_line_len(self) -> int:
        """Length of the line under the logical cursor (0 if there is none)."""
        if 0 <= self.cursor.line < len(self.buffers):
            return len(self.buffers[self.cursor.line])
        return 0

    def view(self) -> PromptView:
        return PromptView(tuple(self.buffers), self.cursor)
