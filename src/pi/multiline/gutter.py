"""Per-line prefixes drawn before each buffer line.

A gutter is anything with a ``render(line_index, view)`` method returning
the prefix text.  Gutters are called once per drawn line and must be pure:
no state carried between calls and no terminal output of their own.
"""

from __future__ import annotations

from typing import Callable, Protocol, Union, runtime_checkable

from pi.multiline.state import PromptView

__all__ = [
    "Gutter",
    "GutterFn",
    "FunctionGutter",
    "ConstantGutter",
    "LineNumberGutter",
    "SubmitHintGutter",
    "as_gutter",
]

GutterFn = Callable[[int, PromptView], str]


@runtime_checkable
class Gutter(Protocol):
    """Strategy that produces the prefix for one line.

    Every line's prefix must have the same width.  Cursor columns are
    counted from the end of the gutter, and a vertical move keeps the
    physical column, so a wider or narrower prefix on one line shifts the
    cursor on that line.
    """

    def render(self, line_index: int, view: PromptView) -> str: ...


class FunctionGutter:
    """Adapts a plain ``(line_index, view) -> str`` callable."""

    def __init__(self, fn: GutterFn) -> None:
        self._fn = fn

    def render(self, line_index: int, view: PromptView) -> str:
        return self._fn(line_index, view)


class ConstantGutter:
    """The same prefix on every line, e.g. ``"> "``."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix

    def render(self, line_index: int, view: PromptView) -> str:
        return self.prefix


class LineNumberGutter:
    """Right-aligned 1-based line numbers: ``"    3 | "``."""

    def __init__(self, width: int = 5, separator: str = " | ") -> None:
        self.width = width
        self.separator = separator

    def render(self, line_index: int, view: PromptView) -> str:
        return f"{line_index + 1:>{self.width}}{self.separator}"


class SubmitHintGutter:
    """Shows a submit hint where pressing enter would submit the prompt.

    The hint replaces the normal prefix when the buffer is empty, or on the
    last line when that line is empty.  Every other line is delegated to
    *inner*.  Hint and inner prefix are right-aligned to the wider of the
    two so every line's prefix has the same width.
    """

    def __init__(self, hint: str = "enter | ", inner: Gutter | None = None) -> None:
        self.hint = hint
        self.inner = inner if inner is not None else LineNumberGutter()

    def render(self, line_index: int, view: PromptView) -> str:
        prefix = self.inner.render(line_index, view)
        width = max(len(self.hint), len(prefix))
        buffers = view.buffers
        if not buffers or (line_index + 1 == len(buffers) and not buffers[-1]):
            return self.hint.rjust(width)
        return prefix.rjust(width)


def as_gutter(gutter: Union[Gutter, GutterFn, None]) -> Gutter | None:
    """Coerce *gutter* to a :class:`Gutter`.

    Accepts ``None``, an object with a ``render`` method, or a callable.
    """
    if gutter is None:
        return None
    if isinstance(gutter, Gutter):
        return gutter
    if callable(gutter):
        return FunctionGutter(gutter)
    raise TypeError(f"not a gutter: {gutter!r}")
