"""The prompt: buffer state, a terminal, and the renderer that joins them."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from typing import Callable, TextIO, Union

from pi.multiline.config import PromptConfig, RenderMode, load_config
from pi.multiline.gutter import Gutter, GutterFn
from pi.multiline.renderer import FullRenderer, LazyRenderer, Renderer
from pi.multiline.state import Cursor, PreviousDrawState, PromptState
from pi.multiline.terminal import AnsiTerminal, Terminal

__all__ = [
    "MultilinePrompt",
    "MultilinePromptBuilder",
    "create_renderer",
]

logger = logging.getLogger(__name__)


def create_renderer(
    terminal: Terminal,
    gutter: Union[Gutter, GutterFn, None] = None,
    render_mode: RenderMode = RenderMode.LAZY,
) -> Renderer:
    """Build the renderer for *render_mode*."""
    full = FullRenderer(terminal, gutter)
    if render_mode is RenderMode.FULL:
        return full
    return LazyRenderer.wrap(full)


class MultilinePrompt:
    """A multi-line text prompt drawn in place on a terminal.

    The editing layer changes :attr:`buffers` and :attr:`cursor` (or calls
    :meth:`set_text`) and then calls :meth:`redraw`.  One prompt owns one
    renderer; calls must not overlap.

    If a render fails the screen can no longer be trusted, so the next
    :meth:`redraw` clears and repaints everything before going back to the
    configured strategy.
    """

    def __init__(
        self,
        terminal: Terminal | None = None,
        gutter: Union[Gutter, GutterFn, None] = None,
        render_mode: RenderMode | None = None,
        config: PromptConfig | None = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        if render_mode is not None:
            self.config = replace(self.config, render_mode=render_mode)
        self.terminal: Terminal = (
            terminal if terminal is not None else AnsiTerminal(write_log=self.config.write_log)
        )
        self.state = PromptState()
        self.renderer = create_renderer(self.terminal, gutter, self.config.render_mode)
        self._needs_resync = False

    @classmethod
    def builder(cls) -> MultilinePromptBuilder:
        return MultilinePromptBuilder()

    # -- state accessors ----------------------------------------------------

    @property
    def buffers(self) -> list[str]:
        return self.state.buffers

    @buffers.setter
    def buffers(self, value: list[str]) -> None:
        self.state.buffers = value

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @cursor.setter
    def cursor(self, value: Cursor) -> None:
        self.state.cursor = value

    @property
    def draw_state(self) -> PreviousDrawState:
        return self.renderer.draw_state

    @property
    def needs_resync(self) -> bool:
        return self._needs_resync

    def current_line_len(self) -> int:
        return self.state.current_line_len()

    def set_text(self, text: str) -> None:
        """Replace the buffer with *text* and put the cursor at its end."""
        lines = text.split("\n")
        self.state.buffers = lines
        self.state.cursor = Cursor(len(lines) - 1, len(lines[-1]))

    def text(self) -> str:
        return "\n".join(self.state.buffers)

    # -- rendering ----------------------------------------------------------

    def draw(self) -> None:
        self._guarded(self.renderer.draw)

    def clear_draw(self) -> None:
        self._guarded(self.renderer.clear_draw)

    def redraw(self) -> None:
        if self._needs_resync:
            logger.warning("Screen state unknown after a failed render; repainting")
            self._guarded(self._resync)
            return
        self._guarded(self.renderer.redraw)

    def _resync(self, state: PromptState) -> None:
        self.renderer.clear_draw(state)
        self.renderer.draw(state)
        self._needs_resync = False

    def _guarded(self, op: Callable[[PromptState], None]) -> None:
        try:
            op(self.state)
        except OSError:
            self._needs_resync = True
            logger.debug("render failed; draw state is %r", self.renderer.draw_state)
            raise


class MultilinePromptBuilder:
    """Fluent construction of a :class:`MultilinePrompt`."""

    def __init__(self) -> None:
        self._gutter: Union[Gutter, GutterFn, None] = None
        self._render_mode: RenderMode | None = None
        self._terminal: Terminal | None = None
        self._config: PromptConfig | None = None

    def gutter(self, gutter: Union[Gutter, GutterFn]) -> MultilinePromptBuilder:
        self._gutter = gutter
        return self

    def render_mode(self, mode: RenderMode) -> MultilinePromptBuilder:
        self._render_mode = mode
        return self

    def terminal(self, terminal: Terminal) -> MultilinePromptBuilder:
        self._terminal = terminal
        return self

    def config(self, config: PromptConfig) -> MultilinePromptBuilder:
        self._config = config
        return self

    def build(self) -> MultilinePrompt:
        return MultilinePrompt(
            terminal=self._terminal,
            gutter=self._gutter,
            render_mode=self._render_mode,
            config=self._config,
        )

    def build_stream(self, stream: TextIO) -> MultilinePrompt:
        config = self._config if self._config is not None else load_config()
        self._terminal = AnsiTerminal(stream, write_log=config.write_log)
        self._config = config
        return self.build()

    def build_stdout(self) -> MultilinePrompt:
        return self.build_stream(sys.stdout)
