"""pi-multiline: multi-line terminal prompt with diff-based redraw."""

# Configuration
from pi.multiline.config import PromptConfig, RenderMode, load_config

# Gutters
from pi.multiline.gutter import (
    ConstantGutter,
    FunctionGutter,
    Gutter,
    LineNumberGutter,
    SubmitHintGutter,
    as_gutter,
)

# Prompt host
from pi.multiline.prompt import MultilinePrompt, MultilinePromptBuilder, create_renderer

# Rendering engine
from pi.multiline.renderer import (
    CursorOnly,
    Diff,
    FullRedraw,
    FullRenderer,
    LazyRenderer,
    NoChange,
    Renderer,
    SingleLine,
    find_diff,
)

# State
from pi.multiline.state import Cursor, PreviousDrawState, PromptState, PromptView

# Terminal primitives
from pi.multiline.terminal import AnsiTerminal, Terminal

__all__ = [
    # Config
    "PromptConfig",
    "RenderMode",
    "load_config",
    # Gutters
    "Gutter",
    "FunctionGutter",
    "ConstantGutter",
    "LineNumberGutter",
    "SubmitHintGutter",
    "as_gutter",
    # Prompt
    "MultilinePrompt",
    "MultilinePromptBuilder",
    "create_renderer",
    # Renderer
    "Renderer",
    "FullRenderer",
    "LazyRenderer",
    "Diff",
    "NoChange",
    "CursorOnly",
    "SingleLine",
    "FullRedraw",
    "find_diff",
    # State
    "Cursor",
    "PreviousDrawState",
    "PromptState",
    "PromptView",
    # Terminal
    "Terminal",
    "AnsiTerminal",
]
