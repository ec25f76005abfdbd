"""Configuration for the multi-line prompt, read from the environment."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Mapping

__all__ = [
    "RenderMode",
    "PromptConfig",
    "load_config",
]

RENDER_MODE_ENV = "PI_MULTILINE_RENDER_MODE"
WRITE_LOG_ENV = "PI_MULTILINE_WRITE_LOG"


class RenderMode(enum.Enum):
    """How the prompt repaints itself after an edit."""

    FULL = "full"
    LAZY = "lazy"

    @classmethod
    def parse(cls, value: str) -> RenderMode:
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"unknown render mode {value!r} (expected one of: {choices})") from None


@dataclass
class PromptConfig:
    """Prompt settings."""

    render_mode: RenderMode = RenderMode.LAZY
    write_log: str | None = None


def load_config(environ: Mapping[str, str] | None = None) -> PromptConfig:
    """Build a :class:`PromptConfig` from *environ* (``os.environ`` by default)."""
    env = os.environ if environ is None else environ
    config = PromptConfig()

    mode = env.get(RENDER_MODE_ENV, "")
    if mode:
        config.render_mode = RenderMode.parse(mode)

    write_log = env.get(WRITE_LOG_ENV, "")
    if write_log:
        config.write_log = write_log

    return config
