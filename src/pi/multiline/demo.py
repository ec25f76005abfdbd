"""Entry point for pi-multiline-demo.

Replays a short scripted editing session so both render modes can be
watched side by side without an interactive input loop.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from pi.multiline.config import RenderMode, load_config
from pi.multiline.gutter import SubmitHintGutter
from pi.multiline.prompt import MultilinePrompt
from pi.multiline.state import Cursor

logger = logging.getLogger(__name__)


def _script(prompt: MultilinePrompt):
    """Yield after each edit; the caller redraws in between."""
    for ch in "Hello":
        prompt.buffers[-1] += ch
        prompt.cursor = Cursor(0, len(prompt.buffers[0]))
        yield

    prompt.buffers.append("")
    prompt.cursor = Cursor(1, 0)
    yield

    for ch in "multi-line world":
        prompt.buffers[-1] += ch
        prompt.cursor = Cursor(1, len(prompt.buffers[1]))
        yield

    # Walk back into the first line and edit there.
    for index in (4, 3, 2):
        prompt.cursor = Cursor(0, index)
        yield
    prompt.buffers[0] = "HeLLo"
    yield

    prompt.buffers.append("")
    prompt.cursor = Cursor(2, 0)
    yield


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pi-multiline-demo",
        description="Replay a scripted edit session on a multi-line prompt",
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in RenderMode],
        default=None,
        help="Render mode (default: $PI_MULTILINE_RENDER_MODE or lazy)",
    )
    parser.add_argument("--delay", type=float, default=0.08, help="Seconds between edits")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = load_config()
    if args.mode:
        config.render_mode = RenderMode.parse(args.mode)

    print(" >>> Write something cool!")
    prompt = (
        MultilinePrompt.builder()
        .config(config)
        .gutter(SubmitHintGutter())
        .build_stdout()
    )
    prompt.buffers = [""]
    prompt.draw()

    for _ in _script(prompt):
        time.sleep(args.delay)
        prompt.redraw()

    sys.stdout.write("\n")
    logger.info("final text: %r", prompt.text())


if __name__ == "__main__":
    main()
