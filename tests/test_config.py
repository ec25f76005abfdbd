"""Tests for pi.multiline.config."""

from __future__ import annotations

import pytest

from pi.multiline.config import PromptConfig, RenderMode, load_config


class TestRenderMode:
    @pytest.mark.parametrize(
        "raw,expected",
        [("full", RenderMode.FULL), ("LAZY", RenderMode.LAZY), (" Full ", RenderMode.FULL)],
    )
    def test_parse(self, raw: str, expected: RenderMode) -> None:
        assert RenderMode.parse(raw) is expected

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="unknown render mode"):
            RenderMode.parse("sometimes")


class TestLoadConfig:
    def test_defaults(self) -> None:
        assert load_config({}) == PromptConfig(RenderMode.LAZY, None)

    def test_render_mode_from_env(self) -> None:
        config = load_config({"PI_MULTILINE_RENDER_MODE": "full"})
        assert config.render_mode is RenderMode.FULL

    def test_write_log_from_env(self) -> None:
        config = load_config({"PI_MULTILINE_WRITE_LOG": "/tmp/out.log"})
        assert config.write_log == "/tmp/out.log"

    def test_reads_os_environ_by_default(self, monkeypatch) -> None:
        monkeypatch.setenv("PI_MULTILINE_RENDER_MODE", "full")
        monkeypatch.delenv("PI_MULTILINE_WRITE_LOG", raising=False)
        assert load_config().render_mode is RenderMode.FULL

    def test_bad_render_mode_raises(self) -> None:
        with pytest.raises(ValueError):
            load_config({"PI_MULTILINE_RENDER_MODE": "nope"})
