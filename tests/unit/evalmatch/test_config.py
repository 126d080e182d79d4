"""Tests for EvalMatch settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.evalmatch.config import EvalMatchSettings, load_settings


class TestEvalMatchSettings:
    """Test settings defaults and environment overrides."""

    def test_defaults(self) -> None:
        settings = load_settings()
        assert settings.threshold == 1.0
        assert settings.wrap_width == 80
        assert settings.output_excerpt_chars == 500

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVALMATCH_THRESHOLD", "0.8")
        monkeypatch.setenv("EVALMATCH_WRAP_WIDTH", "120")
        settings = load_settings()
        assert settings.threshold == 0.8
        assert settings.wrap_width == 120

    def test_threshold_out_of_range(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EVALMATCH_THRESHOLD", "1.5")
        with pytest.raises(ValidationError):
            EvalMatchSettings()

    def test_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("EVALMATCH_WRAP_WIDTH=40\n")
        monkeypatch.chdir(tmp_path)
        assert load_settings().wrap_width == 40
