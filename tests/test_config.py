"""Tests for CuttingConfig."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from panelcut.config import CuttingConfig


class TestCuttingConfig:

    def test_defaults(self) -> None:
        config = CuttingConfig()

        assert (config.panel_width, config.panel_height) == (275, 183)
        assert config.kerf == 0.3
        assert config.min_offcut_size == 1

    def test_zero_kerf_allowed(self) -> None:
        assert CuttingConfig(kerf=0).kerf == 0

    @pytest.mark.parametrize("field,value", [
        ("panel_width", 0),
        ("panel_height", -5),
        ("kerf", -0.1),
        ("min_offcut_size", -1),
    ])
    def test_invalid_values_rejected(self, field, value) -> None:
        with pytest.raises(ValidationError):
            CuttingConfig(**{field: value})

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CuttingConfig(blade="thin")


class TestFromEnv:

    def test_overrides_from_environment(self) -> None:
        config = CuttingConfig.from_env({
            "PANELCUT_PANEL_WIDTH": "244",
            "PANELCUT_KERF": "0.4",
            "UNRELATED": "x",
        })

        assert config.panel_width == 244
        assert config.kerf == 0.4
        assert config.panel_height == 183

    def test_reads_process_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("PANELCUT_PANEL_HEIGHT", "122")

        assert CuttingConfig.from_env().panel_height == 122

    def test_invalid_environment_value(self) -> None:
        with pytest.raises(ValidationError):
            CuttingConfig.from_env({"PANELCUT_KERF": "-1"})
