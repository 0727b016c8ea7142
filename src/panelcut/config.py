"""재단 설정 모듈"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "PANELCUT_"

# 기본 원판 크기 (cm)
DEFAULT_PANEL_WIDTH = 275
DEFAULT_PANEL_HEIGHT = 183
DEFAULT_KERF = 0.3


class CuttingConfig(BaseModel):
    """재단 설정

    Attributes:
        panel_width: 원판 너비
        panel_height: 원판 높이
        kerf: 톱날 두께 (조각 사이에서 소실되는 폭)
        min_offcut_size: 자투리 요약에 포함할 최소 변 길이
    """

    model_config = ConfigDict(extra="forbid")

    panel_width: float = Field(default=DEFAULT_PANEL_WIDTH, gt=0)
    panel_height: float = Field(default=DEFAULT_PANEL_HEIGHT, gt=0)
    kerf: float = Field(default=DEFAULT_KERF, ge=0)
    min_offcut_size: float = Field(default=1, ge=0)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> CuttingConfig:
        """PANELCUT_* 환경 변수로 기본값 덮어쓰기

        예: PANELCUT_PANEL_WIDTH=244 PANELCUT_KERF=0.4
        """
        if environ is None:
            environ = dict(os.environ)
        overrides = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                overrides[name] = environ[key]
        return cls.model_validate(overrides)
