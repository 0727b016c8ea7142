"""최적화 진입점

외부(폼 입력, 가져오기, 웹 API)에서 호출하는 함수 모음.
결과는 항상 반환값으로 전달하며, 배치 못한 조각도 예외가 아니라
OptimizeResult.unplaced로 알린다.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .config import CuttingConfig
from .cut_sequence import derive_cut_sequence
from .models import OptimizeResult, Piece
from .strategies import FirstFitTreePacker

logger = logging.getLogger(__name__)

__all__ = ['optimize', 'optimize_with_config', 'derive_cut_sequence']


def _check_preconditions(pieces: Sequence[Piece], panel_width, panel_height, kerf) -> None:
    if panel_width <= 0 or panel_height <= 0:
        raise ValueError(f"원판 크기는 양수여야 합니다: {panel_width}×{panel_height}")
    if kerf < 0:
        raise ValueError(f"톱날 두께는 음수일 수 없습니다: {kerf}")

    seen = set()
    for piece in pieces:
        if piece.id in seen:
            raise ValueError(f"조각 id가 중복되었습니다: {piece.id}")
        seen.add(piece.id)


def optimize(pieces: Sequence[Piece], panel_width: float, panel_height: float,
             kerf: float) -> OptimizeResult:
    """조각들을 원판에 배치

    Args:
        pieces: 개별 조각 목록 (입력 순서가 결과에 영향을 줌)
        panel_width: 원판 너비
        panel_height: 원판 높이
        kerf: 톱날 두께

    Returns:
        OptimizeResult (원판 목록 + 배치 못한 조각 id)

    Raises:
        ValueError: 원판 크기/톱날 두께가 잘못되었거나 조각 id가 중복된 경우
    """
    _check_preconditions(pieces, panel_width, panel_height, kerf)

    logger.info("최적화 시작: 조각 %d개, 원판 %s×%s, kerf %s",
                len(pieces), panel_width, panel_height, kerf)
    packer = FirstFitTreePacker(panel_width, panel_height, kerf)
    result = packer.pack(pieces)
    logger.info("최적화 완료: 원판 %d장, 미배치 %d개", len(result.panels), len(result.unplaced))
    return result


def optimize_with_config(pieces: Sequence[Piece], config: CuttingConfig | None = None) -> OptimizeResult:
    """CuttingConfig 기반 최적화"""
    if config is None:
        config = CuttingConfig()
    return optimize(pieces, config.panel_width, config.panel_height, config.kerf)
