"""결과 요약 모듈 - 자투리 목록, 조각 목록, 엣지 밴딩 길이, 원판 통계"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .models import EdgeBanding, OptimizeResult, Panel, Piece, PlacedPiece, Rotation


@dataclass(frozen=True)
class OffcutSummaryItem:
    """같은 크기 자투리 묶음 (width ≤ height로 정규화)"""
    width: float
    height: float
    quantity: int

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class PieceSummaryItem:
    """같은 사양 조각 묶음"""
    width: float
    height: float
    width_banding: EdgeBanding
    height_banding: EdgeBanding
    rotation: Rotation
    quantity: int


@dataclass(frozen=True)
class PieceSummary:
    items: tuple[PieceSummaryItem, ...]
    total_pieces: int
    total_area: float
    banding_length: float


@dataclass(frozen=True)
class PanelStatistics:
    panels_used: int
    pieces_placed: int
    pieces_unplaced: int
    used_area: float
    offcut_area: float
    kerf_loss: float
    utilization: float


def summarize_offcuts(panels: Iterable[Panel], min_size: float = 1) -> list[OffcutSummaryItem]:
    """모든 원판의 자투리를 크기별로 묶어 면적 내림차순 정렬

    너무 작은 자투리(한 변이라도 min_size 미만)는 제외한다.
    """
    groups = {}
    for panel in panels:
        for offcut in panel.offcuts:
            if offcut.width < min_size or offcut.height < min_size:
                continue
            w = min(offcut.width, offcut.height)
            h = max(offcut.width, offcut.height)
            key = (round(w, 1), round(h, 1))
            if key in groups:
                groups[key][2] += 1
            else:
                groups[key] = [w, h, 1]

    items = [OffcutSummaryItem(w, h, qty) for w, h, qty in groups.values()]
    items.sort(key=lambda item: item.area, reverse=True)
    return items


def banding_length(piece: Piece) -> float:
    """조각 1개의 엣지 밴딩 길이 (single=1면, double=2면)"""
    return (piece.width * piece.width_banding.sides
            + piece.height * piece.height_banding.sides)


def summarize_pieces(pieces: Iterable[Piece | PlacedPiece]) -> PieceSummary:
    """조각을 사양별로 묶고 엣지 밴딩 총 길이 계산 (처음 나온 순서 유지)"""
    groups = {}
    total_pieces = 0
    total_area = 0
    total_banding = 0
    for item in pieces:
        piece = item.piece if isinstance(item, PlacedPiece) else item
        key = (piece.width, piece.height, piece.width_banding, piece.height_banding, piece.rotation)
        groups[key] = groups.get(key, 0) + 1
        total_pieces += 1
        total_area += piece.area
        total_banding += banding_length(piece)

    return PieceSummary(
        items=tuple(PieceSummaryItem(*key, quantity=qty) for key, qty in groups.items()),
        total_pieces=total_pieces,
        total_area=total_area,
        banding_length=total_banding,
    )


def panel_statistics(result: OptimizeResult) -> PanelStatistics:
    """원판 사용 통계"""
    panels: Sequence[Panel] = result.panels
    used = sum(p.used_area for p in panels)
    total = sum(p.area for p in panels)
    return PanelStatistics(
        panels_used=len(panels),
        pieces_placed=sum(len(p.pieces) for p in panels),
        pieces_unplaced=len(result.unplaced),
        used_area=used,
        offcut_area=sum(p.offcut_area for p in panels),
        kerf_loss=sum(p.kerf_loss for p in panels),
        utilization=used / total if total else 0.0,
    )
