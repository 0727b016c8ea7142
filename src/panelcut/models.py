"""데이터 모델 모듈
- Piece: 재단할 조각 (수량 1개 = 인스턴스 1개)
- PlacedPiece: 원판 위에 배치된 조각
- Offcut: 재사용 가능한 자투리
- Panel: 원판 1장의 배치 결과
- RipCut / CrossCut: 재단 순서 (1차 절단 / 2차 절단)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EdgeBanding(str, Enum):
    """엣지 밴딩 적용 면 수"""
    NONE = 'none'
    SINGLE = 'single'
    DOUBLE = 'double'

    @property
    def sides(self) -> int:
        return {'none': 0, 'single': 1, 'double': 2}[self.value]


class Rotation(str, Enum):
    """회전 정책

    - NONE: 원래 방향만 (결이 있는 재질)
    - ALLOWED: 원래 방향 먼저, 실패 시 90도 회전
    - FORCED: 90도 회전만
    """
    NONE = 'none'
    ALLOWED = 'allowed'
    FORCED = 'forced'

    def orientations(self, width: float, height: float) -> list[tuple[float, float, bool]]:
        """배치 시도 순서 [(w, h, rotated), ...]"""
        if self is Rotation.NONE:
            return [(width, height, False)]
        if self is Rotation.FORCED:
            return [(height, width, True)]
        return [(width, height, False), (height, width, True)]


@dataclass(frozen=True)
class Piece:
    """재단할 조각 1개

    Attributes:
        id: 조각 고유 식별자 (수량만큼 서로 다른 id)
        width: 너비
        height: 높이
        width_banding: 너비 방향 모서리 밴딩
        height_banding: 높이 방향 모서리 밴딩
        rotation: 회전 정책
    """
    id: str
    width: float
    height: float
    width_banding: EdgeBanding = EdgeBanding.NONE
    height_banding: EdgeBanding = EdgeBanding.NONE
    rotation: Rotation = Rotation.ALLOWED

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"조각 크기는 양수여야 합니다: {self.width}×{self.height}")
        # 문자열로 들어온 경우 enum으로 변환
        object.__setattr__(self, 'width_banding', EdgeBanding(self.width_banding))
        object.__setattr__(self, 'height_banding', EdgeBanding(self.height_banding))
        object.__setattr__(self, 'rotation', Rotation(self.rotation))

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class PlacedPiece:
    """원판 위에 배치된 조각

    x, y는 배치된 방향 기준 좌상단 좌표.
    rotated=True면 너비/높이가 원래 조각과 바뀐 상태.
    """
    piece: Piece
    x: float
    y: float
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("배치 좌표는 음수일 수 없습니다")

    @property
    def id(self) -> str:
        return self.piece.id

    @property
    def placed_width(self) -> float:
        return self.piece.height if self.rotated else self.piece.width

    @property
    def placed_height(self) -> float:
        return self.piece.width if self.rotated else self.piece.height

    @property
    def right(self) -> float:
        return self.x + self.placed_width

    @property
    def bottom(self) -> float:
        return self.y + self.placed_height

    @property
    def area(self) -> float:
        return self.piece.area


@dataclass(frozen=True)
class Offcut:
    """자투리 (재사용 가능한 빈 영역)"""
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass
class Panel:
    """원판 1장

    배치가 끝나면(다음 원판으로 넘어가면) 더 이상 변경하지 않는다.
    """
    width: float
    height: float
    pieces: list[PlacedPiece] = field(default_factory=list)
    offcuts: list[Offcut] = field(default_factory=list)
    kerf_loss: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def used_area(self) -> float:
        return sum(p.area for p in self.pieces)

    @property
    def offcut_area(self) -> float:
        return sum(o.area for o in self.offcuts)

    @property
    def utilization(self) -> float:
        """사용률 (0~1)"""
        return self.used_area / self.area


@dataclass(frozen=True)
class CrossCut:
    """2차 절단 - 띠에서 조각 1개를 분리"""
    piece: PlacedPiece


@dataclass(frozen=True)
class RipCut:
    """1차 절단 - 원판을 가로지르는 띠 하나

    Attributes:
        y: 띠의 위쪽 좌표
        thickness: 띠 두께 (조각 높이)
        cross_cuts: 왼쪽부터 순서대로의 2차 절단
    """
    y: float
    thickness: float
    cross_cuts: tuple[CrossCut, ...] = ()


@dataclass(frozen=True)
class OptimizeResult:
    """최적화 결과

    Attributes:
        panels: 사용한 원판 목록 (순서 유지)
        unplaced: 배치하지 못한 조각 id
        pending: 배치하지 못한 조각 (입력 순서)
    """
    panels: tuple[Panel, ...] = ()
    unplaced: frozenset[str] = frozenset()
    pending: tuple[Piece, ...] = ()

    @property
    def is_complete(self) -> bool:
        return not self.unplaced

    @property
    def unplaced_pieces(self) -> list[Piece]:
        return list(self.pending)

    @property
    def placed_pieces(self) -> list[PlacedPiece]:
        return [p for panel in self.panels for p in panel.pieces]
