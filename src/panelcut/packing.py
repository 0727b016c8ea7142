"""
기본 클래스 모듈
- FreeSpace: 자유 공간 이진 트리 노드 (오른쪽/아래 자식)
- PackingStrategy: 패킹 전략 베이스 클래스 (조각 배치 + 자투리 수집 포함)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence

from .models import Offcut, OptimizeResult, Piece, PlacedPiece

logger = logging.getLogger(__name__)


class FreeSpace:
    """자유 공간 사각형 (이진 트리 노드)

    사용 전: used=False, 자식 없음
    사용 후: used=True, right(조각 오른쪽) / down(조각 아래) 자식 2개
    """
    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.used = False
        self.placed = None  # 사용된 노드에 배치된 (w, h)
        self.right: FreeSpace | None = None
        self.down: FreeSpace | None = None

    def __repr__(self):
        state = 'used' if self.used else 'free'
        return f"FreeSpace({self.x}, {self.y}, {self.width}×{self.height}, {state})"

    @property
    def area(self):
        return self.width * self.height

    def _walk(self) -> Iterator[FreeSpace]:
        """고정된 순회 순서: 자기 자신 → 오른쪽 서브트리 → 아래 서브트리"""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.used:
                # 스택이므로 down을 먼저 넣어야 right를 먼저 방문
                stack.append(node.down)
                stack.append(node.right)

    def locate(self, w, h) -> FreeSpace | None:
        """w×h를 담을 수 있는 첫 번째 빈 노드 (first-fit, 회전 없음)"""
        for node in self._walk():
            if not node.used and node.width >= w and node.height >= h:
                return node
        return None

    def split(self, w, h, kerf=0) -> None:
        """노드를 사용 처리하고 남은 공간을 오른쪽/아래 자식으로 분할

        오른쪽 자식은 조각 높이만큼 (수직 절단 먼저),
        아래 자식은 노드 전체 너비를 가진다.
        """
        self.used = True
        self.placed = (w, h)
        self.right = FreeSpace(
            self.x + w + kerf, self.y,
            max(0, self.width - w - kerf), h
        )
        self.down = FreeSpace(
            self.x, self.y + h + kerf,
            self.width, max(0, self.height - h - kerf)
        )

    def free_leaves(self) -> Iterator[FreeSpace]:
        """사용되지 않은 리프 노드 (면적 0 포함)"""
        for node in self._walk():
            if not node.used:
                yield node

    def kerf_loss(self):
        """톱날로 소실된 면적 합계"""
        loss = 0
        for node in self._walk():
            if node.used:
                w, h = node.placed
                loss += node.area - w * h - node.right.area - node.down.area
        return loss


class PackingStrategy(ABC):
    """패킹 전략 베이스 클래스"""

    def __init__(self, panel_width: float, panel_height: float, kerf: float = 0.3) -> None:
        self.panel_width: float = panel_width
        self.panel_height: float = panel_height
        self.kerf: float = kerf

    @abstractmethod
    def pack(self, pieces: Sequence[Piece]) -> OptimizeResult:
        """조각들을 원판에 배치

        Args:
            pieces: 개별 조각 목록 (수량은 이미 개별 Piece로 확장된 상태)

        Returns:
            OptimizeResult (원판 목록 + 배치 못한 조각 id)
        """
        pass

    def new_tree(self) -> FreeSpace:
        """원판 전체를 덮는 빈 루트 노드"""
        return FreeSpace(0, 0, self.panel_width, self.panel_height)

    def fits_empty_panel(self, piece: Piece) -> bool:
        """빈 원판에 허용된 방향 중 하나로 들어가는지"""
        return any(
            w <= self.panel_width and h <= self.panel_height
            for w, h, _ in piece.rotation.orientations(piece.width, piece.height)
        )

    def place_piece(self, root: FreeSpace, piece: Piece) -> PlacedPiece | None:
        """회전 정책 순서대로 위치를 찾아 배치 (실패 시 트리 변경 없음)"""
        for w, h, rotated in piece.rotation.orientations(piece.width, piece.height):
            node = root.locate(w, h)
            if node is not None:
                node.split(w, h, self.kerf)
                return PlacedPiece(piece, node.x, node.y, rotated)
        return None

    def collect_offcuts(self, root: FreeSpace) -> list[Offcut]:
        """완성된 트리에서 면적이 양수인 빈 리프를 자투리로 수집 (병합 없음)"""
        return [
            Offcut(node.x, node.y, node.width, node.height)
            for node in root.free_leaves()
            if node.width > 0 and node.height > 0
        ]
