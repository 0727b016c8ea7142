"""자유 공간 트리 기반 first-fit 패킹 전략"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models import OptimizeResult, Panel, Piece
from ..packing import FreeSpace, PackingStrategy

logger = logging.getLogger(__name__)


class FirstFitTreePacker(PackingStrategy):
    """원판별 자유 공간 트리에 면적 큰 조각부터 first-fit 배치

    원판 상태: 빈 원판 → 채우는 중 → 닫힘
    - 채우기 시작 시 남은 조각을 면적 내림차순으로 한 번 정렬 (안정 정렬)
    - 현재 순서에서 배치 가능한 첫 조각을 배치하고 처음부터 다시 스캔
    - 한 바퀴 동안 아무것도 배치하지 못하면 원판을 닫음
    - 새 원판에 하나도 배치하지 못하면 원판을 버리고 종료
    """

    def pack(self, pieces: Sequence[Piece]) -> OptimizeResult:
        panels: list[Panel] = []
        pending: tuple[Piece, ...] = tuple(pieces)

        while pending:
            root = self.new_tree()
            panel = Panel(self.panel_width, self.panel_height)

            pending = tuple(sorted(pending, key=lambda p: p.area, reverse=True))
            pending = self._fill(root, panel, pending)

            if not panel.pieces:
                # 빈 원판에도 들어가지 않는 조각만 남음
                break

            self._close(root, panel)
            panels.append(panel)
            logger.debug(
                "원판 %d: 조각 %d개 배치, 남은 조각 %d개, 사용률 %.1f%%",
                len(panels), len(panel.pieces), len(pending), panel.utilization * 100
            )

        left_ids = frozenset(p.id for p in pending)
        if left_ids:
            logger.warning("배치할 수 없는 조각 %d개 (원판 %s×%s)",
                           len(left_ids), self.panel_width, self.panel_height)

        return OptimizeResult(
            panels=tuple(panels),
            unplaced=left_ids,
            pending=tuple(p for p in pieces if p.id in left_ids),
        )

    def _fill(self, root: FreeSpace, panel: Panel, pending: tuple[Piece, ...]) -> tuple[Piece, ...]:
        """배치 가능한 조각이 없을 때까지 채우고 남은 조각 반환"""
        placed_any = True
        while placed_any:
            placed_any = False
            for idx, piece in enumerate(pending):
                placed = self.place_piece(root, piece)
                if placed is None:
                    continue
                panel.pieces.append(placed)
                pending = pending[:idx] + pending[idx + 1:]
                placed_any = True
                break
        return pending

    def _close(self, root: FreeSpace, panel: Panel) -> None:
        """원판 닫기 - 자투리와 톱날 손실 계산"""
        panel.offcuts = self.collect_offcuts(root)
        panel.kerf_loss = root.kerf_loss()
