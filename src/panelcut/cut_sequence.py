"""재단 순서 생성 모듈

배치 결과에서 패널 쏘로 재현 가능한 절단 순서를 만든다.
- 1차 절단(RipCut): 같은 y, 같은 높이의 조각들이 이루는 수평 띠
- 2차 절단(CrossCut): 띠 안에서 왼쪽부터 조각을 하나씩 분리
"""

from __future__ import annotations

from .models import CrossCut, Panel, RipCut


def derive_cut_sequence(panel: Panel) -> list[RipCut]:
    """원판의 1차/2차 절단 순서 생성 (순수 함수)

    Args:
        panel: 배치가 끝난 원판

    Returns:
        위에서 아래 순서의 RipCut 리스트
    """
    # (y, 높이)별로 조각 그룹화
    strips = {}
    for piece in panel.pieces:
        key = (piece.y, piece.placed_height)
        if key not in strips:
            strips[key] = []
        strips[key].append(piece)

    rip_cuts = []
    for (y, thickness), pieces_in_strip in sorted(strips.items(), key=lambda item: item[0]):
        ordered = sorted(pieces_in_strip, key=lambda p: p.x)
        rip_cuts.append(RipCut(
            y=y,
            thickness=thickness,
            cross_cuts=tuple(CrossCut(p) for p in ordered)
        ))
    return rip_cuts


def cut_lines(panel: Panel) -> list[dict]:
    """배치 결과를 패널 쏘로 실행 가능한 절단선 목록으로 변환

    원판을 영역 단위로 재귀 분할한다. 각 절단선은 현재 영역을 끝에서 끝까지
    가로지르므로 번호 순서대로 자르면 항상 실행 가능하다.
    - 1차 절단 (H): 어떤 조각도 걸치지 않는 가장 위쪽 조각 하단 경계
    - 2차 절단 (V): 수평 분리가 불가능할 때 가장 왼쪽 조각 오른쪽 경계
    원판/영역 테두리와 겹치는 절단선은 생략한다.

    Raises:
        ValueError: guillotine 절단으로 분리할 수 없는 배치
    """
    lines = []
    cut_order = [1]
    _split_region(list(panel.pieces), 0, 0, panel.width, panel.height, lines, cut_order)
    return lines


def _add_cut(lines, cut_order, direction, position, start, end):
    lines.append({
        'order': cut_order[0],
        'direction': direction,
        'position': position,
        'start': start,
        'end': end
    })
    cut_order[0] += 1


def _split_region(pieces, x0, y0, x1, y1, lines, cut_order):
    """영역 재귀 분할 (글로벌 좌표 유지)"""
    if not pieces:
        return

    # 수평 절단: 위쪽부터, 조각을 가로지르지 않는 하단 경계
    for position in sorted({p.bottom for p in pieces}):
        if position >= y1:
            break
        if any(p.y < position < p.bottom for p in pieces):
            continue
        top = [p for p in pieces if p.bottom <= position]
        bottom = [p for p in pieces if p.bottom > position]
        _add_cut(lines, cut_order, 'H', position, x0, x1)
        _split_region(top, x0, y0, x1, position, lines, cut_order)
        _split_region(bottom, x0, position, x1, y1, lines, cut_order)
        return

    # 수직 절단: 왼쪽부터, 조각을 가로지르지 않는 오른쪽 경계
    for position in sorted({p.right for p in pieces}):
        if position >= x1:
            break
        if any(p.x < position < p.right for p in pieces):
            continue
        left = [p for p in pieces if p.right <= position]
        right = [p for p in pieces if p.right > position]
        _add_cut(lines, cut_order, 'V', position, y0, y1)
        _split_region(left, x0, y0, position, y1, lines, cut_order)
        _split_region(right, position, y0, x1, y1, lines, cut_order)
        return

    if len(pieces) > 1:
        ids = ', '.join(str(p.id) for p in pieces)
        raise ValueError(f"guillotine 절단으로 분리할 수 없는 배치입니다: {ids}")
