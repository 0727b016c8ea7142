#!/usr/bin/env python3
"""대화형 재단 최적화 CLI"""

from .config import CuttingConfig
from .models import Rotation
from .optimizer import optimize
from .project import ProjectFormatError, make_pieces, read_project
from .summary import panel_statistics, summarize_pieces


SAMPLE_PIECES = [
    # (width, height, count, rotation)
    (80, 31, 2, Rotation.ALLOWED),
    (64.4, 31, 3, Rotation.ALLOWED),
    (37.1, 27, 4, Rotation.NONE),
    (36.9, 64, 2, Rotation.FORCED),
]


def get_number_input(prompt: str, default: float | None = None, allow_zero: bool = False) -> float | None:
    """양수 입력을 받는 헬퍼 함수

    Args:
        prompt: 사용자에게 보여줄 프롬프트 메시지
        default: 기본값 (None이면 필수 입력)
        allow_zero: 0 허용 여부 (톱날 두께용)

    Returns:
        입력받은 값, 또는 에러 시 None
    """
    user_input = input(prompt).strip()

    # 빈 입력 처리
    if user_input == "":
        if default is not None:
            return default
        print("❌ 오류: 값을 입력해주세요.")
        return None

    try:
        value = float(user_input)
    except ValueError:
        print("❌ 오류: 숫자를 입력해주세요.")
        return None

    if value < 0 or (value == 0 and not allow_zero):
        print("❌ 오류: 양수를 입력해주세요.")
        return None
    return value


def sample_pieces():
    pieces = []
    for width, height, count, rotation in SAMPLE_PIECES:
        pieces.extend(make_pieces(width, height, count, rotation=rotation))
    return pieces


def run_interactive(project_path: str | None = None):
    """대화형 CLI 실행

    Args:
        project_path: 프로젝트 JSON 파일 경로 (없으면 예제 조각 사용)
    """
    defaults = CuttingConfig.from_env()

    print("="*60)
    print("원판 재단 최적화 - Guillotine Cut")
    print("="*60)

    if project_path:
        try:
            pieces = read_project(project_path)
        except (OSError, ProjectFormatError) as e:
            print(f"❌ 오류: 프로젝트 파일을 읽을 수 없습니다 - {e}")
            return None
        print(f"✓ 프로젝트 파일: {project_path} (조각 {len(pieces)}개)")
    else:
        pieces = sample_pieces()
        print(f"✓ 예제 조각 {len(pieces)}개 사용")

    # 원판 크기 입력
    panel_width = get_number_input(f"원판 너비 (기본값 {defaults.panel_width:g}): ", default=defaults.panel_width)
    if panel_width is None:
        return None

    panel_height = get_number_input(f"원판 높이 (기본값 {defaults.panel_height:g}): ", default=defaults.panel_height)
    if panel_height is None:
        return None

    print(f"✓ 원판 크기: {panel_width:g}×{panel_height:g}")

    # 톱날 두께 입력
    kerf = get_number_input(f"톱날 두께 (kerf, 기본값 {defaults.kerf:g}): ", default=defaults.kerf, allow_zero=True)
    if kerf is None:
        return None
    print(f"✓ 톱날 두께: {kerf:g}")

    summary = summarize_pieces(pieces)
    print(f"✓ 조각 {summary.total_pieces}개, 엣지 밴딩 {summary.banding_length:g}")

    # 패킹 실행
    result = optimize(pieces, panel_width, panel_height, kerf)

    stats = panel_statistics(result)
    print(f"\n원판 {stats.panels_used}장, 배치 {stats.pieces_placed}개, 사용률 {stats.utilization * 100:.1f}%")
    if stats.pieces_unplaced:
        print(f"⚠️  {stats.pieces_unplaced}개 조각을 배치할 수 없습니다 (원판보다 큼)")

    # 시각화
    from .visualizer import visualize_result
    visualize_result(result)
    return result
