#!/usr/bin/env python3
"""CLI 진입점 - 서브커맨드 라우팅"""

import logging
import os
import sys


def setup_logging():
    """PANELCUT_LOG_LEVEL이 지정되면 로그 출력"""
    level = os.environ.get("PANELCUT_LOG_LEVEL")
    if level:
        logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s")


def export_sample(output=None):
    """예제 조각으로 프로젝트 파일 생성 (편집 후 다시 불러오기용)"""
    from .interactive import sample_pieces
    from .project import export_filename, save_project

    path = save_project(output or export_filename(), sample_pieces())
    print(f"✓ 프로젝트 파일 저장: {path}")
    return 0


def export_github(project_path):
    """프로젝트 파일을 GitHub 비공개 저장소로 내보내기 (토큰: GITHUB_TOKEN)"""
    from .github_export import GitHubExportError, export_to_github
    from .project import ProjectFormatError, read_project

    token = os.environ.get("GITHUB_TOKEN", "")
    if not token:
        print("❌ 오류: GITHUB_TOKEN 환경 변수를 설정해주세요.")
        return 1

    try:
        pieces = read_project(project_path)
    except (OSError, ProjectFormatError) as e:
        print(f"❌ 오류: 프로젝트 파일을 읽을 수 없습니다 - {e}")
        return 1

    try:
        url = export_to_github(pieces, token)
    except (ValueError, GitHubExportError) as e:
        print(f"❌ 오류: {e}")
        return 1

    print(f"✓ GitHub 저장소 생성: {url}")
    return 0


def main():
    """CLI 진입점

    서브커맨드:
    - (없음): 대화형 재단 계획 (예제 조각)
    - <project.json>: 프로젝트 파일로 재단 계획
    - export [out.json]: 예제 조각으로 프로젝트 파일 생성
    - github <project.json>: 프로젝트 파일을 GitHub로 내보내기
    - web: 웹 서버 시작
    """
    setup_logging()
    args = sys.argv[1:]
    command = args[0] if args else None

    if command == "web":
        from .web import run_server
        run_server()
    elif command == "export":
        sys.exit(export_sample(args[1] if len(args) > 1 else None))
    elif command == "github":
        if len(args) < 2:
            print("사용법: panelcut github <project.json>")
            sys.exit(2)
        sys.exit(export_github(args[1]))
    else:
        from .interactive import run_interactive
        run_interactive(command)


if __name__ == "__main__":
    main()
