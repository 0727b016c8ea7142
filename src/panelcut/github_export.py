"""GitHub 내보내기 모듈

조각 목록을 비공개 GitHub 저장소의 README.md에 JSON으로 담아 내보낸다.
README의 JSON 블록을 파일로 저장하면 그대로 다시 가져올 수 있다.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Sequence
from datetime import date, datetime

import httpx

from .models import Piece
from .project import dump_project

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"


class GitHubExportError(Exception):
    """GitHub 내보내기 실패

    Attributes:
        auth_failed: 토큰이 잘못되었거나 만료됨 (호출 측에서 저장된 토큰을 지워야 함)
    """

    def __init__(self, message: str, auth_failed: bool = False) -> None:
        super().__init__(message)
        self.auth_failed = auth_failed


def repo_name_for(today: date) -> str:
    return f"proyecto-opticorte-{today.isoformat()}"


def build_readme(pieces: Sequence[Piece]) -> str:
    """프로젝트 JSON을 포함한 README 본문"""
    return (
        "# Proyecto Optimizador de Corte\n\n"
        "Este repositorio fue generado automáticamente por el optimizador de corte de tableros.\n\n"
        "## Datos del Proyecto\n\n"
        "Guarda el siguiente bloque como un fichero `.json` para importarlo de nuevo.\n\n"
        f"```json\n{dump_project(pieces)}\n```\n"
    )


def _encode(text: str) -> str:
    """UTF-8 안전 base64 인코딩"""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def export_to_github(pieces: Sequence[Piece], token: str, *, today: date | None = None,
                     client: httpx.Client | None = None, timeout: float = 10.0) -> str:
    """조각 목록을 새 비공개 저장소로 내보내기

    Args:
        pieces: 내보낼 조각 목록
        token: GitHub 개인 액세스 토큰
        today: 저장소 이름에 쓸 날짜 (기본값: 오늘)
        client: 재사용할 httpx.Client (없으면 새로 생성)
        timeout: 요청 타임아웃 (초)

    Returns:
        생성된 저장소의 html_url

    Raises:
        ValueError: 조각이 없거나 토큰이 비어 있는 경우
        GitHubExportError: GitHub API 호출 실패
    """
    if not pieces:
        raise ValueError("내보낼 조각이 없습니다")
    if not token:
        raise ValueError("GitHub 토큰이 필요합니다")
    if today is None:
        today = date.today()

    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
    }
    own_client = client is None
    if own_client:
        client = httpx.Client(base_url=GITHUB_API, headers=headers, timeout=timeout)

    try:
        return _export(client, headers, pieces, today)
    except httpx.RequestError as e:
        raise GitHubExportError(f"GitHub 연결 실패: {e}") from e
    finally:
        if own_client:
            client.close()


def _export(client: httpx.Client, headers: dict, pieces: Sequence[Piece], today: date) -> str:
    # 1. 사용자 확인
    response = client.get(f"{GITHUB_API}/user", headers=headers)
    if response.status_code == 401:
        raise GitHubExportError("GitHub 토큰이 잘못되었거나 만료되었습니다", auth_failed=True)
    if response.is_error:
        raise GitHubExportError(f"사용자 확인 실패: {response.status_code}")
    owner = response.json()["login"]

    # 2. 저장소 생성
    repo_name = repo_name_for(today)
    response = client.post(f"{GITHUB_API}/user/repos", headers=headers, json={
        "name": repo_name,
        "description": f"Datos del proyecto exportados el {datetime.now():%Y-%m-%d %H:%M}.",
        "private": True,
    })
    if response.status_code == 422:
        raise GitHubExportError(f"저장소 '{repo_name}'이(가) 이미 존재합니다")
    if response.is_error:
        raise GitHubExportError(f"저장소 생성 실패: {response.status_code}")
    html_url = response.json()["html_url"]

    # 3. README.md 작성
    response = client.put(
        f"{GITHUB_API}/repos/{owner}/{repo_name}/contents/README.md",
        headers=headers,
        json={
            "message": "Commit inicial del proyecto",
            "content": _encode(build_readme(pieces)),
        },
    )
    if response.is_error:
        raise GitHubExportError(f"README.md 생성 실패: {response.status_code}")

    logger.info("GitHub 내보내기 완료: %s", html_url)
    return html_url
