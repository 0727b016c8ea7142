"""FastAPI 백엔드 서버 - Panelcut 웹 애플리케이션"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config import CuttingConfig
from ..cut_sequence import derive_cut_sequence
from ..github_export import GitHubExportError, export_to_github
from ..models import EdgeBanding, Piece, Rotation
from ..optimizer import optimize
from ..project import (
    ProjectFormatError,
    dump_project,
    export_filename,
    load_project,
    make_pieces,
    panel_record,
    piece_record,
    placed_record,
)
from ..summary import panel_statistics, summarize_offcuts, summarize_pieces

app = FastAPI(title="Panelcut - 원판 재단 최적화")

# CORS 설정 (개발 환경용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PieceInput(BaseModel):
    """조각 입력 모델

    id가 있으면 저장된 조각 레코드 1개, 없으면 count만큼 새 조각을 만든다.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    count: int = Field(default=1, ge=1)
    width_banding: EdgeBanding = Field(default=EdgeBanding.NONE, alias="widthBanding")
    height_banding: EdgeBanding = Field(default=EdgeBanding.NONE, alias="heightBanding")
    rotation: Rotation = Rotation.ALLOWED


class CuttingRequest(CuttingConfig):
    """재단 요청 모델 (설정 + 조각 목록)

    생략된 설정 값은 /api/config와 같은 PANELCUT_* 기본값을 따른다.
    """
    pieces: list[PieceInput]

    @model_validator(mode="before")
    @classmethod
    def fill_defaults(cls, data):
        if isinstance(data, dict):
            data = {**CuttingConfig.from_env().model_dump(), **data}
        return data


class CuttingResponse(BaseModel):
    """재단 응답 모델"""
    success: bool
    total_pieces: int
    placed_pieces: int
    panels_used: int
    utilization: float
    panels: list[dict]
    unplaced: list[dict]
    cut_sequences: list[list[dict]]
    offcut_summary: list[dict]
    banding_length: float


class ProjectImportRequest(BaseModel):
    """프로젝트 JSON 가져오기 요청"""
    content: str


class ProjectExportRequest(BaseModel):
    """프로젝트 JSON 내보내기 요청"""
    pieces: list[PieceInput]


class GitHubExportRequest(ProjectExportRequest):
    """GitHub 내보내기 요청"""
    token: str


def expand_inputs(inputs: list[PieceInput]) -> list[Piece]:
    """입력 모델을 개별 조각으로 확장"""
    pieces = []
    for item in inputs:
        if item.id is not None:
            if item.count != 1:
                raise HTTPException(status_code=400, detail=f"id가 있는 조각은 수량이 1이어야 합니다: {item.id}")
            pieces.append(Piece(item.id, item.width, item.height,
                                item.width_banding, item.height_banding, item.rotation))
        else:
            pieces.extend(make_pieces(item.width, item.height, item.count,
                                      item.width_banding, item.height_banding, item.rotation))
    return pieces


def export_pieces(inputs: list[PieceInput]) -> list[Piece]:
    """내보낼 조각 목록 (비어 있거나 id가 중복되면 400)"""
    if not inputs:
        raise HTTPException(status_code=400, detail="조각 정보가 없습니다")
    pieces = expand_inputs(inputs)
    seen = set()
    for piece in pieces:
        if piece.id in seen:
            raise HTTPException(status_code=400, detail=f"조각 id가 중복되었습니다: {piece.id}")
        seen.add(piece.id)
    return pieces


def sequence_records(panel) -> list[dict]:
    """원판 1장의 1차/2차 절단 순서 레코드"""
    return [
        {
            "y": rip.y,
            "thickness": rip.thickness,
            "crossCuts": [placed_record(cross.piece) for cross in rip.cross_cuts],
        }
        for rip in derive_cut_sequence(panel)
    ]


@app.get("/api/config", response_model=CuttingConfig)
async def read_config():
    """기본 재단 설정"""
    return CuttingConfig.from_env()


@app.post("/api/cut", response_model=CuttingResponse)
async def calculate_cutting(request: CuttingRequest):
    """재단 계획 계산 API"""
    if not request.pieces:
        raise HTTPException(status_code=400, detail="조각 정보가 없습니다")

    pieces = expand_inputs(request.pieces)
    try:
        result = optimize(pieces, request.panel_width, request.panel_height, request.kerf)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    stats = panel_statistics(result)
    return CuttingResponse(
        success=result.is_complete,
        total_pieces=len(pieces),
        placed_pieces=stats.pieces_placed,
        panels_used=stats.panels_used,
        utilization=stats.utilization,
        panels=[panel_record(p) for p in result.panels],
        unplaced=[{"id": p.id, "width": p.width, "height": p.height} for p in result.unplaced_pieces],
        cut_sequences=[sequence_records(p) for p in result.panels],
        offcut_summary=[
            {"width": item.width, "height": item.height, "quantity": item.quantity}
            for item in summarize_offcuts(result.panels, request.min_offcut_size)
        ],
        banding_length=summarize_pieces(result.placed_pieces).banding_length,
    )


@app.post("/api/project/import")
async def import_project(request: ProjectImportRequest):
    """프로젝트 JSON 검증 및 조각 레코드 반환"""
    try:
        pieces = load_project(request.content)
    except ProjectFormatError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {"pieces": [piece_record(p) for p in pieces]}


@app.post("/api/project/export")
async def export_project(request: ProjectExportRequest):
    """조각 목록을 프로젝트 JSON으로 내보내기"""
    pieces = export_pieces(request.pieces)
    return {"filename": export_filename(), "content": dump_project(pieces)}


@app.post("/api/project/github")
def export_project_to_github(request: GitHubExportRequest):
    """조각 목록을 새 비공개 GitHub 저장소로 내보내기

    토큰이 잘못되면 401 (클라이언트는 저장된 토큰을 지워야 함), 그 외 GitHub 오류는 502.
    """
    pieces = export_pieces(request.pieces)
    try:
        url = export_to_github(pieces, request.token)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except GitHubExportError as e:
        status_code = 401 if e.auth_failed else 502
        raise HTTPException(status_code=status_code, detail=str(e)) from e
    return {"url": url}
