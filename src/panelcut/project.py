"""프로젝트 파일 모듈 - 조각 목록 생성 / JSON 내보내기 / 가져오기

프로젝트 파일은 조각 레코드의 JSON 배열이다:
[{"id": ..., "width": ..., "height": ...,
  "widthBanding": "none", "heightBanding": "none", "rotation": "allowed"}, ...]
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from .models import EdgeBanding, Panel, Piece, PlacedPiece, Rotation


class ProjectFormatError(ValueError):
    """프로젝트 파일 형식 오류"""


class PieceRecord(BaseModel):
    """프로젝트 파일의 조각 레코드 (필드 이름은 외부 호환 형식)"""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    width_banding: EdgeBanding = Field(default=EdgeBanding.NONE, alias="widthBanding")
    height_banding: EdgeBanding = Field(default=EdgeBanding.NONE, alias="heightBanding")
    rotation: Rotation = Rotation.ALLOWED

    @classmethod
    def from_piece(cls, piece: Piece) -> PieceRecord:
        return cls(
            id=piece.id,
            width=piece.width,
            height=piece.height,
            width_banding=piece.width_banding,
            height_banding=piece.height_banding,
            rotation=piece.rotation,
        )

    def to_piece(self) -> Piece:
        return Piece(
            id=self.id,
            width=self.width,
            height=self.height,
            width_banding=self.width_banding,
            height_banding=self.height_banding,
            rotation=self.rotation,
        )


_records_adapter = TypeAdapter(list[PieceRecord])


def make_pieces(width: float, height: float, quantity: int = 1,
                width_banding: EdgeBanding = EdgeBanding.NONE,
                height_banding: EdgeBanding = EdgeBanding.NONE,
                rotation: Rotation = Rotation.ALLOWED) -> list[Piece]:
    """수량만큼 서로 다른 id를 가진 조각 생성"""
    if quantity < 1:
        raise ValueError(f"수량은 1 이상이어야 합니다: {quantity}")
    return [
        Piece(str(uuid.uuid4()), width, height, width_banding, height_banding, rotation)
        for _ in range(quantity)
    ]


def piece_record(piece: Piece) -> dict:
    return PieceRecord.from_piece(piece).model_dump(mode="json", by_alias=True)


def dump_project(pieces: Sequence[Piece]) -> str:
    """조각 목록을 프로젝트 JSON 문자열로 변환"""
    records = [piece_record(p) for p in pieces]
    return json.dumps(records, indent=2, ensure_ascii=False)


def load_project(text: str) -> list[Piece]:
    """프로젝트 JSON 문자열을 조각 목록으로 변환

    Raises:
        ProjectFormatError: JSON 배열이 아니거나, 레코드가 잘못되었거나, id가 중복된 경우
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ProjectFormatError(f"JSON 형식이 아닙니다: {e}") from e

    if not isinstance(data, list):
        raise ProjectFormatError("파일 형식이 올바르지 않습니다: 조각 배열이 필요합니다")

    try:
        records = _records_adapter.validate_python(data)
    except ValidationError as e:
        raise ProjectFormatError(f"파일 형식이 올바르지 않습니다: {e.error_count()}개 오류") from e

    seen = set()
    for record in records:
        if record.id in seen:
            raise ProjectFormatError(f"조각 id가 중복되었습니다: {record.id}")
        seen.add(record.id)

    return [r.to_piece() for r in records]


def placed_record(placed: PlacedPiece) -> dict:
    """배치된 조각 레코드 (조각 레코드 + x, y, rotated)"""
    record = piece_record(placed.piece)
    record.update(x=placed.x, y=placed.y, rotated=placed.rotated)
    return record


def panel_record(panel: Panel) -> dict:
    """원판 레코드 {width, height, pieces, offcuts}"""
    return {
        "width": panel.width,
        "height": panel.height,
        "pieces": [placed_record(p) for p in panel.pieces],
        "offcuts": [
            {"x": o.x, "y": o.y, "width": o.width, "height": o.height}
            for o in panel.offcuts
        ],
    }


def export_filename(today: date | None = None) -> str:
    """내보내기 파일 이름 (proyecto_corte_YYYY-MM-DD.json)"""
    if today is None:
        today = date.today()
    return f"proyecto_corte_{today.isoformat()}.json"


def save_project(path: str | Path, pieces: Sequence[Piece]) -> Path:
    """프로젝트 파일 저장"""
    path = Path(path)
    path.write_text(dump_project(pieces), encoding="utf-8")
    return path


def read_project(path: str | Path) -> list[Piece]:
    """프로젝트 파일 읽기"""
    return load_project(Path(path).read_text(encoding="utf-8"))
