"""Panelcut - 원판 재단 최적화

Guillotine Cut 자유 공간 트리 기반 원판 재단 최적화 도구
"""

from .config import CuttingConfig
from .cut_sequence import derive_cut_sequence
from .models import (
    CrossCut,
    EdgeBanding,
    Offcut,
    OptimizeResult,
    Panel,
    Piece,
    PlacedPiece,
    RipCut,
    Rotation,
)
from .optimizer import optimize, optimize_with_config
from .strategies import FirstFitTreePacker

__all__ = [
    'CuttingConfig',
    'CrossCut',
    'EdgeBanding',
    'FirstFitTreePacker',
    'Offcut',
    'OptimizeResult',
    'Panel',
    'Piece',
    'PlacedPiece',
    'RipCut',
    'Rotation',
    'derive_cut_sequence',
    'optimize',
    'optimize_with_config',
]
