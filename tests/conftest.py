"""Pytest configuration and shared fixtures for panelcut tests."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from panelcut.models import EdgeBanding, Panel, Piece, PlacedPiece, Rotation


@pytest.fixture
def make_piece():
    """Factory for pieces with readable ids."""

    def _make(piece_id: str, width: float, height: float,
              rotation: Rotation = Rotation.NONE, **kwargs) -> Piece:
        return Piece(piece_id, width, height, rotation=rotation, **kwargs)

    return _make


@pytest.fixture
def mixed_pieces() -> list[Piece]:
    """A mixed cutting list with every rotation policy and some banding."""
    dimensions = [
        (80, 31, 2, Rotation.ALLOWED),
        (64.4, 31, 3, Rotation.ALLOWED),
        (37.1, 27, 4, Rotation.NONE),
        (36.9, 64, 2, Rotation.FORCED),
        (120, 45, 3, Rotation.NONE),
        (18, 90, 5, Rotation.ALLOWED),
        (200, 60, 2, Rotation.ALLOWED),
        (55, 55, 6, Rotation.FORCED),
    ]
    pieces = []
    for idx, (w, h, count, rotation) in enumerate(dimensions):
        for n in range(count):
            pieces.append(Piece(
                f"p{idx}-{n}", w, h,
                width_banding=EdgeBanding.SINGLE if idx % 2 else EdgeBanding.NONE,
                height_banding=EdgeBanding.DOUBLE if idx % 3 == 0 else EdgeBanding.NONE,
                rotation=rotation,
            ))
    return pieces


@pytest.fixture
def strip_panel(make_piece) -> Panel:
    """Panel with two pieces sharing y=0 and height 50, listed out of x order."""
    a = make_piece("a", 150, 50)
    b = make_piece("b", 100, 50)
    return Panel(300, 200, pieces=[PlacedPiece(b, 150.3, 0), PlacedPiece(a, 0, 0)])
