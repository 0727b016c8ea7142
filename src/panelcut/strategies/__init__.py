"""패킹 전략 모듈"""
from .first_fit_tree import FirstFitTreePacker

__all__ = [
    'FirstFitTreePacker',
]
