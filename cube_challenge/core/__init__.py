# cube_challenge/core/__init__.py
from cube_challenge.core.puzzle_types import Modifier, PuzzleType, UnknownPuzzleType

__all__ = ["Modifier", "PuzzleType", "UnknownPuzzleType"]
