from backend.models.board import Board
from backend.models.car import Car
from backend.models.puzzle import InvalidPuzzleError, Move, Puzzle, PuzzleDescriptor
from backend.models.rect import Rect
from backend.models.savegame import SaveGameManager
from backend.models.vector import Direction, Vector2D

__all__ = [
    "Board",
    "Car",
    "Direction",
    "InvalidPuzzleError",
    "Move",
    "Puzzle",
    "PuzzleDescriptor",
    "Rect",
    "SaveGameManager",
    "Vector2D",
]
