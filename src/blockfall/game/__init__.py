"""Game module for BlockFall.

Exports the falling-block engine and its supporting pieces:
- grid helpers: collision, merge and full-row clearing on numpy boards
- FallingPiece / PieceKind: tetromino shapes, rotation and wall kicks
- SevenBag: session-owned bag randomizer
- Difficulty / DifficultySettings: the difficulty table
- ScoringRules: score table and gravity curve
- BlockFallGame: the state machine producing immutable GameState snapshots
"""

from .bag import SevenBag
from .core import Action, BlockFallGame, ClearPhase, GameConfig, GameState, Outcome, Status
from .difficulty import DIFFICULTY_SETTINGS, Difficulty, DifficultySettings, get_difficulty_settings
from .grid import ClearResult, clear_full_rows, collides, empty_grid, merge
from .pieces import BASE_SHAPES, KICKS, FallingPiece, PieceKind, rotate_ccw, rotate_cw, spawn_piece, try_rotate
from .rules import ScoringRules

__all__ = [
    "Action",
    "BASE_SHAPES",
    "BlockFallGame",
    "ClearPhase",
    "ClearResult",
    "DIFFICULTY_SETTINGS",
    "Difficulty",
    "DifficultySettings",
    "FallingPiece",
    "GameConfig",
    "GameState",
    "KICKS",
    "Outcome",
    "PieceKind",
    "ScoringRules",
    "SevenBag",
    "Status",
    "clear_full_rows",
    "collides",
    "empty_grid",
    "get_difficulty_settings",
    "merge",
    "rotate_ccw",
    "rotate_cw",
    "spawn_piece",
    "try_rotate",
]
