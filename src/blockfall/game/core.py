from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np

from .bag import SevenBag
from .difficulty import Difficulty, DifficultySettings, get_difficulty_settings
from .grid import (
    ClearResult,
    clear_full_rows,
    collides,
    drop_distance,
    empty_grid,
    is_resting,
    merge,
    try_move,
)
from .pieces import FallingPiece, PieceKind, spawn_piece, try_rotate
from .rules import ScoringRules

logger = logging.getLogger(__name__)


def _is_unit_step(value: object) -> bool:
    # bool is an int subclass; floats would end up as grid indices
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        return False
    return value in (-1, 1)


def _is_elapsed_ms(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.integer, np.floating)):
        return False
    return bool(np.isfinite(value)) and value >= 0


class Status(IntEnum):
    PLAYING = 0
    PAUSED = 1
    GAME_OVER = 2


class ClearPhase(IntEnum):
    NONE = 0
    FLASHING = 1


class Outcome(IntEnum):
    """What the event that produced a snapshot did."""

    APPLIED = 0
    BLOCKED = 1  # move/rotate/soft drop could not change the piece
    IGNORED = 2  # gated: not playing, no falling piece or feature disabled
    INVALID_INPUT = 3
    LOCKED = 4  # a piece was merged into the grid


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    HARD_DROP = 5
    NONE = 6
    PAUSE = 7


@dataclass
class GameConfig:
    rows: int = 16
    cols: int = 10
    random_seed: Optional[int] = None
    spawn_x: int = 3
    spawn_y: int = -1
    # When set, a clearing lock pauses in ClearPhase.FLASHING until
    # complete_line_clear() is called
    animate_line_clears: bool = False

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 4:
            raise ValueError(f"grid must be at least 1x4, got {self.rows}x{self.cols}")


@dataclass(frozen=True, eq=False)
class GameState:
    grid: np.ndarray
    falling: Optional[FallingPiece]
    queue: Tuple[PieceKind, ...]
    score: int
    level: int
    lines: int
    best_score: int
    combo: int
    status: Status
    difficulty: Difficulty
    gravity_ms: int
    gravity_acc: float
    lock_delay_ms: int
    lock_acc: Optional[float]
    clearing_rows: Tuple[int, ...] = ()
    clear_phase: ClearPhase = ClearPhase.NONE
    outcome: Outcome = Outcome.APPLIED
    new_best: Optional[int] = None

    @property
    def settings(self) -> DifficultySettings:
        return get_difficulty_settings(self.difficulty)

    @property
    def preview(self) -> Tuple[PieceKind, ...]:
        return self.queue[: self.settings.preview_count]

    @property
    def is_over(self) -> bool:
        return self.status == Status.GAME_OVER

    def ghost(self) -> Optional[FallingPiece]:
        if self.falling is None:
            return None
        return self.falling.shifted(0, drop_distance(self.grid, self.falling))

    def board(self) -> np.ndarray:
        # Overlay the falling piece as negative color codes
        board = np.array(self.grid, dtype=np.int8)
        rows, cols = board.shape
        if self.falling is not None:
            for x, y in self.falling.cells():
                if 0 <= y < rows and 0 <= x < cols:
                    board[y, x] = -int(self.falling.kind)
        return board

    def to_dict(self) -> dict:
        return {
            "grid": self.grid.tolist(),
            "falling": self.falling.to_dict() if self.falling is not None else None,
            "queue": [kind.name for kind in self.queue],
            "score": self.score,
            "level": self.level,
            "lines": self.lines,
            "best_score": self.best_score,
            "combo": self.combo,
            "status": self.status.name,
            "difficulty": self.difficulty.value,
            "gravity_ms": self.gravity_ms,
            "gravity_acc": self.gravity_acc,
            "lock_delay_ms": self.lock_delay_ms,
            "lock_acc": self.lock_acc,
            "clearing_rows": list(self.clearing_rows),
            "clear_phase": self.clear_phase.name,
        }


class BlockFallGame:
    """Game session: owns the randomizer and turns (state, event) into a new state.

    Every public method returns a fresh GameState; the state passed in is
    never modified. Gameplay failures (blocked moves, failed rotations,
    topout) are ordinary values reported through `GameState.outcome` and
    `GameState.status`.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.bag = SevenBag(self.config.random_seed)

    # --- session -----------------------------------------------------------

    def new_game(self, best_score: int = 0, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM) -> GameState:
        difficulty = Difficulty(difficulty)
        settings = get_difficulty_settings(difficulty)
        self.bag.reset()
        piece, queue = self._spawn((), settings.preview_count)
        logger.info("New game on %s (best score %d)", settings.name, best_score)
        return GameState(
            grid=empty_grid(self.config.rows, self.config.cols),
            falling=piece,
            queue=queue,
            score=0,
            level=0,
            lines=0,
            best_score=int(best_score),
            combo=-1,
            status=Status.PLAYING,
            difficulty=difficulty,
            gravity_ms=settings.gravity_ms,
            gravity_acc=0,
            lock_delay_ms=settings.lock_delay_ms,
            lock_acc=None,
        )

    def restart(self, state: GameState) -> GameState:
        return self.new_game(state.best_score, state.difficulty)

    def load_best(self, state: GameState, best: int) -> GameState:
        return replace(state, best_score=int(best), outcome=Outcome.APPLIED, new_best=None)

    def set_difficulty(self, state: GameState, level: Union[Difficulty, str]) -> GameState:
        try:
            difficulty = Difficulty(level)
        except ValueError:
            return self._invalid(state, "set_difficulty", level)
        if state.status != Status.PLAYING:
            return self._ignored(state)
        settings = get_difficulty_settings(difficulty)
        return replace(
            state,
            difficulty=difficulty,
            gravity_ms=self.rules.gravity_for_level(state.level, settings.gravity_ms),
            lock_delay_ms=settings.lock_delay_ms,
            outcome=Outcome.APPLIED,
            new_best=None,
        )

    def pause_toggle(self, state: GameState) -> GameState:
        if state.status == Status.PLAYING:
            return replace(state, status=Status.PAUSED, outcome=Outcome.APPLIED, new_best=None)
        if state.status == Status.PAUSED:
            return replace(state, status=Status.PLAYING, outcome=Outcome.APPLIED, new_best=None)
        return self._ignored(state)

    # --- player input ------------------------------------------------------

    def move(self, state: GameState, dx: int) -> GameState:
        if not _is_unit_step(dx):
            return self._invalid(state, "move", dx)
        if not self._active(state):
            return self._ignored(state)
        piece, moved = try_move(state.grid, state.falling, int(dx), 0)
        return self._shifted(state, piece, moved)

    def rotate(self, state: GameState, direction: int) -> GameState:
        if not _is_unit_step(direction):
            return self._invalid(state, "rotate", direction)
        if not self._active(state):
            return self._ignored(state)
        piece, rotated = try_rotate(state.grid, state.falling, int(direction))
        return self._shifted(state, piece, rotated)

    def soft_drop(self, state: GameState) -> GameState:
        if not self._active(state):
            return self._ignored(state)
        score = state.score + self.rules.soft_drop_points
        piece, moved = try_move(state.grid, state.falling, 0, 1)
        if not moved:
            # Resting: the input is still rewarded and the lock timer runs
            lock_acc = 0 if state.lock_acc is None else state.lock_acc
            return replace(state, score=score, lock_acc=lock_acc, outcome=Outcome.BLOCKED, new_best=None)
        return replace(state, falling=piece, score=score, outcome=Outcome.APPLIED, new_best=None)

    def hard_drop(self, state: GameState) -> GameState:
        if not self._active(state) or not state.settings.hard_drop_enabled:
            return self._ignored(state)
        distance = drop_distance(state.grid, state.falling)
        landed = state.falling.shifted(0, distance)
        score = state.score + distance * self.rules.hard_drop_points_per_row
        return self._lock(replace(state, falling=landed, score=score))

    # --- time --------------------------------------------------------------

    def tick(self, state: GameState, delta_ms: float) -> GameState:
        if not _is_elapsed_ms(delta_ms):
            return self._invalid(state, "tick", delta_ms)
        if not self._active(state):
            return self._ignored(state)
        gravity_acc = state.gravity_acc + delta_ms
        lock_acc = state.lock_acc
        piece = state.falling
        while gravity_acc >= state.gravity_ms:
            gravity_acc -= state.gravity_ms
            piece, moved = try_move(state.grid, piece, 0, 1)
            if not moved:
                # Resting; leave the rest of the accumulator for later ticks
                if lock_acc is None:
                    lock_acc = 0
                break
            lock_acc = None

        if lock_acc is not None:
            lock_acc += delta_ms
            if lock_acc >= state.lock_delay_ms:
                return self._lock(replace(state, falling=piece, gravity_acc=gravity_acc, lock_acc=lock_acc))
        return replace(
            state,
            falling=piece,
            gravity_acc=gravity_acc,
            lock_acc=lock_acc,
            outcome=Outcome.APPLIED,
            new_best=None,
        )

    def complete_line_clear(self, state: GameState) -> GameState:
        """Second phase of an animated line clear: clear, score and respawn."""
        if state.status != Status.PLAYING or state.clear_phase != ClearPhase.FLASHING:
            return self._ignored(state)
        return self._finish_lock(state, clear_full_rows(state.grid))

    def step(self, state: GameState, action: Action) -> GameState:
        handlers: Dict[Action, Callable[[GameState], GameState]] = {
            Action.LEFT: lambda s: self.move(s, -1),
            Action.RIGHT: lambda s: self.move(s, 1),
            Action.ROTATE_CW: lambda s: self.rotate(s, 1),
            Action.ROTATE_CCW: lambda s: self.rotate(s, -1),
            Action.SOFT_DROP: self.soft_drop,
            Action.HARD_DROP: self.hard_drop,
            Action.PAUSE: self.pause_toggle,
        }
        handler = handlers.get(Action(action))
        if handler is None:
            return replace(state, outcome=Outcome.APPLIED, new_best=None)
        return handler(state)

    # --- internals ---------------------------------------------------------

    def _spawn(self, queue: Tuple[PieceKind, ...], preview_count: int) -> Tuple[FallingPiece, Tuple[PieceKind, ...]]:
        pending = list(queue)
        while len(pending) < max(1, preview_count):
            pending.append(self.bag.next())
        kind = pending.pop(0)
        while len(pending) < preview_count:
            pending.append(self.bag.next())
        piece = spawn_piece(kind, self.config.spawn_x, self.config.spawn_y)
        return piece, tuple(pending)

    def _active(self, state: GameState) -> bool:
        return state.status == Status.PLAYING and state.falling is not None

    def _shifted(self, state: GameState, piece: FallingPiece, changed: bool) -> GameState:
        if is_resting(state.grid, piece):
            lock_acc = 0 if state.lock_acc is None else state.lock_acc
        else:
            lock_acc = None
        outcome = Outcome.APPLIED if changed else Outcome.BLOCKED
        return replace(state, falling=piece, lock_acc=lock_acc, outcome=outcome, new_best=None)

    def _ignored(self, state: GameState) -> GameState:
        return replace(state, outcome=Outcome.IGNORED, new_best=None)

    def _invalid(self, state: GameState, event: str, value: object) -> GameState:
        logger.warning("Rejected %s with invalid argument %r", event, value)
        return replace(state, outcome=Outcome.INVALID_INPUT, new_best=None)

    def _lock(self, state: GameState) -> GameState:
        assert state.falling is not None
        grid = merge(state.grid, state.falling)
        result = clear_full_rows(grid)
        logger.debug("Locked %s at (%d, %d)", state.falling.kind.name, state.falling.x, state.falling.y)
        if result.cleared and self.config.animate_line_clears:
            return replace(
                state,
                grid=grid,
                falling=None,
                clearing_rows=result.cleared_rows,
                clear_phase=ClearPhase.FLASHING,
                gravity_acc=0,
                lock_acc=None,
                outcome=Outcome.LOCKED,
                new_best=None,
            )
        return self._finish_lock(state, result)

    def _finish_lock(self, state: GameState, result: ClearResult) -> GameState:
        lines = state.lines + result.cleared
        level = self.rules.level_for_lines(lines)
        score = state.score + self.rules.score_for_lines(result.cleared, level)
        new_best = score if score > state.best_score else None
        settings = state.settings
        if result.cleared:
            logger.debug("Cleared rows %s (level %d, score %d)", list(result.cleared_rows), level, score)

        piece, queue = self._spawn(state.queue, settings.preview_count)
        topout = collides(result.grid, piece)
        if topout:
            logger.info("Game over: score %d, lines %d", score, lines)
        return replace(
            state,
            grid=result.grid,
            falling=None if topout else piece,
            queue=queue,
            score=score,
            level=level,
            lines=lines,
            best_score=max(score, state.best_score),
            combo=state.combo + 1 if result.cleared else -1,
            status=Status.GAME_OVER if topout else state.status,
            gravity_ms=self.rules.gravity_for_level(level, settings.gravity_ms),
            gravity_acc=0,
            lock_acc=None,
            clearing_rows=(),
            clear_phase=ClearPhase.NONE,
            outcome=Outcome.LOCKED,
            new_best=new_best,
        )
