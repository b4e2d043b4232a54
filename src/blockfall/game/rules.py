from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    # Indexed by rows cleared in one lock, multiplied by (level + 1)
    line_clear_scores: tuple[int, ...] = (0, 100, 300, 500, 800)
    soft_drop_points: int = 1
    hard_drop_points_per_row: int = 2
    lines_per_level: int = 10
    gravity_step_ms: int = 60
    min_gravity_ms: int = 50

    def __post_init__(self) -> None:
        if self.min_gravity_ms <= 0:
            raise ValueError("min_gravity_ms must be positive")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")

    def score_for_lines(self, lines: int, level: int = 0) -> int:
        if lines <= 0:
            return 0
        base = self.line_clear_scores[min(lines, len(self.line_clear_scores) - 1)]
        return base * (level + 1)

    def level_for_lines(self, lines: int) -> int:
        return lines // self.lines_per_level

    def gravity_for_level(self, level: int, base_ms: int = 800) -> int:
        """Gravity interval in ms per row; never increases with level."""
        return max(self.min_gravity_ms, base_ms - level * self.gravity_step_ms)
