from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .pieces import PieceKind


class SevenBag:
    """Shuffle-then-drain randomizer.

    Every bag-aligned run of seven draws contains each piece kind exactly once.
    The bag belongs to a single game session and is reset with it.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.rng = random.Random(seed)
        self._bag: List[PieceKind] = []

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.seed = seed
        self.rng.seed(self.seed)
        self._bag = []

    def _shuffled(self) -> List[PieceKind]:
        kinds = list(PieceKind)
        # Fisher-Yates driven by a uniform [0, 1) source
        for i in range(len(kinds) - 1, 0, -1):
            j = int(self.rng.random() * (i + 1))
            kinds[i], kinds[j] = kinds[j], kinds[i]
        return kinds

    def next(self) -> PieceKind:
        if not self._bag:
            self._bag = self._shuffled()
        return self._bag.pop()

    @property
    def remaining(self) -> Tuple[PieceKind, ...]:
        return tuple(self._bag)
