# entities.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Optional

import numpy as np


@dataclass(eq=False)
class Bubble:
    """A growing circle in normalized surface coordinates.

    ``pos`` is measured in units of the surface height, so ``y`` spans
    ``[0, 1)`` and ``x`` spans ``[0, aspect)``. Bubbles compare by identity.
    """

    pos: np.ndarray
    speed: float
    radius: float = 0.0
    active_input: Optional[Hashable] = field(default=None)
    # Growth rate before the current hold, restored verbatim on release
    free_speed: Optional[float] = field(default=None, repr=False)

    def __post_init__(self):
        self.pos = np.array(self.pos, dtype=float)

    @property
    def held(self) -> bool:
        return self.active_input is not None

    def contains(self, point) -> bool:
        return squared_distance(self.pos, point) < self.radius * self.radius


def squared_distance(a, b) -> float:
    delta = np.asarray(a, dtype=float) - np.asarray(b, dtype=float)
    return float(np.dot(delta, delta))


def check_collision(a: Bubble, b: Bubble) -> bool:
    """Return True if bubbles a and b overlap based on their pos and radius."""
    min_distance = a.radius + b.radius
    return squared_distance(a.pos, b.pos) < min_distance * min_distance
