"""Bubble growth and collision resolution."""

from __future__ import annotations

import random
from itertools import combinations
from typing import Hashable, List, Optional

from config import BUBBLES_PER_ROUND, MAX_SPEED, MIN_SPEED
from entities import Bubble, check_collision
from logging_utils import log_line


class BubbleField:
    """Owns the active bubbles for the current round."""

    def __init__(self, sound=None):
        self.bubbles: List[Bubble] = []
        self.sound = sound

    def __len__(self):
        return len(self.bubbles)

    def __iter__(self):
        return iter(self.bubbles)

    def populate(self, aspect: float, count: int = BUBBLES_PER_ROUND,
                 rng: Optional[random.Random] = None) -> List[Bubble]:
        rng = rng or random
        self.bubbles = [
            Bubble(
                pos=(rng.random() * aspect, rng.random()),
                speed=MIN_SPEED + rng.random() * (MAX_SPEED - MIN_SPEED),
            )
            for _ in range(count)
        ]
        return self.bubbles

    def advance(self, elapsed_ms: float, duration_ms: float) -> None:
        """Grow every bubble linearly with elapsed time and its speed."""
        if elapsed_ms <= 0:
            return
        growth = elapsed_ms / (2.0 * duration_ms)
        for bubble in self.bubbles:
            bubble.radius += bubble.speed * growth

    def detect_and_resolve_collisions(self) -> List[Bubble]:
        """Remove every bubble that overlaps another and return the removed ones.

        The bell rings once per colliding pair; a bubble caught in several
        pairs is removed once.
        """
        popped = {}
        for a, b in combinations(self.bubbles, 2):
            if check_collision(a, b):
                popped[id(a)] = a
                popped[id(b)] = b
                if self.sound is not None:
                    self.sound.play_collision_sound()
        if not popped:
            return []
        self.bubbles = [b for b in self.bubbles if id(b) not in popped]
        log_line(f"BubbleField collisions removed={len(popped)} remaining={len(self.bubbles)}")
        return list(popped.values())

    def hit_test(self, point) -> Optional[Bubble]:
        """First free bubble in collection order containing ``point``."""
        for bubble in self.bubbles:
            if not bubble.held and bubble.contains(point):
                return bubble
        return None

    def find_held(self, pointer_id: Hashable) -> Optional[Bubble]:
        for bubble in self.bubbles:
            if bubble.active_input == pointer_id:
                return bubble
        return None
