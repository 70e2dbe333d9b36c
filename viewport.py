# viewport.py

from __future__ import annotations

from typing import Tuple


class Viewport:
    """Tracks the drawing surface size and the derived scale/aspect."""

    def __init__(self, width: int, height: int):
        self.width = 0
        self.height = 0
        self.scale = 1.0
        self.aspect = 1.0
        self.resize(width, height)

    def resize(self, width: int, height: int) -> None:
        # A minimised window can report a zero height
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.scale = float(self.height)
        self.aspect = self.width / self.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def to_world(self, screen_pos) -> Tuple[float, float]:
        return screen_pos[0] / self.scale, screen_pos[1] / self.scale

    def to_screen(self, world_pos) -> Tuple[float, float]:
        return world_pos[0] * self.scale, world_pos[1] * self.scale
