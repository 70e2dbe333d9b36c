# renderer.py

from __future__ import annotations

import math
from typing import Dict, Tuple

import pygame

from config import FONT_FAMILY

BACKGROUND = (0, 0, 0)
PLAY_TEXT_COLOR = (0, 80, 120)
GAME_OVER_TEXT_COLOR = (120, 80, 0)
GLOW_COLOR = (255, 255, 255)
HINT_TEXT = "Quick! Prevent bubbles from popping!"


def bubble_color(speed: float) -> Tuple[int, int, int]:
    """Faster bubbles are brighter; a held bubble visibly dims."""
    green = max(0, min(255, math.floor(speed * 120)))
    blue = max(0, min(255, math.floor(speed * 160)))
    return 0, green, blue


def format_seconds(elapsed_ms: float) -> str:
    seconds = math.floor(elapsed_ms / 1000 + 0.5)
    return f"{seconds} second" + ("" if seconds == 1 else "s")


def draw_glow(surface, pos, radius, color, alpha=60):
    """Soft radial glow using an SRCALPHA temp surface."""
    size = max(1, int(radius * 4))
    temp = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(temp, (*color, alpha), (size // 2, size // 2), size // 2)
    surface.blit(temp, (pos[0] - size // 2, pos[1] - size // 2))


class PygameSurface:
    """Draw commands issued by the game, backed by a pygame surface."""

    def __init__(self, surface, font_family: str = FONT_FAMILY, glow: bool = True):
        self.surface = surface
        self.font_family = font_family
        self.glow = glow
        self._fonts: Dict[int, "pygame.font.Font"] = {}

    def _font(self, size: int):
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = pygame.font.SysFont(self.font_family, size)
            self._fonts[size] = font
        return font

    def clear(self, width: int, height: int) -> None:
        self.surface.fill(BACKGROUND, pygame.Rect(0, 0, width, height))

    def draw_filled_circle(self, center, radius, color) -> None:
        if radius <= 0:
            return
        x, y = int(center[0]), int(center[1])
        if radius < 1:
            # Freshly spawned bubbles show as a single dot
            self.surface.set_at((x, y), color)
            return
        # Oversized bubbles still draw; only the glow is skipped once it would
        # dwarf the window
        w, h = self.surface.get_size()
        if self.glow and radius < max(w, h):
            draw_glow(self.surface, (x, y), radius * 0.6, GLOW_COLOR, alpha=40)
        pygame.draw.circle(self.surface, color, (x, y), int(radius))

    def draw_text(self, text: str, position, font_size: int, color) -> None:
        rendered = self._font(font_size).render(text, True, color)
        # Anchored like a canvas "center" aligned fillText: baseline at y
        self.surface.blit(rendered, (position[0] - rendered.get_width() / 2,
                                     position[1] - rendered.get_height()))


def render_game(surface, viewport, session, bubble_field, now) -> None:
    """Issue the draw commands for one frame.

    ``surface`` only needs ``clear``, ``draw_filled_circle`` and
    ``draw_text``; game state is read, never changed.
    """
    surface.clear(viewport.width, viewport.height)
    for bubble in bubble_field:
        surface.draw_filled_circle(
            viewport.to_screen(bubble.pos),
            bubble.radius * viewport.scale,
            bubble_color(bubble.speed),
        )

    half_width = viewport.width / 2
    half_height = viewport.height / 2
    score_text = f"{session.score} points"
    seconds_text = format_seconds(session.elapsed_ms(now))

    if len(bubble_field) > 0:
        font_size = 30
        surface.draw_text(seconds_text, (half_width, font_size), font_size, PLAY_TEXT_COLOR)
        surface.draw_text(score_text, (half_width, 2 * font_size), font_size, PLAY_TEXT_COLOR)
        if session.score == 0:
            surface.draw_text(HINT_TEXT, (half_width, 3 * font_size), font_size // 2, PLAY_TEXT_COLOR)
    else:
        font_size = 50
        surface.draw_text("Game Over", (half_width, half_height), font_size, GAME_OVER_TEXT_COLOR)
        surface.draw_text(seconds_text, (half_width, half_height + font_size), font_size, GAME_OVER_TEXT_COLOR)
        surface.draw_text(score_text, (half_width, half_height + 2 * font_size), font_size, GAME_OVER_TEXT_COLOR)
