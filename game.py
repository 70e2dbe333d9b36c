# game.py
# ──────────────────────────────────────────────────────────────
# Bubble Pop – one game session
# • Bubbles grow until two touch; both pop
# • Holding a bubble slows its growth
# • Survivors at the end of a round are worth a point each
# • The game ends the moment the last bubble pops
# ──────────────────────────────────────────────────────────────

from __future__ import annotations

import random
from typing import Callable, Optional

import pygame

from config import BUBBLES_PER_ROUND, ROUND_DURATION_MS, SPEED_CHANGE_FACTOR
from input_router import InputRouter
from logging_utils import log_line
from managers import Round, RoundManager, Scheduler, Session
from renderer import render_game
from simulation import BubbleField
from viewport import Viewport


class Game:
    def __init__(self, surface, size, clock: Callable[[], float] = pygame.time.get_ticks,
                 sound=None, round_duration_ms: float = ROUND_DURATION_MS,
                 speed_change_factor: float = SPEED_CHANGE_FACTOR,
                 bubbles_per_round: int = BUBBLES_PER_ROUND,
                 rng: Optional[random.Random] = None):
        self.surface = surface
        self.clock = clock
        now = self.clock()
        log_line(f"Game.__init__ start now={now}")

        self.viewport = Viewport(*size)
        self.session = Session(start_time=now)
        self.round = Round(last_update=now, duration_ms=round_duration_ms,
                           speed_change_factor=speed_change_factor)
        self.bubble_field = BubbleField(sound=sound)
        self.scheduler = Scheduler()
        self.round_manager = RoundManager(
            session=self.session,
            round=self.round,
            bubble_field=self.bubble_field,
            scheduler=self.scheduler,
            aspect=lambda: self.viewport.aspect,
            bubbles_per_round=bubbles_per_round,
            rng=rng,
        )
        self.input_router = InputRouter(self.bubble_field, self.round, self.viewport)

        self.round_manager.start_round(now)

    @property
    def is_over(self) -> bool:
        return self.session.is_over

    # ──────────────────────────────────────────────────────
    # Event handling
    def on_resize(self, width, height):
        self.viewport.resize(width, height)
        log_line(f"Game.on_resize size={self.viewport.size} aspect={self.viewport.aspect:.3f}")

    def handle_event(self, event):
        if event.type == pygame.VIDEORESIZE:
            self.on_resize(event.w, event.h)
        else:
            self.input_router.handle_event(event)

    # ──────────────────────────────────────────────────────
    # Update loop
    def update(self, now):
        # Round-end timers fire between frames, before the bubbles move
        self.scheduler.run_due(now)
        self.bubble_field.advance(now - self.round.last_update, self.round.duration_ms)
        self.round.last_update = now
        self.bubble_field.detect_and_resolve_collisions()
        self.round_manager.check_game_over(now)

    def draw(self, now):
        render_game(self.surface, self.viewport, self.session, self.bubble_field, now)

    def tick(self, now=None):
        if now is None:
            now = self.clock()
        self.update(now)
        self.draw(now)
        return now
