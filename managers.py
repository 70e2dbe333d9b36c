# managers.py

from __future__ import annotations

import heapq
import itertools
import random
from dataclasses import dataclass, field
from typing import Callable, Optional

from config import BUBBLES_PER_ROUND, ROUND_DURATION_MS, SPEED_CHANGE_FACTOR
from logging_utils import log_line
from simulation import BubbleField


class ScheduledTask:
    def __init__(self, deadline, callback, args):
        self.deadline = deadline
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    @property
    def pending(self):
        return not (self.cancelled or self.fired)


class Scheduler:
    """Deferred callbacks driven by the game clock rather than wall time."""

    def __init__(self):
        self._queue = []
        self._counter = itertools.count()

    def call_later(self, now: float, delay_ms: float, callback: Callable, *args) -> ScheduledTask:
        task = ScheduledTask(now + delay_ms, callback, args)
        heapq.heappush(self._queue, (task.deadline, next(self._counter), task))
        return task

    def run_due(self, now: float) -> int:
        """Fire every pending task whose deadline has passed, earliest first.

        Callbacks receive the firing time as their first argument, so work they
        schedule counts from ``now`` rather than from the missed deadline.
        """
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            task.fired = True
            task.callback(now, *task.args)
            fired += 1
        return fired

    def __len__(self):
        return sum(1 for _, _, task in self._queue if task.pending)


@dataclass
class Round:
    last_update: float
    duration_ms: float = ROUND_DURATION_MS
    speed_change_factor: float = SPEED_CHANGE_FACTOR
    generation: int = 0
    started_at: float = 0.0

    def __post_init__(self):
        if not 0 < self.speed_change_factor < 1:
            raise ValueError(f"speed_change_factor must be in (0, 1), got {self.speed_change_factor}")
        if self.duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive, got {self.duration_ms}")


@dataclass
class Session:
    start_time: float
    end_time: Optional[float] = None
    score: int = 0

    @property
    def is_over(self) -> bool:
        return self.end_time is not None

    def finish(self, now: float) -> bool:
        if self.is_over:
            return False
        self.end_time = now
        return True

    def elapsed_ms(self, now: float) -> float:
        end = self.end_time if self.is_over else now
        return end - self.start_time


@dataclass
class RoundManager:
    """Round/session state machine.

    A round starts with a fresh batch of bubbles and schedules its own end.
    Ending a round credits the survivors and starts the next one. The session
    ends for good on the tick where the last bubble pops.
    """

    session: Session
    round: Round
    bubble_field: BubbleField
    scheduler: Scheduler
    aspect: Callable[[], float] = lambda: 1.0
    bubbles_per_round: int = BUBBLES_PER_ROUND
    rng: Optional[random.Random] = None
    pending_end: Optional[ScheduledTask] = field(default=None, init=False)

    def __post_init__(self):
        if self.bubbles_per_round <= 0:
            raise ValueError(f"bubbles_per_round must be positive, got {self.bubbles_per_round}")

    def start_round(self, now: float) -> bool:
        if self.session.is_over:
            return False
        self.round.generation += 1
        self.round.started_at = now
        self.round.last_update = now
        self.bubble_field.populate(self.aspect(), self.bubbles_per_round, self.rng)
        self.pending_end = self.scheduler.call_later(
            now, self.round.duration_ms, self._on_round_timer, self.round.generation
        )
        log_line(f"RoundManager.start_round generation={self.round.generation} bubbles={len(self.bubble_field)}")
        return True

    def _on_round_timer(self, now: float, generation: int) -> None:
        self.end_round(generation, now)

    def end_round(self, generation: int, now: Optional[float] = None) -> bool:
        if self.session.is_over or generation != self.round.generation:
            log_line(f"RoundManager.end_round ignored generation={generation}")
            return False
        survivors = len(self.bubble_field)
        self.session.score += survivors
        log_line(f"RoundManager.end_round generation={generation} survivors={survivors} score={self.session.score}")
        if now is None:
            now = self.pending_end.deadline if self.pending_end else self.round.last_update
        return self.start_round(now)

    def check_game_over(self, now: float) -> bool:
        if len(self.bubble_field) > 0 or self.session.is_over:
            return False
        self.session.finish(now)
        if self.pending_end is not None:
            self.pending_end.cancel()
        log_line(f"RoundManager game over score={self.session.score} elapsed_ms={self.session.elapsed_ms(now)}")
        return True
