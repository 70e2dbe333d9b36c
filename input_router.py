"""Maps mouse and touch input onto bubbles and slows the one being held."""

from __future__ import annotations

from typing import Hashable, NamedTuple, Optional

import pygame

from entities import Bubble
from logging_utils import log_line


class TouchPointer(NamedTuple):
    touch_id: int
    finger_id: int


MOUSE_POINTER = "mouse"
WHEEL_BUTTONS = (4, 5)


def touch_pointer(touch_id: int, finger_id: int) -> TouchPointer:
    # Finger ids restart at zero on every touch device
    return TouchPointer(int(touch_id), int(finger_id))


class InputRouter:
    def __init__(self, bubble_field, round_state, viewport):
        self.bubble_field = bubble_field
        self.round = round_state
        self.viewport = viewport

    def press(self, pointer_id: Hashable, screen_pos) -> Optional[Bubble]:
        """Grab the first free bubble under ``screen_pos`` and slow its growth."""
        if self.bubble_field.find_held(pointer_id) is not None:
            return None
        bubble = self.bubble_field.hit_test(self.viewport.to_world(screen_pos))
        if bubble is None:
            return None
        bubble.active_input = pointer_id
        bubble.free_speed = bubble.speed
        bubble.speed *= self.round.speed_change_factor
        log_line(f"InputRouter.press pointer={pointer_id} speed={bubble.speed:.3f}")
        return bubble

    def release(self, pointer_id: Hashable) -> Optional[Bubble]:
        """Restore the growth rate of whatever ``pointer_id`` is holding.

        The bubble may already have popped, in which case nothing happens.
        """
        bubble = self.bubble_field.find_held(pointer_id)
        if bubble is None:
            return None
        bubble.active_input = None
        bubble.speed = bubble.free_speed
        bubble.free_speed = None
        log_line(f"InputRouter.release pointer={pointer_id} speed={bubble.speed:.3f}")
        return bubble

    def handle_event(self, event) -> bool:
        """Dispatch a pygame event; returns True when it was pointer input."""
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP) and event.button in WHEEL_BUTTONS:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN:
            if getattr(event, "touch", False):
                return False
            self.press(MOUSE_POINTER, event.pos)
            return True
        if event.type == pygame.MOUSEBUTTONUP:
            if getattr(event, "touch", False):
                return False
            self.release(MOUSE_POINTER)
            return True
        if event.type == pygame.FINGERDOWN:
            pos = (event.x * self.viewport.width, event.y * self.viewport.height)
            self.press(touch_pointer(event.touch_id, event.finger_id), pos)
            return True
        if event.type == pygame.FINGERUP:
            self.release(touch_pointer(event.touch_id, event.finger_id))
            return True
        return False
