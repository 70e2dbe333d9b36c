import unittest

import pygame

from entities import Bubble
from input_router import MOUSE_POINTER, InputRouter, touch_pointer
from managers import Round
from simulation import BubbleField
from viewport import Viewport


class InputRouterTests(unittest.TestCase):
    def setUp(self):
        self.round = Round(last_update=0, duration_ms=10_000, speed_change_factor=0.2)
        self.bubble_field = BubbleField()
        # 800x600 window: one world unit is 600 px
        self.viewport = Viewport(800, 600)
        self.router = InputRouter(self.bubble_field, self.round, self.viewport)
        self.first = Bubble(pos=(0.5, 0.5), speed=0.7, radius=0.1)
        self.second = Bubble(pos=(0.52, 0.5), speed=0.9, radius=0.1)
        self.bubble_field.bubbles = [self.first, self.second]

    def test_press_slows_the_first_bubble_under_the_pointer(self):
        grabbed = self.router.press(MOUSE_POINTER, (312, 300))
        self.assertIs(grabbed, self.first)
        self.assertEqual(self.first.active_input, MOUSE_POINTER)
        self.assertAlmostEqual(self.first.speed, 0.7 * 0.2)
        self.assertEqual(self.second.speed, 0.9)

    def test_release_restores_exact_speed(self):
        for speed in (0.5, 0.7, 0.9137, 0.99999):
            with self.subTest(speed=speed):
                self.first.speed = speed
                self.router.press(MOUSE_POINTER, (300, 300))
                released = self.router.release(MOUSE_POINTER)
                self.assertIs(released, self.first)
                self.assertEqual(self.first.speed, speed)
                self.assertIsNone(self.first.active_input)

    def test_press_in_empty_space_grabs_nothing(self):
        self.assertIsNone(self.router.press(MOUSE_POINTER, (10, 10)))
        self.assertIsNone(self.router.release(MOUSE_POINTER))
        self.assertEqual(self.first.speed, 0.7)

    def test_second_pointer_cannot_steal_a_held_bubble(self):
        self.router.press(touch_pointer(0, 1), (300, 300))
        grabbed = self.router.press(touch_pointer(0, 2), (300, 300))
        self.assertIs(grabbed, self.second)
        self.assertEqual(self.first.active_input, touch_pointer(0, 1))
        self.assertEqual(self.second.active_input, touch_pointer(0, 2))
        self.assertIsNone(self.router.press(MOUSE_POINTER, (300, 300)))

    def test_pointer_holds_one_bubble_at_a_time(self):
        self.router.press(MOUSE_POINTER, (300, 300))
        self.assertIsNone(self.router.press(MOUSE_POINTER, (312, 300)))
        self.assertEqual(self.second.speed, 0.9)

    def test_touches_release_independently(self):
        self.router.press(touch_pointer(0, 1), (300, 300))
        self.router.press(touch_pointer(0, 2), (300, 300))
        self.router.release(touch_pointer(0, 2))
        self.assertEqual(self.second.speed, 0.9)
        self.assertEqual(self.first.active_input, touch_pointer(0, 1))
        self.assertAlmostEqual(self.first.speed, 0.7 * 0.2)

    def test_release_after_bubble_popped_is_noop(self):
        self.router.press(MOUSE_POINTER, (300, 300))
        self.bubble_field.bubbles = [self.second]
        self.assertIsNone(self.router.release(MOUSE_POINTER))
        self.assertEqual(self.second.speed, 0.9)

    def test_scale_follows_viewport_resize(self):
        self.viewport.resize(1600, 1200)
        self.assertIs(self.router.press(MOUSE_POINTER, (600, 600)), self.first)


class InputEventTests(unittest.TestCase):
    def setUp(self):
        self.round = Round(last_update=0, speed_change_factor=0.2)
        self.bubble_field = BubbleField()
        self.viewport = Viewport(800, 600)
        self.router = InputRouter(self.bubble_field, self.round, self.viewport)
        self.bubble = Bubble(pos=(0.5, 0.5), speed=0.5, radius=0.1)
        self.bubble_field.bubbles = [self.bubble]

    def test_mouse_buttons(self):
        down = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(300, 300), button=1)
        self.assertTrue(self.router.handle_event(down))
        self.assertEqual(self.bubble.active_input, MOUSE_POINTER)
        up = pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(0, 0), button=1)
        self.assertTrue(self.router.handle_event(up))
        self.assertIsNone(self.bubble.active_input)
        self.assertEqual(self.bubble.speed, 0.5)

    def test_wheel_does_not_release_a_held_bubble(self):
        self.router.press(MOUSE_POINTER, (300, 300))
        wheel = pygame.event.Event(pygame.MOUSEBUTTONUP, pos=(300, 300), button=4)
        self.assertFalse(self.router.handle_event(wheel))
        self.assertEqual(self.bubble.active_input, MOUSE_POINTER)

    def test_synthetic_mouse_events_from_touch_are_ignored(self):
        down = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(300, 300), button=1, touch=True)
        self.assertFalse(self.router.handle_event(down))
        self.assertIsNone(self.bubble.active_input)

    def test_finger_events_use_normalized_coordinates(self):
        down = pygame.event.Event(pygame.FINGERDOWN, touch_id=0, finger_id=7, x=0.375, y=0.5)
        self.assertTrue(self.router.handle_event(down))
        self.assertEqual(self.bubble.active_input, touch_pointer(0, 7))
        up = pygame.event.Event(pygame.FINGERUP, touch_id=0, finger_id=7, x=0.9, y=0.9)
        self.router.handle_event(up)
        self.assertIsNone(self.bubble.active_input)
        self.assertEqual(self.bubble.speed, 0.5)

    def test_same_finger_on_two_devices_holds_two_bubbles(self):
        other = Bubble(pos=(0.52, 0.5), speed=0.9, radius=0.1)
        self.bubble_field.bubbles.append(other)
        for touch_id in (0, 1):
            down = pygame.event.Event(pygame.FINGERDOWN, touch_id=touch_id, finger_id=0, x=0.375, y=0.5)
            self.router.handle_event(down)
        self.assertEqual(self.bubble.active_input, touch_pointer(0, 0))
        self.assertEqual(other.active_input, touch_pointer(1, 0))
        up = pygame.event.Event(pygame.FINGERUP, touch_id=1, finger_id=0, x=0.375, y=0.5)
        self.router.handle_event(up)
        self.assertIsNone(other.active_input)
        self.assertEqual(other.speed, 0.9)
        self.assertEqual(self.bubble.active_input, touch_pointer(0, 0))
        self.assertAlmostEqual(self.bubble.speed, 0.5 * 0.2)

    def test_other_events_are_not_pointer_input(self):
        key = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_a)
        self.assertFalse(self.router.handle_event(key))


if __name__ == "__main__":
    unittest.main()
