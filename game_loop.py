# game_loop.py

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, Tuple

import pygame

from config import (
    AUDIO_ENABLED, BUBBLES_PER_ROUND, HEIGHT, ROUND_DURATION_MS,
    SPEED_CHANGE_FACTOR, WIDTH, settings_data,
)
from game import Game
from logging_utils import log_line
from renderer import PygameSurface
from sound_manager import SoundManager


def parse_size(value: str) -> Tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from exc
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"window size must be positive, got {value!r}")
    return width, height


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Bubble Pop – keep the bubbles from touching")
    parser.add_argument("--fps", type=int, default=settings_data["FPS"],
                        help="Frame cap used when vsync is unavailable")
    parser.add_argument("--round-duration", type=int, default=ROUND_DURATION_MS,
                        help="Round length in milliseconds")
    parser.add_argument("--speed-change", type=float, default=SPEED_CHANGE_FACTOR,
                        help="Growth multiplier applied while a bubble is held (0-1)")
    parser.add_argument("--bubbles", type=int, default=BUBBLES_PER_ROUND,
                        help="Bubbles spawned per round")
    parser.add_argument("--windowed", type=parse_size, default=(WIDTH, HEIGHT), metavar="WxH",
                        help="Initial window size")
    parser.add_argument("--disable-audio", action="store_true", help="Run without pygame audio output")
    args = parser.parse_args(argv)
    if args.fps <= 0:
        parser.error("--fps must be positive")
    if args.round_duration <= 0:
        parser.error("--round-duration must be positive")
    if not 0 < args.speed_change < 1:
        parser.error("--speed-change must be between 0 and 1")
    if args.bubbles <= 0:
        parser.error("--bubbles must be positive")
    return args


def open_window(size):
    """Open a resizable window, preferring one synced to the display refresh."""
    flags = pygame.RESIZABLE
    try:
        screen = pygame.display.set_mode(size, flags, vsync=1)
        log_line("run_game vsync enabled")
        return screen, True
    except pygame.error as exc:
        log_line(f"run_game vsync unavailable: {exc}")
        return pygame.display.set_mode(size, flags), False


def process_events(game):
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            return False
        game.handle_event(event)
    return True


def run_game(args: argparse.Namespace) -> None:
    pygame.init()
    pygame.display.set_caption("Bubble Pop")
    screen, vsync = open_window(args.windowed)
    clock = pygame.time.Clock()
    settings_data["FPS"] = args.fps
    sound = SoundManager(enable_audio=AUDIO_ENABLED and not args.disable_audio,
                         volume=settings_data["SFX_VOLUME"])
    surface = PygameSurface(screen)
    game = Game(
        surface,
        screen.get_size(),
        clock=pygame.time.get_ticks,
        sound=sound,
        round_duration_ms=args.round_duration,
        speed_change_factor=args.speed_change,
        bubbles_per_round=args.bubbles,
    )
    running = True

    while running:
        # Re-read FPS each frame
        if vsync:
            clock.tick()
        else:
            clock.tick(settings_data["FPS"])

        running = process_events(game)
        surface.surface = pygame.display.get_surface()
        game.tick()
        pygame.display.flip()

    pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
    run_game(parse_args(argv))


if __name__ == "__main__":
    main(sys.argv[1:])
