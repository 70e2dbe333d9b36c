# config.py
# All configurable constants and settings

import os

# Optional debug logging toggle – when enabled, round transitions, collisions
# and pointer grabs emit a timestamped trace to logs/debug.txt. Disabled by
# default for normal play sessions.
LOG_ENABLED = bool(int(os.getenv("BUBBLEPOP_LOG_ENABLED", "0")))
LOG_FILE_PATH = "logs/debug.txt"

# Central audio toggle so the collision bell can be silenced without removing
# integration code.
AUDIO_ENABLED = bool(int(os.getenv("BUBBLEPOP_AUDIO_ENABLED", "1")))

# Initial window dimensions (the window is resizable)
WIDTH = 1280
HEIGHT = 720

# Frames per second when vsync is unavailable
FPS = 60

# Round settings
ROUND_DURATION_MS = 10_000
SPEED_CHANGE_FACTOR = 0.2   # Growth multiplier while a bubble is held
BUBBLES_PER_ROUND = 10
MIN_SPEED = 0.5
MAX_SPEED = 1.0

# Presentation
FONT_FAMILY = "Roboto"
SFX_VOLUME = 0.7

# Settings dictionary read by the loop every frame
settings_data = {
    "FPS": FPS,
    "ROUND_DURATION_MS": ROUND_DURATION_MS,
    "SPEED_CHANGE_FACTOR": SPEED_CHANGE_FACTOR,
    "BUBBLES_PER_ROUND": BUBBLES_PER_ROUND,
    "SFX_VOLUME": SFX_VOLUME,
}
