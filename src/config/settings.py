"""Global configuration and constants for the player and its option layer."""

from __future__ import annotations

import os
from typing import Final

# Audio buffering is done in fixed-size chunks of raw PCM.
CHUNK_SIZE: Final = 60 * 1024  # bytes

# Duration options assume CD-quality PCM regardless of the playing stream.
SAMPLE_RATE: Final = 44100
SAMPLE_BYTES: Final = 16 // 8
CHANNELS: Final = 2
BYTES_PER_SECOND: Final = SAMPLE_RATE * SAMPLE_BYTES * CHANNELS

COLOR_MIN: Final = -1  # default terminal color
COLOR_MAX: Final = 255

CONFIG_DIR: Final = os.environ.get(
    "TUNESHELL_CONFIG_DIR", os.path.join(os.path.expanduser("~"), ".config", "tuneshell")
)
LOCK_NAME: Final = "tuneshell.lock"
DEFAULT_BUFFER_CHUNKS: Final = 10
