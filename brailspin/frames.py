"""Pre-encoded Braille animation frames and terminal control codes."""
from __future__ import annotations

from typing import Tuple

CURSOR_LEFT = b"\x1b[1D"
CURSOR_HIDE = b"\x1b[?25l"
CURSOR_SHOW = b"\x1b[?25h"

# Erase the glyph under the cursor and make the cursor visible again.
CLEANUP_SEQUENCE = CURSOR_LEFT + b" " + CURSOR_LEFT + CURSOR_SHOW

BRAILLE_START = 0x2800
BRAILLE_COUNT = 256


def encode_frame(glyph: str) -> bytes:
    """Return the bytes that step back one column and draw ``glyph``."""
    return CURSOR_LEFT + glyph.encode("utf-8")


def build_frames(codepoint_start: int, count: int) -> Tuple[bytes, ...]:
    """Build ``count`` frames for consecutive code points from ``codepoint_start``."""
    return tuple(encode_frame(chr(codepoint_start + offset)) for offset in range(count))


BRAILLE_FRAMES = build_frames(BRAILLE_START, BRAILLE_COUNT)


__all__ = [
    "BRAILLE_COUNT",
    "BRAILLE_FRAMES",
    "BRAILLE_START",
    "CLEANUP_SEQUENCE",
    "CURSOR_HIDE",
    "CURSOR_LEFT",
    "CURSOR_SHOW",
    "build_frames",
    "encode_frame",
]
