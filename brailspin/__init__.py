"""Single-cell Braille terminal spinner."""

from importlib import metadata

from .completion import CompletionSignal, SignalState
from .frames import BRAILLE_FRAMES, build_frames
from .tui.animation import SpinHandle, Spinner, SpinnerInterrupted, spin, spinner

try:
    __version__ = metadata.version("brailspin")
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "BRAILLE_FRAMES",
    "CompletionSignal",
    "SignalState",
    "SpinHandle",
    "Spinner",
    "SpinnerInterrupted",
    "__version__",
    "build_frames",
    "spin",
    "spinner",
]
