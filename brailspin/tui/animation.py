"""Braille spinner animation loop and its stop/cleanup controller."""
from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, Protocol, Sequence

from ..completion import CompletionSignal
from ..frames import BRAILLE_FRAMES, CLEANUP_SEQUENCE, CURSOR_HIDE

logger = logging.getLogger(__name__)


class SpinnerInterrupted(RuntimeError):
    """The animation loop was cancelled before stop() settled the spinner."""


class Sink(Protocol):
    def write(self, data: bytes) -> object: ...

    def flush(self) -> None: ...


class SpinnerPhase(str, Enum):
    IDLE = "idle"
    HIDING = "hiding"
    ANIMATING = "animating"
    CLEANING = "cleaning"
    DONE = "done"


@dataclass(frozen=True)
class SpinHandle:
    """What a started spinner hands back to its controller."""

    stop: Callable[[], Awaitable[None]]
    done: CompletionSignal


def stderr_sink() -> Sink:
    return sys.stderr.buffer


class Spinner:
    """Animates one character cell until :meth:`stop` is awaited.

    The loop checks the cancelled flag before every frame and writes nothing
    once it is set. A write or wait failure rejects :attr:`done`; only
    :meth:`stop` fulfills it, after the cleanup sequence has been written.
    """

    def __init__(
        self,
        interval: float,
        *,
        frames: Sequence[bytes] = BRAILLE_FRAMES,
        sink: Optional[Sink] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        if not frames:
            raise ValueError("frames must contain at least one frame")
        self.interval = interval
        self.frames = tuple(frames)
        self.sink = sink if sink is not None else stderr_sink()
        self._cancelled = asyncio.Event()
        self._signal = CompletionSignal()
        self._task: Optional[asyncio.Task[None]] = None
        self._stopping = False
        self._phase = SpinnerPhase.IDLE
        self._frames_written = 0

    # ------------------------------------------------------------------
    # state
    # ------------------------------------------------------------------
    @property
    def done(self) -> CompletionSignal:
        return self._signal

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def phase(self) -> SpinnerPhase:
        return self._phase

    @property
    def frames_written(self) -> int:
        return self._frames_written

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def start(self) -> SpinHandle:
        """Schedule the animation loop on the running event loop."""
        if self._task is not None:
            raise RuntimeError("spinner already started")
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._task.add_done_callback(self._loop_finished)
        return SpinHandle(stop=self.stop, done=self._signal)

    async def stop(self) -> None:
        """Cancel the loop, restore the cursor and wait for the final outcome.

        Safe to call repeatedly and before the loop has drawn anything; the
        cleanup sequence is written once and every call sees the same outcome.
        """
        if not self._stopping:
            self._stopping = True
            self._cancelled.set()
            self._phase = SpinnerPhase.CLEANING
            try:
                self._write(CLEANUP_SEQUENCE)
            except Exception as exc:
                logger.debug("Cleanup write failed: %s", exc)
                self._signal.reject(exc)
            else:
                self._signal.fulfill()
            if self._task is not None:
                await asyncio.wait({self._task})
            self._phase = SpinnerPhase.DONE
        await self._signal.outcome()

    # ------------------------------------------------------------------
    # animation loop
    # ------------------------------------------------------------------
    async def _run(self) -> None:
        if self.cancelled:
            return
        try:
            self._phase = SpinnerPhase.HIDING
            self._write(CURSOR_HIDE)
            self._phase = SpinnerPhase.ANIMATING
            while not self.cancelled:
                for frame in self.frames:
                    if self.cancelled:
                        break
                    self._write(frame)
                    self._frames_written += 1
                    await self._pause()
        except Exception as exc:
            logger.debug("Spinner loop failed after %d frames: %s", self._frames_written, exc)
            self._signal.reject(exc)

    def _loop_finished(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            self._signal.reject(SpinnerInterrupted("animation loop cancelled before stop()"))

    async def _pause(self) -> None:
        # Wakes early once stop() sets the flag.
        try:
            await asyncio.wait_for(self._cancelled.wait(), timeout=self.interval)
        except asyncio.TimeoutError:
            pass

    def _write(self, data: bytes) -> None:
        self.sink.write(data)
        self.sink.flush()


def spin(
    interval: float = 0.5,
    *,
    frames: Sequence[bytes] = BRAILLE_FRAMES,
    sink: Optional[Sink] = None,
) -> SpinHandle:
    """Start a spinner and return its ``stop``/``done`` pair."""
    return Spinner(interval, frames=frames, sink=sink).start()


@asynccontextmanager
async def spinner(
    interval: float = 0.5,
    *,
    frames: Sequence[bytes] = BRAILLE_FRAMES,
    sink: Optional[Sink] = None,
) -> AsyncIterator[SpinHandle]:
    """Context manager that keeps a spinner running for the duration of the block.

    Usage:
        async with spinner(0.1):
            await some_long_operation()
    """
    handle = spin(interval, frames=frames, sink=sink)
    try:
        yield handle
    finally:
        await handle.stop()


__all__ = ["Sink", "SpinHandle", "Spinner", "SpinnerInterrupted", "SpinnerPhase", "spin", "spinner", "stderr_sink"]
