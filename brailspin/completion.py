"""One-shot completion signal shared by the spinner loop and its controller."""
from __future__ import annotations

import asyncio
from enum import Enum
from types import TracebackType
from typing import Generator, Optional


class SignalState(str, Enum):
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class CompletionSignal:
    """Single-assignment outcome that either side may settle first.

    Only the first call to :meth:`fulfill` or :meth:`reject` counts; later calls
    are ignored. Awaiting :meth:`outcome` (or the signal itself) any number of
    times, before or after settlement, yields the same terminal state: ``None``
    when fulfilled, the stored cause raised when rejected.
    """

    def __init__(self) -> None:
        self._state = SignalState.PENDING
        self._cause: Optional[BaseException] = None
        self._traceback: Optional[TracebackType] = None
        self._settled = asyncio.Event()

    @property
    def state(self) -> SignalState:
        return self._state

    @property
    def cause(self) -> Optional[BaseException]:
        return self._cause

    @property
    def is_fulfilled(self) -> bool:
        return self._state is SignalState.FULFILLED

    @property
    def is_rejected(self) -> bool:
        return self._state is SignalState.REJECTED

    @property
    def is_settled(self) -> bool:
        return self._state is not SignalState.PENDING

    def fulfill(self) -> bool:
        if self.is_settled:
            return False
        self._state = SignalState.FULFILLED
        self._settled.set()
        return True

    def reject(self, cause: BaseException) -> bool:
        if self.is_settled:
            return False
        self._state = SignalState.REJECTED
        self._cause = cause
        self._traceback = cause.__traceback__
        self._settled.set()
        return True

    async def outcome(self) -> None:
        await self._settled.wait()
        if self._cause is not None:
            # Start from the traceback captured at reject() on every raise.
            raise self._cause.with_traceback(self._traceback)

    def __await__(self) -> Generator[object, None, None]:
        return self.outcome().__await__()

    def __repr__(self) -> str:
        return f"<CompletionSignal {self._state.value}>"


__all__ = ["CompletionSignal", "SignalState"]
