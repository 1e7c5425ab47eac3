from typing import List, Optional

from brailspin.frames import CLEANUP_SEQUENCE, CURSOR_HIDE


class RecordingSink:
    """In-memory byte sink that remembers each write separately."""

    def __init__(self, fail_at: Optional[int] = None) -> None:
        self.writes: List[bytes] = []
        self.fail_at = fail_at
        self.flushes = 0

    def write(self, data: bytes) -> int:
        if self.fail_at is not None and len(self.writes) == self.fail_at:
            self.fail_at = None
            raise OSError("sink closed")
        self.writes.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        self.flushes += 1

    @property
    def frames(self) -> List[bytes]:
        return [data for data in self.writes if data not in (CURSOR_HIDE, CLEANUP_SEQUENCE)]



class ClosedAfterSink(RecordingSink):
    """Accepts ``limit`` writes, then fails every write like a closed stream."""

    def __init__(self, limit: int) -> None:
        super().__init__()
        self.limit = limit
        self.failures = 0

    def write(self, data: bytes) -> int:
        if len(self.writes) >= self.limit:
            self.failures += 1
            raise OSError("stream closed")
        return super().write(data)
