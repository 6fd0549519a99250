import asyncio
from typing import Optional

class CancellationToken:
    """Signalled when a newer request of the same kind supersedes this one."""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()

class CancellationSlot:
    """Single-occupancy tracker for one kind of in-flight request.

    ``renew()`` signals the token currently held (if any) and installs a
    fresh one, so only the most recent request of the kind delivers data.
    """

    def __init__(self, tag: str = "list"):
        self.tag = tag
        self._current: Optional[CancellationToken] = None

    def renew(self) -> CancellationToken:
        if self._current is not None:
            self._current.cancel()
        self._current = CancellationToken()
        return self._current
