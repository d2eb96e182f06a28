"""
Search-as-you-type with debounce and request sequencing.

Each issued request takes the next number of a monotonic counter; a
response is applied only when its number is still the latest issued, so
a slow early response can never overwrite a newer one. A keystroke
restarts the debounce timer but leaves requests already in flight alone.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Optional, Set, TypeVar

from backoffice.domain.models.base import DomainException


logger = logging.getLogger(__name__)

R = TypeVar('R')


class DebouncedSearch(Generic[R]):

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[R]],
        on_result: Callable[[str, R], None],
        delay: float = 0.3,
        on_error: Optional[Callable[[DomainException], None]] = None
    ):
        self.fetch = fetch
        self.on_result = on_result
        self.on_error = on_error
        self.delay = delay
        self._sequence = 0
        self._timer: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def submit(self, term: str) -> None:
        """Register a keystroke; must be called from a running event loop."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._wait_then_issue(term))

    async def _wait_then_issue(self, term: str) -> None:
        await asyncio.sleep(self.delay)
        self._sequence += 1
        task = asyncio.get_running_loop().create_task(self._issue(term, self._sequence))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _issue(self, term: str, sequence: int) -> None:
        try:
            result = await self.fetch(term)
        except DomainException as exc:
            if sequence != self._sequence:
                logger.debug(f"Ignoring failure of superseded search #{sequence}: {exc.message}")
                return
            logger.error(f"Search for '{term}' failed: {exc.message}")
            if self.on_error:
                self.on_error(exc)
            return

        if sequence != self._sequence:
            logger.debug(f"Discarding stale search #{sequence} (latest #{self._sequence})")
            return
        self.on_result(term, result)

    async def wait_idle(self) -> None:
        """Wait for the pending debounce timer and every request in flight."""
        if self._timer is not None:
            try:
                await self._timer
            except asyncio.CancelledError:
                pass
        while self._in_flight:
            await asyncio.gather(*list(self._in_flight))

    def cancel(self) -> None:
        """Drop the pending keystroke; requests in flight finish but are ignored."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._sequence += 1
