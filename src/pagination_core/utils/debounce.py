"""Reschedulable delayed task for debouncing keystrokes."""

import asyncio
from collections.abc import Awaitable, Callable

from aws_lambda_powertools import Logger

from pagination_core.utils.constants import debounce_seconds

logger = Logger(UTC=True)

DebouncedCallback = Callable[[], Awaitable[None]]


class Debouncer:
    """Runs only the most recently scheduled callback after a quiet period.

    Scheduling again while a callback is still waiting cancels the waiting
    one outright. Once the delay has elapsed the callback is considered
    fired: it runs to completion and is never cancelled by a later
    `schedule()` or `cancel()`.

    Must be used from inside a running event loop.
    """

    def __init__(self, delay_ms: int) -> None:
        self.delay_ms = delay_ms
        self._timer: asyncio.Task[None] | None = None
        self._fired: set[asyncio.Task[None]] = set()

    @property
    def is_pending(self) -> bool:
        """True while a scheduled callback is still waiting for its delay."""
        return self._timer is not None and not self._timer.done()

    @property
    def is_running(self) -> bool:
        """True while a fired callback has not finished yet."""
        return bool(self._fired)

    def schedule(self, callback: DebouncedCallback) -> None:
        """Replace any waiting callback with `callback`."""
        self.cancel()
        self._timer = asyncio.get_running_loop().create_task(self._run(callback))
        logger.debug("Debounce timer scheduled", extra={"delay_ms": self.delay_ms})

    def cancel(self) -> bool:
        """Cancel the waiting callback, if any. Fired callbacks are left alone."""
        timer, self._timer = self._timer, None
        if timer is None or timer.done():
            return False

        timer.cancel()
        logger.debug("Debounce timer cancelled")
        return True

    async def join(self) -> None:
        """Wait until nothing is waiting or running.

        Raises:
            Exception: The first error raised by a callback that ran
        """
        errors: list[Exception] = []
        while self.is_pending or self._fired:
            pending = [task for task in (self._timer, *self._fired) if task is not None]
            results = await asyncio.gather(*pending, return_exceptions=True)
            errors.extend(result for result in results if isinstance(result, Exception))

        if errors:
            raise errors[0]

    async def _run(self, callback: DebouncedCallback) -> None:
        await asyncio.sleep(debounce_seconds(self.delay_ms))

        task = asyncio.current_task()
        if task is not None:
            if self._timer is task:
                self._timer = None
            self._fired.add(task)
            task.add_done_callback(self._fired.discard)

        logger.debug("Debounce timer fired", extra={"delay_ms": self.delay_ms})
        try:
            await callback()
        except Exception:
            logger.exception("Debounced callback failed", extra={"delay_ms": self.delay_ms})
            raise
