"""Cancellation tokens for dependent fetches."""

import asyncio


class CancellationToken:
    """Handle used to abandon an in-flight request.

    Cancelling signals every attached transport task to abort. A request may
    still settle after the signal, so whoever commits its result must check
    ``cancelled`` first.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._tasks: set[asyncio.Future] = set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    def attach(self, task: asyncio.Future) -> None:
        """Tie a transport task to this token."""
        if self._cancelled:
            task.cancel()
            return
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
