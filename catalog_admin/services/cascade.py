"""Dependent list loading driven by a parent selection.

Seasons depend on the selected series and episodes on the selected season.
Each dependent list is governed by one ``CascadingSelection``: selecting a
parent cancels whatever fetch is still running for the previous parent and
starts a new one. Only the latest fetch may ever write into the list.
"""

import asyncio
import logging
from bisect import insort
from enum import Enum
from operator import attrgetter
from typing import Any, Awaitable, Callable, Generic, Sequence, TypeVar

from catalog_admin.core.cancellation import CancellationToken
from catalog_admin.core.errors import ApiFailure, CancelledFailure, to_user_message

logger = logging.getLogger(__name__)

T = TypeVar("T")

Loader = Callable[[str, CancellationToken], Awaitable[Sequence[T]]]

by_number = attrgetter("number")


class LoadState(str, Enum):
    """Load state of a dependent list."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ErrorBanner:
    """Single message slot where the last error wins."""

    def __init__(self) -> None:
        self.message: str | None = None

    def clear(self) -> None:
        self.message = None

    def show(self, message: str) -> None:
        self.message = message


class CascadingSelection(Generic[T]):
    """A list whose contents follow the currently selected parent."""

    def __init__(
        self,
        name: str,
        loader: Loader,
        banner: ErrorBanner | None = None,
        sort_key: Callable[[T], Any] | None = by_number,
    ):
        self.name = name
        self._loader = loader
        self._banner = banner or ErrorBanner()
        self._sort_key = sort_key

        self.parent_id: str | None = None
        self.state = LoadState.IDLE
        self.error: str | None = None
        self._items: list[T] = []
        self._token: CancellationToken | None = None
        self._task: asyncio.Task | None = None

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    @property
    def loading(self) -> bool:
        return self.state is LoadState.LOADING

    def select(self, parent_id: str | None) -> asyncio.Task | None:
        """Point the list at a new parent.

        An empty or ``None`` parent clears the list. Selecting the parent that
        is already selected changes nothing. Returns the task loading the new
        list, if one was started.
        """
        parent_id = parent_id or None
        if parent_id == self.parent_id:
            return self._task
        return self._start(parent_id)

    def reload(self) -> asyncio.Task | None:
        """Fetch the list for the current parent again."""
        return self._start(self.parent_id)

    def cancel(self) -> None:
        """Abandon the in-flight fetch, if any."""
        if self._token is not None and not self._token.cancelled:
            if self._task is not None and not self._task.done():
                logger.debug(f"Cancelling {self.name} load for {self.parent_id}")
            self._token.cancel()
        self._token = None

    async def wait(self) -> None:
        """Wait until the latest fetch has settled."""
        while self._task is not None and not self._task.done():
            await asyncio.shield(self._task)

    def merge(self, parent_id: str, item: T) -> bool:
        """Insert a created item at its sorted position.

        The item is dropped when its parent is no longer the selected one.
        """
        if parent_id != self.parent_id:
            logger.info(
                f"Not merging {self.name} item for {parent_id}; "
                f"{self.parent_id} is selected now"
            )
            return False
        if self._sort_key is None:
            self._items.append(item)
        else:
            insort(self._items, item, key=self._sort_key)
        return True

    def _start(self, parent_id: str | None) -> asyncio.Task | None:
        self.cancel()
        self.parent_id = parent_id
        self._items = []
        self.error = None
        self._banner.clear()

        if parent_id is None:
            self.state = LoadState.IDLE
            self._task = None
            return None

        self.state = LoadState.LOADING
        token = CancellationToken()
        self._token = token
        self._task = asyncio.create_task(
            self._load(parent_id, token), name=f"load-{self.name}-{parent_id}"
        )
        return self._task

    def _is_current(self, token: CancellationToken) -> bool:
        return token is self._token and not token.cancelled

    async def _load(self, parent_id: str, token: CancellationToken) -> None:
        try:
            items = await self._loader(parent_id, token)
        except CancelledFailure:
            logger.debug(f"{self.name} load for {parent_id} was cancelled")
            return
        except Exception as exc:
            if not self._is_current(token):
                logger.debug(f"Discarding stale {self.name} failure for {parent_id}")
                return
            if not isinstance(exc, ApiFailure):
                logger.exception(f"Unexpected error loading {self.name} for {parent_id}")
            message = to_user_message(exc)
            self.state = LoadState.FAILED
            self.error = message
            self._banner.show(message)
            return

        if not self._is_current(token):
            logger.debug(f"Discarding stale {self.name} result for {parent_id}")
            return
        if self._sort_key is None:
            self._items = list(items)
        else:
            self._items = sorted(items, key=self._sort_key)
        self.state = LoadState.READY
