from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Protocol, final

from loguru import logger

from emojicache.errors import TransportError, handle_error, report_transport_error

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from emojicache.models import CustomEmoji, FetchResult
    from emojicache.store import EmojiStore

type Scheduler = Callable[[Callable[[], object]], object]


class EmojiSource(Protocol):
    async def fetch_emojis_by_names(self, names: frozenset[str]) -> FetchResult:
        """Raises TransportError when the lookup could not be completed."""
        ...


@final
class FetchCoordinator:
    """
    Batches lookups-by-name for emoji missing from the store.

    Names requested during one scheduling turn are sent to the source together,
    and a name that is already in flight is never requested a second time.
    """

    def __init__(
        self,
        store: EmojiStore,
        source: EmojiSource,
        *,
        batch_delay: float = 0.0,
        schedule: Scheduler | None = None,
    ) -> None:
        self.store = store
        self.source = source
        self._batch_delay = batch_delay
        self._schedule = schedule or self._schedule_on_loop
        self._pending = set[str]()
        self._window = set[str]()
        self._flush_scheduled = False
        self._tasks = set[asyncio.Task[None]]()

    @property
    def pending(self) -> frozenset[str]:
        return frozenset(self._pending)

    @property
    def in_flight(self) -> int:
        return sum(not task.done() for task in self._tasks)

    def request_by_name(self, name: str) -> None:
        if self.store.emoji_map.has(name) or self.store.negative.is_absent(name):
            return
        if name in self._pending:
            logger.trace("{} is already pending", name)
            return

        self._pending.add(name)
        self._window.add(name)
        if self._flush_scheduled:
            return

        self._flush_scheduled = True
        try:
            self._schedule(self._dispatch)
        except Exception:
            # Nothing will flush this window; drop it so later misses reschedule.
            self._pending.difference_update(self._window)
            self._window.clear()
            self._flush_scheduled = False
            raise

    def request_by_names(self, names: Iterable[str]) -> None:
        for name in names:
            self.request_by_name(name)

    def _schedule_on_loop(self, callback: Callable[[], object]) -> None:
        loop = asyncio.get_running_loop()
        if self._batch_delay > 0:
            loop.call_later(self._batch_delay, callback)
        else:
            loop.call_soon(callback)

    def _dispatch(self) -> asyncio.Task[None] | None:
        self._flush_scheduled = False
        if not self._window:
            return None

        batch = frozenset(self._window)
        self._window.clear()
        logger.debug("fetching {} emoji by name: {}", len(batch), sorted(batch))
        task = asyncio.get_running_loop().create_task(self._fetch(batch))
        self._tasks.add(task)
        task.add_done_callback(self._on_batch_done)
        return task

    def _on_batch_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and (error := task.exception()) is not None:
            handle_error(error)

    async def _fetch(self, batch: frozenset[str]) -> None:
        try:
            result = await self.source.fetch_emojis_by_names(batch)
            self._apply(batch, result)
        except TransportError as e:
            # Failure says nothing about existence, so nothing is marked absent.
            e.add_note(f"requested names: {', '.join(sorted(batch))}")
            report_transport_error(e)
        finally:
            self._pending.difference_update(batch)

    def _apply(self, batch: frozenset[str], result: FetchResult) -> None:
        found: dict[str, CustomEmoji] = {}
        for emoji in result.found:
            if emoji.name not in batch:
                logger.warning("ignoring unrequested emoji {!r} in response", emoji.name)
                continue
            found[emoji.name] = emoji

        if unexpected := result.not_found - batch:
            logger.warning(
                "ignoring not-found report for unrequested names: {}",
                sorted(unexpected),
            )
        if contradicted := result.not_found.intersection(found):
            logger.warning(
                "response reports {} as both found and missing", sorted(contradicted)
            )

        self.store.receive_custom_emojis(found.values())
        self.store.mark_nonexistent(batch.difference(found))

    async def flush(self) -> None:
        """Send the current batch immediately and wait for it to resolve."""
        if task := self._dispatch():
            await asyncio.gather(task, return_exceptions=True)

    async def drain(self) -> None:
        """Wait until no names are queued or in flight."""
        while self._window or any(not task.done() for task in self._tasks):
            self._dispatch()
            await asyncio.gather(*self._tasks, return_exceptions=True)
