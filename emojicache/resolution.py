from __future__ import annotations

import re
from typing import TYPE_CHECKING, Self, final

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from emojicache.coordinator import FetchCoordinator
    from emojicache.models import EmojiRecord
    from emojicache.store import EmojiStore, StoreChange

    type WatchCallback = Callable[[EmojiRecord | None], object]

EMOJI_REGEX = re.compile(r":([a-z0-9_+-]+):", re.IGNORECASE)


def names_in_text(text: str) -> list[str]:
    """Emoji names written as `:name:` in text, in order of first appearance."""
    return list(dict.fromkeys(m[1].lower() for m in EMOJI_REGEX.finditer(text)))


def resolve(
    store: EmojiStore, coordinator: FetchCoordinator, name: str
) -> EmojiRecord | None:
    if (emoji := store.emoji_map.get(name)) is not None:
        return emoji
    logger.trace("cache miss for {}", name)
    coordinator.request_by_name(name)
    return None


@final
class Subscription:
    """
    Keeps the resolution of one name current.

    The callback receives the new record (or None) every time a store change
    alters what the name resolves to.
    """

    def __init__(
        self,
        store: EmojiStore,
        coordinator: FetchCoordinator,
        name: str,
        callback: WatchCallback,
    ) -> None:
        self.name = name
        self._store = store
        self._coordinator = coordinator
        self._callback = callback
        self.value = resolve(store, coordinator, name)
        self._unsubscribe: Callable[[], None] | None = store.changes.subscribe(
            self._on_change
        )

    @property
    def closed(self) -> bool:
        return self._unsubscribe is None

    def _on_change(self, _: StoreChange) -> None:
        value = self._store.emoji_map.get(self.name)
        if value == self.value:
            return
        self.value = value
        if value is None:
            # The record went away (e.g. it was deleted); ask the source again.
            self._coordinator.request_by_name(self.name)
        self._callback(value)

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
