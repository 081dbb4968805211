from __future__ import annotations

from typing import TYPE_CHECKING, Self, final

from emojicache.coordinator import FetchCoordinator
from emojicache.resolution import Subscription, names_in_text, resolve
from emojicache.store import EmojiStore
from emojicache.system import DEFAULT_SYSTEM_EMOJIS, load_system_emojis

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from emojicache.config import Config
    from emojicache.coordinator import EmojiSource, Scheduler
    from emojicache.emoji_map import EmojiMap
    from emojicache.models import EmojiRecord, SystemEmoji
    from emojicache.resolution import WatchCallback
    from emojicache.store import Listener


@final
class EmojiCache:
    """
    Name-to-emoji resolution for one client session.

    Lookups are answered synchronously from the current snapshot; misses are
    resolved in the background and announced through `subscribe()`/`watch()`.
    """

    def __init__(
        self,
        source: EmojiSource,
        *,
        system_emojis: Iterable[SystemEmoji] | None = None,
        batch_delay: float = 0.0,
        schedule: Scheduler | None = None,
    ) -> None:
        self.store = EmojiStore(
            DEFAULT_SYSTEM_EMOJIS if system_emojis is None else system_emojis
        )
        self.coordinator = FetchCoordinator(
            self.store, source, batch_delay=batch_delay, schedule=schedule
        )

    @classmethod
    def from_config(cls, config: Config, source: EmojiSource) -> Self:
        system_emojis = None
        if config.system_emoji_file is not None:
            system_emojis = load_system_emojis(config.system_emoji_file)
        return cls(source, system_emojis=system_emojis, batch_delay=config.batch_delay)

    def resolve(self, name: str) -> EmojiRecord | None:
        return resolve(self.store, self.coordinator, name)

    def snapshot(self) -> EmojiMap:
        return self.store.emoji_map

    def is_absent(self, name: str) -> bool:
        return self.store.negative.is_absent(name)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.store.changes.subscribe(listener)

    def watch(self, name: str, callback: WatchCallback) -> Subscription:
        return Subscription(self.store, self.coordinator, name, callback)

    def request_emojis_in_text(self, text: str) -> None:
        system_names = self.store.system_names
        self.coordinator.request_by_names(
            name for name in names_in_text(text) if name not in system_names
        )

    async def aclose(self) -> None:
        await self.coordinator.drain()
