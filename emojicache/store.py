from __future__ import annotations

from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal, final

from loguru import logger

from emojicache.emoji_map import EmojiMap
from emojicache.errors import handle_error
from emojicache.negative_cache import NegativeCache
from emojicache.system import system_emoji_names

if TYPE_CHECKING:
    from collections.abc import Iterable

    from emojicache.models import CustomEmoji, SystemEmoji

type ChangeKind = Literal["received", "deleted", "nonexistent"]


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreChange:
    kind: ChangeKind
    names: frozenset[str]


type Listener = Callable[[StoreChange], object]


@final
class ChangeFeed:
    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            with suppress(ValueError):
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, change: StoreChange) -> None:
        logger.trace("publishing {} change for {}", change.kind, sorted(change.names))
        # Listeners may unsubscribe while being notified.
        for listener in tuple(self._listeners):
            try:
                listener(change)
            except Exception as e:  # noqa: BLE001
                handle_error(e)


@final
class EmojiStore:
    """
    Owner of the canonical emoji collections.

    Every mutation method applies its whole batch, rebuilds the EmojiMap once,
    then publishes a single StoreChange.
    """

    def __init__(self, system_emojis: Iterable[SystemEmoji]) -> None:
        self._system = tuple(system_emojis)
        self._system_names = system_emoji_names(self._system)
        self._custom: dict[str, CustomEmoji] = {}
        self._custom_ids_by_name: dict[str, str] = {}
        self._deleted_ids = set[str]()
        self.negative = NegativeCache()
        self.changes = ChangeFeed()
        self._emoji_map = EmojiMap(self._system)

    @property
    def emoji_map(self) -> EmojiMap:
        return self._emoji_map

    @property
    def system_names(self) -> frozenset[str]:
        return self._system_names

    def _rebuild(self) -> None:
        self._emoji_map = EmojiMap(self._system, self._custom.values())

    def receive_custom_emojis(self, emojis: Iterable[CustomEmoji]) -> None:
        names = set[str]()
        for emoji in emojis:
            if emoji.id in self._deleted_ids:
                # Ids are never reused, so this is a response older than the delete.
                logger.debug("ignoring deleted emoji {} ({})", emoji.name, emoji.id)
                continue
            # Names are unique among existing custom emoji, so a new id for a known
            # name means the old one was deleted and recreated.
            stale_id = self._custom_ids_by_name.get(emoji.name)
            if stale_id is not None and stale_id != emoji.id:
                logger.debug("{} was recreated as {}", emoji.name, emoji.id)
                del self._custom[stale_id]
            if (renamed := self._custom.get(emoji.id)) and renamed.name != emoji.name:
                del self._custom_ids_by_name[renamed.name]
                names.add(renamed.name)
            # The negative entry must go before the new map makes the name visible.
            self.negative.clear(emoji.name)
            self._custom[emoji.id] = emoji
            self._custom_ids_by_name[emoji.name] = emoji.id
            names.add(emoji.name)

        if not names:
            return
        self._rebuild()
        self.changes.publish(StoreChange(kind="received", names=frozenset(names)))

    def remove_custom_emoji(self, emoji_id: str) -> CustomEmoji | None:
        self._deleted_ids.add(emoji_id)
        if (emoji := self._custom.pop(emoji_id, None)) is None:
            return None
        del self._custom_ids_by_name[emoji.name]
        self._rebuild()
        self.changes.publish(StoreChange(kind="deleted", names=frozenset({emoji.name})))
        return emoji

    def mark_nonexistent(self, names: Iterable[str]) -> frozenset[str]:
        marked = set[str]()
        for name in names:
            if self._emoji_map.has(name):
                # A create landed before this stale not-found report.
                logger.debug("ignoring not-found report for resolvable {}", name)
                continue
            if not self.negative.is_absent(name):
                self.negative.mark_absent(name)
                marked.add(name)

        if marked:
            self.changes.publish(
                StoreChange(kind="nonexistent", names=frozenset(marked))
            )
        return frozenset(marked)
