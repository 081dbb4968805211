from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, final, override

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from emojicache.models import CustomEmoji, EmojiRecord, SystemEmoji


@final
class EmojiMap(Mapping[str, "EmojiRecord"]):
    """
    A point-in-time view over system and custom emoji, keyed by name.

    Instances are never mutated: the store builds a new one whenever its
    collections change, so a reader holding a snapshot never sees a half-applied
    update. Custom emoji shadow system emoji of the same name.
    """

    __slots__ = ("_by_id", "_by_name")

    def __init__(
        self,
        system: Iterable[SystemEmoji] = (),
        custom: Iterable[CustomEmoji] = (),
    ) -> None:
        by_name: dict[str, EmojiRecord] = {}
        for emoji in system:
            for name in emoji.names:
                by_name.setdefault(name, emoji)

        by_id: dict[str, CustomEmoji] = {}
        for emoji in custom:
            by_name[emoji.name] = emoji
            by_id[emoji.id] = emoji

        self._by_name = MappingProxyType(by_name)
        self._by_id = MappingProxyType(by_id)

    @override
    def __getitem__(self, name: str) -> EmojiRecord:
        return self._by_name[name]

    @override
    def __iter__(self) -> Iterator[str]:
        return iter(self._by_name)

    @override
    def __len__(self) -> int:
        return len(self._by_name)

    @override
    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @override
    def __repr__(self) -> str:
        return f"<EmojiMap names={len(self._by_name)} custom={len(self._by_id)}>"

    def has(self, name: str) -> bool:
        return name in self._by_name

    def get_by_id(self, emoji_id: str) -> CustomEmoji | None:
        return self._by_id.get(emoji_id)
