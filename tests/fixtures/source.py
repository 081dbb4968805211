from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, final

from emojicache.errors import TransportError
from emojicache.models import CustomEmoji, FetchResult, SystemEmoji

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

APPLE = SystemEmoji(name="apple", unified="1f34e", category="food-drink")


def custom_emoji(name: str, id_: str | None = None) -> CustomEmoji:
    return CustomEmoji(id=id_ or f"id-{name}", name=name, creator_id="user-1")


async def settle(turns: int = 5) -> None:
    for _ in range(turns):
        await asyncio.sleep(0)


@final
class FakeSource:
    def __init__(self, emojis: Iterable[CustomEmoji] = ()) -> None:
        self.emojis = {emoji.name: emoji for emoji in emojis}
        self.calls: list[frozenset[str]] = []
        self.extra: list[CustomEmoji] = []
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    def add(self, *emojis: CustomEmoji) -> None:
        self.emojis |= {emoji.name: emoji for emoji in emojis}

    async def fetch_emojis_by_names(self, names: frozenset[str]) -> FetchResult:
        self.calls.append(names)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        found = [self.emojis[name] for name in names if name in self.emojis]
        return FetchResult(
            found=[*found, *self.extra],
            not_found=frozenset(name for name in names if name not in self.emojis),
        )

    def fail_with_transport_error(self) -> None:
        self.error = TransportError("server unavailable", status_code=503)


@final
class ManualScheduler:
    def __init__(self) -> None:
        self.callbacks: list[Callable[[], object]] = []

    def __call__(self, callback: Callable[[], object]) -> None:
        self.callbacks.append(callback)

    def run(self) -> None:
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()
