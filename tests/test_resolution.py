from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from hypothesis import given
from hypothesis import strategies as st

from emojicache.resolution import names_in_text
from tests.fixtures import custom_emoji

if TYPE_CHECKING:
    from emojicache.cache import EmojiCache
    from emojicache.models import EmojiRecord
    from tests.fixtures import FakeSource

emoji_names = st.from_regex(r"[a-z0-9_+-]{1,20}", fullmatch=True)


@pytest.mark.parametrize(
    ("text", "names"),
    [
        ("", []),
        ("no emoji here", []),
        (":smile:", ["smile"]),
        ("hi :wave: and :+1: :-1:", ["wave", "+1", "-1"]),
        (":Party_Parrot: :party_parrot:", ["party_parrot"]),
        ("time is 10:30:00", ["30"]),
        (":: :not closed", []),
        (":a::b:", ["a", "b"]),
    ],
)
def test_names_in_text(text: str, names: list[str]) -> None:
    assert names_in_text(text) == names


@given(st.lists(emoji_names))
def test_names_in_text_finds_every_name(names: list[str]) -> None:
    text = " ".join(f"say :{name}: twice :{name}:" for name in names)
    assert names_in_text(text) == list(dict.fromkeys(names))


async def test_watch_reports_fill(cache: EmojiCache, source: FakeSource) -> None:
    seen: list[EmojiRecord | None] = []
    source.add(custom_emoji("party"))

    subscription = cache.watch("party", seen.append)
    assert subscription.value is None
    await cache.coordinator.drain()

    assert seen == [custom_emoji("party")]
    assert subscription.value == custom_emoji("party")
    assert len(source.calls) == 1


async def test_watch_hit_needs_no_request(
    cache: EmojiCache, source: FakeSource
) -> None:
    seen: list[EmojiRecord | None] = []

    with cache.watch("apple", seen.append) as subscription:
        cache.store.receive_custom_emojis([custom_emoji("party")])

    assert subscription.value == cache.snapshot().get("apple")
    assert seen == []
    assert source.calls == []


async def test_watch_ignores_unrelated_changes(
    cache: EmojiCache, source: FakeSource
) -> None:
    seen: list[EmojiRecord | None] = []
    cache.watch("nope", seen.append)

    cache.store.receive_custom_emojis([custom_emoji("party")])
    await cache.coordinator.drain()
    cache.store.mark_nonexistent(["other"])

    assert seen == []
    assert cache.is_absent("nope")
    assert len(source.calls) == 1


async def test_watch_refetches_after_delete(
    cache: EmojiCache, source: FakeSource
) -> None:
    seen: list[EmojiRecord | None] = []
    party = custom_emoji("party")
    cache.store.receive_custom_emojis([party])
    cache.watch("party", seen.append)

    cache.store.remove_custom_emoji(party.id)
    assert seen == [None]
    assert cache.coordinator.pending == {"party"}

    await cache.coordinator.drain()
    assert cache.is_absent("party")
    assert source.calls == [frozenset({"party"})]


async def test_watch_follows_recreate(cache: EmojiCache, source: FakeSource) -> None:
    seen: list[EmojiRecord | None] = []
    cache.watch("party", seen.append)
    await cache.coordinator.drain()

    recreated = custom_emoji("party", "id-new")
    cache.store.receive_custom_emojis([recreated])

    assert seen == [recreated]


async def test_closed_watch_is_silent(cache: EmojiCache, source: FakeSource) -> None:
    seen: list[EmojiRecord | None] = []
    source.add(custom_emoji("party"))
    subscription = cache.watch("party", seen.append)

    subscription.close()
    subscription.close()
    await cache.coordinator.drain()

    assert subscription.closed
    assert seen == []
    assert len(cache.store.changes) == 0
