import pytest
from hypothesis import given
from hypothesis import strategies as st

from emojicache.emoji_map import EmojiMap
from emojicache.models import SystemEmoji
from tests.fixtures import APPLE, custom_emoji

THUMBSUP = SystemEmoji(name="+1", unified="1f44d", short_names=("thumbsup", "+1"))


def test_lookup() -> None:
    party = custom_emoji("party")
    emoji_map = EmojiMap([APPLE, THUMBSUP], [party])

    assert emoji_map.get("apple") == APPLE
    assert emoji_map.get("thumbsup") is emoji_map.get("+1") is THUMBSUP
    assert emoji_map.get("party") == party
    assert emoji_map.get_by_id(party.id) == party
    assert emoji_map.get("missing") is None
    assert emoji_map.get_by_id("missing") is None
    assert emoji_map.has("party")
    assert not emoji_map.has("missing")
    assert sorted(emoji_map) == ["+1", "apple", "party", "thumbsup"]
    assert len(emoji_map) == 4


def test_system_emoji_have_no_id() -> None:
    emoji_map = EmojiMap([APPLE])
    assert emoji_map.get_by_id("apple") is None


def test_first_system_alias_wins() -> None:
    shadow = SystemEmoji(name="apple_2", unified="1f34f", short_names=("apple",))
    assert EmojiMap([APPLE, shadow]).get("apple") == APPLE


def test_is_read_only() -> None:
    emoji_map = EmojiMap([APPLE])
    with pytest.raises(TypeError):
        emoji_map["party"] = custom_emoji("party")  # pyright: ignore[reportIndexIssue]


def test_repr() -> None:
    assert repr(EmojiMap([APPLE], [custom_emoji("a")])) == "<EmojiMap names=2 custom=1>"


@given(st.sets(st.text(min_size=1, max_size=10), max_size=30))
def test_custom_always_wins(names: set[str]) -> None:
    system = [SystemEmoji(name=name, unified="1f600") for name in names]
    custom = [custom_emoji(name) for name in names]

    emoji_map = EmojiMap(system, custom)

    assert len(emoji_map) == len(names)
    for emoji in custom:
        assert emoji_map.get(emoji.name) == emoji
        assert emoji_map.get_by_id(emoji.id) == emoji
