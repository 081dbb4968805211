from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from pydantic import TypeAdapter

from emojicache.models import SystemEmoji

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

_CATALOGUE = TypeAdapter(list[SystemEmoji])

# A small built-in catalogue; deployments with the full Unicode set point
# `EMOJI_SYSTEM_EMOJI_FILE` at a JSON export instead.
_DEFAULT_EMOJIS: tuple[tuple[str, str, tuple[str, ...], str], ...] = (
    ("grinning", "1f600", (), "smileys-emotion"),
    ("smiley", "1f603", (), "smileys-emotion"),
    ("smile", "1f604", (), "smileys-emotion"),
    ("laughing", "1f606", ("satisfied",), "smileys-emotion"),
    ("joy", "1f602", (), "smileys-emotion"),
    ("wink", "1f609", (), "smileys-emotion"),
    ("blush", "1f60a", (), "smileys-emotion"),
    ("thinking_face", "1f914", ("thinking",), "smileys-emotion"),
    ("slightly_frowning_face", "1f641", (), "smileys-emotion"),
    ("cry", "1f622", (), "smileys-emotion"),
    ("heart", "2764-fe0f", (), "smileys-emotion"),
    ("broken_heart", "1f494", (), "smileys-emotion"),
    ("+1", "1f44d", ("thumbsup",), "people-body"),
    ("-1", "1f44e", ("thumbsdown",), "people-body"),
    ("wave", "1f44b", (), "people-body"),
    ("clap", "1f44f", (), "people-body"),
    ("raised_hands", "1f64c", (), "people-body"),
    ("pray", "1f64f", (), "people-body"),
    ("eyes", "1f440", (), "people-body"),
    ("apple", "1f34e", (), "food-drink"),
    ("tada", "1f389", (), "activities"),
    ("fire", "1f525", (), "travel-places"),
    ("rocket", "1f680", (), "travel-places"),
    ("white_check_mark", "2705", (), "symbols"),
    ("x", "274c", (), "symbols"),
    ("warning", "26a0-fe0f", (), "symbols"),
    ("100", "1f4af", (), "symbols"),
)

DEFAULT_SYSTEM_EMOJIS = tuple(
    SystemEmoji(name=name, unified=unified, short_names=aliases, category=category)
    for name, unified, aliases, category in _DEFAULT_EMOJIS
)


def load_system_emojis(path: Path) -> list[SystemEmoji]:
    emojis = _CATALOGUE.validate_json(path.read_bytes())
    logger.info("loaded {} system emoji from {}", len(emojis), path)
    return emojis


def system_emoji_names(emojis: Iterable[SystemEmoji]) -> frozenset[str]:
    return frozenset(name for emoji in emojis for name in emoji.names)
