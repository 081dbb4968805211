from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SystemEmoji(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    # Hyphen-separated hex codepoints, e.g. "1f44d" or "1f1fa-1f1f8".
    unified: str
    short_names: tuple[str, ...] = ()
    category: str = "other"

    @field_validator("unified", mode="after")
    @classmethod
    def _normalize_unified(cls, value: str) -> str:
        codepoints = value.lower().split("-")
        if not all(codepoints) or any(
            c.strip("0123456789abcdef") for c in codepoints
        ):
            msg = f"`unified` must be hyphen-separated hex codepoints, got {value!r}"
            raise ValueError(msg)
        return "-".join(codepoints)

    @property
    def names(self) -> tuple[str, ...]:
        """The primary name followed by every alias, without duplicates."""
        return tuple(dict.fromkeys((self.name, *self.short_names)))

    @property
    def char(self) -> str:
        return "".join(chr(int(cp, 16)) for cp in self.unified.split("-"))


class CustomEmoji(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    creator_id: str
    create_at: int = 0
    update_at: int = 0
    delete_at: int = 0
    category: Literal["custom"] = "custom"


type EmojiRecord = SystemEmoji | CustomEmoji


class FetchResult(NamedTuple):
    found: list[CustomEmoji]
    not_found: frozenset[str]


def image_url(emoji: EmojiRecord, server_url: str) -> str:
    base = server_url.rstrip("/")
    match emoji:
        case CustomEmoji(id=emoji_id):
            return f"{base}/api/v4/emoji/{emoji_id}/image"
        case SystemEmoji(unified=unified):
            return f"{base}/static/emoji/{unified}.png"
