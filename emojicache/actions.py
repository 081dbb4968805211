from __future__ import annotations

from typing import TYPE_CHECKING, final

from loguru import logger

if TYPE_CHECKING:
    from emojicache.client import EmojiClient, EmojiSort
    from emojicache.models import CustomEmoji
    from emojicache.store import EmojiStore


@final
class EmojiActions:
    """
    User-driven custom emoji management.

    Each action talks to the server first and only reflects the confirmed result
    into the store. TransportError propagates to the caller.
    """

    def __init__(self, client: EmojiClient, store: EmojiStore) -> None:
        self.client = client
        self.store = store

    async def create_custom_emoji(
        self, name: str, creator_id: str, image: bytes, filename: str = "emoji.png"
    ) -> CustomEmoji:
        emoji = await self.client.create_emoji(name, creator_id, image, filename)
        logger.info("created custom emoji {} ({})", emoji.name, emoji.id)
        self.store.receive_custom_emojis([emoji])
        return emoji

    async def delete_custom_emoji(self, emoji_id: str) -> None:
        await self.client.delete_emoji(emoji_id)
        if removed := self.store.remove_custom_emoji(emoji_id):
            logger.info("deleted custom emoji {} ({})", removed.name, emoji_id)

    async def fetch_custom_emoji(self, emoji_id: str) -> CustomEmoji:
        emoji = await self.client.get_emoji(emoji_id)
        self.store.receive_custom_emojis([emoji])
        return emoji

    async def fetch_custom_emoji_by_name(self, name: str) -> CustomEmoji | None:
        if (emoji := await self.client.get_emoji_by_name(name)) is None:
            self.store.mark_nonexistent([name])
            return None
        self.store.receive_custom_emojis([emoji])
        return emoji

    async def load_custom_emojis(
        self, page: int = 0, per_page: int = 60, sort: EmojiSort = "name"
    ) -> list[CustomEmoji]:
        emojis = await self.client.get_emojis(page, per_page, sort)
        self.store.receive_custom_emojis(emojis)
        return emojis

    async def search_custom_emojis(
        self, term: str, *, prefix_only: bool = False
    ) -> list[CustomEmoji]:
        emojis = await self.client.search_emojis(term, prefix_only=prefix_only)
        self.store.receive_custom_emojis(emojis)
        return emojis

    async def autocomplete_custom_emojis(self, name: str) -> list[CustomEmoji]:
        emojis = await self.client.autocomplete_emojis(name)
        self.store.receive_custom_emojis(emojis)
        return emojis
