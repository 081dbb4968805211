import asyncio
import sys
from contextlib import suppress

from emojicache import log
from emojicache.cache import EmojiCache
from emojicache.client import EmojiClient
from emojicache.config import Config
from emojicache.models import CustomEmoji, SystemEmoji, image_url


async def main(names: list[str]) -> None:
    config = Config()  # pyright: ignore[reportCallIssue]
    log.setup(config)

    async with EmojiClient.from_config(config) as client:
        cache = EmojiCache.from_config(config, client)
        for name in names:
            cache.resolve(name)
        await cache.aclose()

        snapshot = cache.snapshot()
        for name in names:
            match snapshot.get(name):
                case SystemEmoji() as emoji:
                    print(f":{name}: {emoji.char} (system, U+{emoji.unified.upper()})")
                case CustomEmoji() as emoji:
                    url = image_url(emoji, config.server_url)
                    print(f":{name}: custom {emoji.id} {url}")
                case None if cache.is_absent(name):
                    print(f":{name}: does not exist")
                case None:
                    print(f":{name}: could not be resolved")


if not sys.argv[1:]:
    sys.exit("usage: python -m emojicache NAME...")

with suppress(KeyboardInterrupt):
    asyncio.run(main(sys.argv[1:]))
