from .actions import EmojiActions
from .cache import EmojiCache
from .client import EmojiClient
from .coordinator import EmojiSource, FetchCoordinator
from .emoji_map import EmojiMap
from .errors import EmojiCacheError, TransportError
from .models import CustomEmoji, EmojiRecord, FetchResult, SystemEmoji, image_url
from .negative_cache import NegativeCache
from .resolution import Subscription, names_in_text
from .store import EmojiStore, StoreChange

__all__ = (
    "CustomEmoji",
    "EmojiActions",
    "EmojiCache",
    "EmojiCacheError",
    "EmojiClient",
    "EmojiMap",
    "EmojiRecord",
    "EmojiSource",
    "EmojiStore",
    "FetchCoordinator",
    "FetchResult",
    "NegativeCache",
    "StoreChange",
    "Subscription",
    "SystemEmoji",
    "TransportError",
    "image_url",
    "names_in_text",
)
