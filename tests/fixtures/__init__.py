from .cache import cache, scheduler, source, store
from .source import APPLE, FakeSource, ManualScheduler, custom_emoji, settle

__all__ = (
    "APPLE",
    "FakeSource",
    "ManualScheduler",
    "cache",
    "custom_emoji",
    "scheduler",
    "settle",
    "source",
    "store",
)
