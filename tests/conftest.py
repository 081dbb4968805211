from tests.fixtures import cache, scheduler, source, store

__all__ = ("cache", "scheduler", "source", "store")
