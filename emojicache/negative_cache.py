from __future__ import annotations

from typing import TYPE_CHECKING, final

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Iterator


@final
class NegativeCache:
    """Names the remote source has explicitly reported as nonexistent."""

    def __init__(self) -> None:
        self._names = set[str]()

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def mark_absent(self, name: str) -> None:
        logger.debug("marking {} as nonexistent", name)
        self._names.add(name)

    def is_absent(self, name: str) -> bool:
        return name in self._names

    def clear(self, name: str) -> bool:
        if name not in self._names:
            return False
        logger.debug("{} exists again; dropping negative entry", name)
        self._names.discard(name)
        return True
