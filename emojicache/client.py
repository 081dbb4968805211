from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Literal, Self, final

import httpx
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from emojicache.errors import TransportError
from emojicache.models import CustomEmoji, FetchResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from emojicache.config import Config

type EmojiSort = Literal["", "name"]

API_PREFIX = "/api/v4"

_EMOJI = TypeAdapter(CustomEmoji)
_EMOJI_LIST = TypeAdapter(list[CustomEmoji])


@final
class EmojiClient:
    """Async client for a chat server's custom emoji REST endpoints."""

    def __init__(
        self,
        server_url: str,
        token: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=server_url.rstrip("/") + API_PREFIX,
            headers={
                "Authorization": f"Bearer {token}",
                "X-Requested-With": "XMLHttpRequest",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: Config) -> Self:
        return cls(
            config.server_url,
            config.token.get_secret_value(),
            timeout=config.request_timeout,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            msg = f"{method} {path} failed: {e!r}"
            raise TransportError(msg) from e
        if not resp.is_success:
            msg = f"{method} {path} returned {resp.status_code}"
            raise TransportError(msg, status_code=resp.status_code)
        return resp

    @staticmethod
    def _parse[T](adapter: TypeAdapter[T], resp: httpx.Response) -> T:
        try:
            return adapter.validate_json(resp.content)
        except ValidationError as e:
            msg = f"malformed response from {resp.request.url.path}"
            raise TransportError(msg, status_code=resp.status_code) from e

    async def fetch_emojis_by_names(self, names: Iterable[str]) -> FetchResult:
        requested = frozenset(names)
        if not requested:
            return FetchResult(found=[], not_found=frozenset())
        resp = await self._request("POST", "/emoji/names", json=sorted(requested))
        found = self._parse(_EMOJI_LIST, resp)
        not_found = requested.difference(emoji.name for emoji in found)
        logger.debug(
            "server knows {} of {} requested emoji", len(found), len(requested)
        )
        return FetchResult(found=found, not_found=not_found)

    async def get_emoji(self, emoji_id: str) -> CustomEmoji:
        resp = await self._request("GET", f"/emoji/{emoji_id}")
        return self._parse(_EMOJI, resp)

    async def get_emoji_by_name(self, name: str) -> CustomEmoji | None:
        try:
            resp = await self._request("GET", f"/emoji/name/{name}")
        except TransportError as e:
            if e.status_code == httpx.codes.NOT_FOUND:
                return None
            raise
        return self._parse(_EMOJI, resp)

    async def get_emojis(
        self, page: int = 0, per_page: int = 60, sort: EmojiSort = "name"
    ) -> list[CustomEmoji]:
        resp = await self._request(
            "GET", "/emoji", params={"page": page, "per_page": per_page, "sort": sort}
        )
        return self._parse(_EMOJI_LIST, resp)

    async def search_emojis(
        self, term: str, *, prefix_only: bool = False
    ) -> list[CustomEmoji]:
        resp = await self._request(
            "POST", "/emoji/search", json={"term": term, "prefix_only": prefix_only}
        )
        return self._parse(_EMOJI_LIST, resp)

    async def autocomplete_emojis(self, name: str) -> list[CustomEmoji]:
        resp = await self._request(
            "GET", "/emoji/autocomplete", params={"name": name}
        )
        return self._parse(_EMOJI_LIST, resp)

    async def create_emoji(
        self, name: str, creator_id: str, image: bytes, filename: str = "emoji.png"
    ) -> CustomEmoji:
        resp = await self._request(
            "POST",
            "/emoji",
            data={"emoji": json.dumps({"name": name, "creator_id": creator_id})},
            files={"image": (filename, image)},
        )
        return self._parse(_EMOJI, resp)

    async def delete_emoji(self, emoji_id: str) -> None:
        await self._request("DELETE", f"/emoji/{emoji_id}")
