"""Remote-table backend: the same record contract over a PostgREST-style HTTP API (Supabase)."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from intake.storage.base import Predicate, RecordStore, StoreError, T

logger = logging.getLogger(__name__)

# Error bodies are truncated to keep exceptions and log lines bounded.
MAX_ERROR_BODY_CHARS = 500


class RemoteStoreError(StoreError):
    """Raised on a non-2xx response or a transport failure (status_code is None for the latter)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class RemoteTableStore(RecordStore[T]):
    """
    Stores a collection as rows of table <base_url>/<collection>.

    Predicates cannot be pushed down, so find/update/delete first pull the whole
    table and filter locally, then address the target row(s) by id. Failures are
    raised as RemoteStoreError rather than read as an empty collection.
    """

    def __init__(
        self,
        model: type[T],
        collection: str,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
    ) -> None:
        super().__init__(model, collection)
        self.table_url = f"{base_url.rstrip('/')}/{collection}"
        self._api_key = api_key
        self._timeout = timeout

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        params: dict[str, str],
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        """Send one request; raise RemoteStoreError unless the response is 2xx."""
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self._timeout)) as client:
                response = await client.request(
                    method,
                    self.table_url,
                    params=params,
                    json=json,
                    headers=self._headers(prefer),
                )
        except httpx.TimeoutException as e:
            raise RemoteStoreError(
                f"{method} {self.collection} timed out after {self._timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise RemoteStoreError(f"{method} {self.collection} failed: {e}") from e

        if not response.is_success:
            body = (response.text or "")[:MAX_ERROR_BODY_CHARS]
            logger.error(
                "Remote store request failed",
                extra={
                    "method": method,
                    "table": self.collection,
                    "status_code": response.status_code,
                },
            )
            raise RemoteStoreError(
                f"{method} {self.collection} returned {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )
        return response

    def _decode(self, response: httpx.Response) -> Any:
        """Parse a 2xx body as JSON; a non-JSON body (e.g. a proxy error page) is a RemoteStoreError."""
        try:
            return response.json()
        except ValueError as e:
            body = (response.text or "")[:MAX_ERROR_BODY_CHARS]
            raise RemoteStoreError(
                f"{self.collection} returned a non-JSON body (status {response.status_code})",
                status_code=response.status_code,
                body=body,
            ) from e

    def _first_row(self, response: httpx.Response) -> T | None:
        if not response.content:
            return None
        rows = self._decode(response)
        if isinstance(rows, list) and rows:
            return self.model.model_validate(rows[0])
        return None

    async def read_all(self) -> list[T]:
        response = await self._request("GET", params={"select": "*"})
        rows = self._decode(response) or []
        return [self.model.model_validate(row) for row in rows]

    async def create(self, item: T) -> T:
        row = item.model_dump(mode="json", by_alias=True, exclude_none=True)
        response = await self._request(
            "POST", params={}, json=row, prefer="return=representation"
        )
        return self._first_row(response) or item

    async def update(self, predicate: Predicate[T], changes: Mapping[str, Any]) -> T | None:
        current = await self.find_one(predicate)
        if current is None:
            return None
        merged = self.merge(current, changes)
        # Send only the changed columns, under their stored (camelCase) names.
        patch = merged.model_dump(mode="json", by_alias=True, include=set(changes))
        response = await self._request(
            "PATCH",
            params={"id": f"eq.{current.id}"},
            json=patch,
            prefer="return=representation",
        )
        return self._first_row(response) or merged

    async def delete(self, predicate: Predicate[T]) -> bool:
        targets = await self.find_many(predicate)
        for target in targets:
            await self._request("DELETE", params={"id": f"eq.{target.id}"})
        return bool(targets)
