from __future__ import annotations

from functools import lru_cache
from typing import Any

import httpx
import structlog

from referrals_report.core.config import get_settings
from referrals_report.referrals.errors import RetrievalError
from referrals_report.referrals.queries import SUBGRAPH_META_QUERY

logger = structlog.get_logger(__name__)


class SubgraphClient:
    """GraphQL-over-HTTP executor for one subgraph endpoint."""

    def __init__(
        self,
        url: str,
        *,
        chain_id: int | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self.chain_id = chain_id
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> "SubgraphClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def query(self, query: str) -> dict[str, Any]:
        try:
            response = await self._client.post(self.url, json={"query": query})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.exception(
                "subgraph_query_failed",
                url=self.url,
                chain_id=self.chain_id,
            )
            raise RetrievalError(f"subgraph request failed: {exc}", chain_id=self.chain_id) from exc

        if not isinstance(payload, dict):
            raise RetrievalError("subgraph response is not a JSON object", chain_id=self.chain_id)

        errors = payload.get("errors")
        if errors:
            logger.warning(
                "subgraph_query_rejected",
                url=self.url,
                chain_id=self.chain_id,
                errors=errors,
            )
            raise RetrievalError(f"subgraph returned errors: {errors}", chain_id=self.chain_id)

        data = payload.get("data")
        if not isinstance(data, dict):
            raise RetrievalError("subgraph response has no data", chain_id=self.chain_id)
        return data

    async def ping(self) -> int:
        data = await self.query(SUBGRAPH_META_QUERY)
        try:
            return int(data["_meta"]["block"]["number"])
        except (KeyError, TypeError, ValueError) as exc:
            raise RetrievalError("subgraph meta response is malformed", chain_id=self.chain_id) from exc


def build_subgraph_clients(settings: object) -> dict[int, SubgraphClient]:
    urls = getattr(settings, "referrals_subgraph_urls", {}) or {}
    timeout = float(getattr(settings, "subgraph_http_timeout_seconds", 10.0))
    clients: dict[int, SubgraphClient] = {}
    for chain_id, url in urls.items():
        if not isinstance(url, str) or not url.strip():
            continue
        clients[int(chain_id)] = SubgraphClient(url.strip(), chain_id=int(chain_id), timeout=timeout)
    return clients


@lru_cache(maxsize=1)
def get_subgraph_clients() -> dict[int, SubgraphClient]:
    return build_subgraph_clients(get_settings())
