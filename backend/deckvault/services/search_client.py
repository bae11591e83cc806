"""HTTP client for the slide search engine (Meilisearch REST API).

The engine is an external collaborator: this module only transports the
query, filter and page window and reports failures. Every transport error,
non-2xx answer or malformed body becomes SearchUnavailableError with the
underlying message preserved in ``details["reason"]``.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from ..core.config import settings
from ..exceptions import SearchUnavailableError

logger = logging.getLogger(__name__)

# Fields the engine should mark up with highlight tags.
HIGHLIGHT_ATTRIBUTES = ["slide_text", "description", "file_name"]


@dataclass
class SearchPage:
    """One page of engine results."""

    hits: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0


class SearchClient:
    """Synchronous client for one search index.

    Args:
        base_url: Engine URL, e.g. ``http://localhost:7700``.
        api_key: Search (read) key sent as a Bearer token.
        index: Index uid holding slide documents.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests inject a MockTransport).
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        index: str = "slides",
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.index = index
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> "SearchClient":
        """Build a client from configuration. Raises when search is not configured."""
        if not settings.search_configured:
            raise SearchUnavailableError("Search service not configured")
        return cls(
            base_url=settings.search_url,
            api_key=settings.search_api_key,
            index=settings.search_index,
            timeout=settings.search_timeout_seconds,
        )

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
            transport=self._transport,
        )

    def is_healthy(self) -> bool:
        """True when the engine answers its health probe with ``available``."""
        try:
            with self._client() as client:
                resp = client.get("/health")
            return resp.status_code == 200 and resp.json().get("status") == "available"
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Search health check failed: %s", e)
            return False

    def search(self, query: str, filter: str, page: int, per_page: int) -> SearchPage:
        """Run one query against the index.

        Raises:
            SearchUnavailableError: on any engine-side failure.
        """
        body = {
            "q": query or "",
            "filter": filter,
            "page": page,
            "hitsPerPage": per_page,
            "attributesToHighlight": HIGHLIGHT_ATTRIBUTES,
        }
        try:
            with self._client() as client:
                resp = client.post(f"/indexes/{self.index}/search", json=body)
                resp.raise_for_status()
                payload = resp.json()
        except httpx.HTTPStatusError as e:
            reason = f"{e.response.status_code}: {e.response.text[:500]}"
            logger.error("Search engine rejected query", extra={"reason": reason, "filter": filter})
            raise SearchUnavailableError(reason=reason) from e
        except httpx.HTTPError as e:
            logger.error("Search engine unreachable", extra={"reason": str(e)})
            raise SearchUnavailableError(reason=str(e)) from e
        except ValueError as e:
            logger.error("Search engine returned malformed JSON", extra={"reason": str(e)})
            raise SearchUnavailableError(reason=f"Malformed response: {e}") from e

        hits = payload.get("hits") or []
        total = payload.get("totalHits", payload.get("estimatedTotalHits", len(hits)))
        return SearchPage(hits=list(hits), total=int(total or 0))
