"""Elasticsearch adapter — Report search and retrieval for Elasticsearch (v8+).

Uses the async ``elasticsearch`` client.  The client is created lazily in
``initialize()`` without contacting the cluster, so the gateway starts even
when the backend is down; ``/api/health`` reports the outage instead.
"""

from __future__ import annotations

import logging
from typing import Any

from elasticsearch import AsyncElasticsearch, NotFoundError

from sarweb.adapters.base.adapter import ClusterHealth, RawResults, SearchAdapter
from sarweb.adapters.base.exceptions import (
    ConfigurationError,
    ConnectionError,
    DocumentNotFoundError,
    QueryError,
)

logger = logging.getLogger(__name__)


class ElasticsearchAdapter(SearchAdapter):
    """Search adapter for the SAR report index in Elasticsearch.

    Args:
        url: Elasticsearch node URL.
        index: Index holding the report documents.
        username: Optional HTTP basic-auth username.
        password: Optional HTTP basic-auth password.
        verify_certs: Whether to verify TLS certificates.
        request_timeout: Upper bound in seconds for each backend call.
        **kwargs: Additional keyword arguments forwarded to ``AsyncElasticsearch``.
    """

    def __init__(
        self,
        url: str = "http://localhost:9200",
        index: str = "sar-reports",
        username: str | None = None,
        password: str | None = None,
        verify_certs: bool = True,
        request_timeout: float = 30.0,
        **kwargs: Any,
    ) -> None:
        self._url = url
        self._index = index
        self._username = username
        self._password = password
        self._verify_certs = verify_certs
        self._request_timeout = request_timeout
        self._extra_kwargs = kwargs
        self._client: Any = None

    @property
    def name(self) -> str:
        return "elasticsearch"

    @property
    def index(self) -> str:
        return self._index

    async def initialize(self) -> None:
        """Create the ``AsyncElasticsearch`` client."""
        if not self._url:
            raise ConfigurationError("Elasticsearch URL must not be empty.")

        client_kwargs: dict[str, Any] = {
            "hosts": [self._url],
            "verify_certs": self._verify_certs,
            "request_timeout": self._request_timeout,
        }
        if not self._verify_certs:
            client_kwargs["ssl_show_warn"] = False
        if self._username and self._password:
            client_kwargs["basic_auth"] = (self._username, self._password)

        client_kwargs.update(self._extra_kwargs)

        try:
            self._client = AsyncElasticsearch(**client_kwargs)
        except ValueError as e:
            raise ConfigurationError(f"Invalid Elasticsearch configuration: {e}") from e
        logger.info("Elasticsearch client configured for %s (index=%s)", self._url, self._index)

    async def shutdown(self) -> None:
        """Close the Elasticsearch client."""
        if self._client:
            await self._client.close()
            self._client = None

    # ── Search ───────────────────────────────────────────────────────────

    async def search(
        self,
        query: dict[str, Any],
        *,
        from_: int,
        size: int,
        sort: list[dict[str, Any]],
    ) -> RawResults:
        """Run one page of a report query against the configured index."""
        client = self._require_client()
        try:
            response = await client.search(
                index=self._index,
                query=query,
                from_=from_,
                size=size,
                sort=sort,
            )
        except Exception as e:
            raise QueryError(f"Elasticsearch query failed: {e}") from e

        body = getattr(response, "body", response)
        hits = body.get("hits", {})
        return RawResults(
            total_hits=self._total_value(hits.get("total")),
            documents=list(hits.get("hits", [])),
        )

    async def fetch_document(self, doc_id: str) -> dict[str, Any]:
        """Retrieve a single report document by ID."""
        client = self._require_client()
        try:
            response = await client.get(index=self._index, id=doc_id)
        except NotFoundError as e:
            raise DocumentNotFoundError(f"Document '{doc_id}' not found.") from e
        except Exception as e:
            raise QueryError(f"Failed to fetch document: {e}") from e
        return dict(getattr(response, "body", response))

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> ClusterHealth:
        """Query cluster health; any failure means the cluster is unreachable."""
        client = self._require_client()
        try:
            response = await client.cluster.health()
        except Exception as e:
            raise ConnectionError(f"Cannot reach Elasticsearch cluster: {e}") from e

        body = getattr(response, "body", response)
        return ClusterHealth(
            cluster_status=body.get("status", "unknown"),
            number_of_nodes=body.get("number_of_nodes", 0),
        )

    # ── Helpers ──────────────────────────────────────────────────────────

    def _require_client(self) -> Any:
        if not self._client:
            raise ConnectionError("Elasticsearch client not initialized.")
        return self._client

    @staticmethod
    def _total_value(total: Any) -> int:
        """Read ``hits.total`` in both the object (7+) and integer (6.x) forms."""
        if isinstance(total, dict):
            return int(total.get("value", 0))
        if isinstance(total, int):
            return total
        return 0
