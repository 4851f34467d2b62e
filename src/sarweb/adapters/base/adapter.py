"""Base search adapter — Abstract interface for the report store connector.

The gateway talks to its document store only through this interface.
An adapter is responsible for:
  1. Executing paginated, sorted search queries against the report index
  2. Fetching individual documents by identifier
  3. Reporting cluster health

Adapters never retry: every operation issues exactly one backend call and
failures propagate to the caller as ``AdapterError`` subclasses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class RawResults(BaseModel):
    """Raw search hits from a backend before they are reshaped into reports."""

    total_hits: int = Field(default=0, description="Total number of matching documents")
    documents: list[dict[str, Any]] = Field(default_factory=list, description="Raw hit dicts (_id, _source, ...)")


class ClusterHealth(BaseModel):
    """Cluster-level health snapshot, fetched fresh on every check."""

    cluster_status: str = Field(description="Backend cluster status (green, yellow, red)")
    number_of_nodes: int = Field(default=0, description="Number of nodes in the cluster")


class SearchAdapter(ABC):
    """Abstract base class for report store adapters.

    All adapters must implement:
      - search(): Execute a query page and return raw hits plus the total
      - fetch_document(): Retrieve a single document by ID
      - health_check(): Report cluster health
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique adapter name (e.g., 'elasticsearch')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Create the backend client.

        Called once during application startup.
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Close connections and release resources."""

    @abstractmethod
    async def search(
        self,
        query: dict[str, Any],
        *,
        from_: int,
        size: int,
        sort: list[dict[str, Any]],
    ) -> RawResults:
        """Execute a search query against the report index.

        Args:
            query: Query DSL clause (``match_all`` or ``multi_match``).
            from_: Zero-based offset of the first hit.
            size: Maximum number of hits to return.
            sort: Sort clauses, applied by the backend as given.

        Returns:
            Raw hits and the total match count.

        Raises:
            QueryError: If the backend call fails.
        """

    @abstractmethod
    async def fetch_document(self, doc_id: str) -> dict[str, Any]:
        """Retrieve a single document by its ID.

        Args:
            doc_id: The document identifier.

        Returns:
            Raw document data (``_id`` and ``_source``).

        Raises:
            DocumentNotFoundError: If the document does not exist.
            QueryError: For any other backend failure.
        """

    @abstractmethod
    async def health_check(self) -> ClusterHealth:
        """Check the health of the backend cluster.

        Raises:
            ConnectionError: If the cluster cannot be reached.
        """
