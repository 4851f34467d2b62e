"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sarweb.adapters.base.adapter import ClusterHealth, RawResults, SearchAdapter
from sarweb.adapters.base.exceptions import ConnectionError, DocumentNotFoundError
from sarweb.api.app import create_app
from sarweb.config.settings import Settings


class FakeAdapter(SearchAdapter):
    """In-memory report store that records the calls it receives."""

    def __init__(self, documents: list[dict[str, Any]] | None = None) -> None:
        self.documents = list(documents or [])
        self.search_calls: list[dict[str, Any]] = []
        self.fetch_calls: list[str] = []
        self.error: Exception | None = None
        self.healthy = True
        self.initialized = False

    @property
    def name(self) -> str:
        return "fake"

    async def initialize(self) -> None:
        self.initialized = True

    async def shutdown(self) -> None:
        self.initialized = False

    async def search(
        self,
        query: dict[str, Any],
        *,
        from_: int,
        size: int,
        sort: list[dict[str, Any]],
    ) -> RawResults:
        self.search_calls.append({"query": query, "from_": from_, "size": size, "sort": sort})
        if self.error:
            raise self.error
        return RawResults(
            total_hits=len(self.documents),
            documents=self.documents[from_ : from_ + size],
        )

    async def fetch_document(self, doc_id: str) -> dict[str, Any]:
        self.fetch_calls.append(doc_id)
        if self.error:
            raise self.error
        for doc in self.documents:
            if doc["_id"] == doc_id:
                return {"_index": "sar-reports", "found": True, **doc}
        raise DocumentNotFoundError(f"Document '{doc_id}' not found.")

    async def health_check(self) -> ClusterHealth:
        if not self.healthy:
            raise ConnectionError("Cannot reach Elasticsearch cluster: connection refused")
        return ClusterHealth(cluster_status="green", number_of_nodes=3)


def make_hit(doc_id: str, **source: Any) -> dict[str, Any]:
    """Build a raw search hit as returned by Elasticsearch."""
    return {"_index": "sar-reports", "_id": doc_id, "_score": None, "_source": source}


@pytest.fixture
def settings() -> Settings:
    """Production-mode settings: error details are never disclosed."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        environment="production",
    )


@pytest.fixture
def dev_settings() -> Settings:
    """Development-mode settings: error details are included in responses."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        environment="development",
    )


@pytest.fixture
def sample_hits() -> list[dict[str, Any]]:
    return [
        make_hit(
            f"sar-{i:03d}",
            financial_institution_name="Acme Bank" if i % 2 == 0 else "First Federal",
            suspect_name=f"Suspect {i}",
            suspect_entity_name=f"Entity {i} LLC",
            account_number=f"ACCT-{1000 + i}",
            address=f"{i} Main St",
            report_date=f"2024-01-{(i % 28) + 1:02d}",
            **{"@timestamp": f"2024-02-01T00:00:{i % 60:02d}Z"},
        )
        for i in range(25)
    ]


@pytest.fixture
def adapter(sample_hits: list[dict[str, Any]]) -> FakeAdapter:
    return FakeAdapter(sample_hits)


@pytest.fixture
def app(settings: Settings, adapter: FakeAdapter) -> FastAPI:
    return create_app(settings, adapter=adapter)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


@pytest.fixture
def dev_client(dev_settings: Settings, adapter: FakeAdapter) -> TestClient:
    return TestClient(create_app(dev_settings, adapter=adapter))
