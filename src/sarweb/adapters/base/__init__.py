"""Base adapter interface — Abstract classes for search engine connectors."""

from sarweb.adapters.base.adapter import ClusterHealth, RawResults, SearchAdapter

__all__ = ["ClusterHealth", "RawResults", "SearchAdapter"]
