"""Search adapter layer — Connectors for the document store holding SAR reports.

Built-in adapters:
  - elasticsearch: Elasticsearch v8+ (BM25 full-text search)

Implement ``SearchAdapter`` to serve reports from another backend.
"""
