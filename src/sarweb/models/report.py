"""SAR report shape.

Reports are passed through as they are stored: this service does not define
or validate their schema.  The only change made on the way out is that the
store-assigned identifier is exposed as ``id``.
"""

from __future__ import annotations

from typing import Any

Report = dict[str, Any]
"""A report document: field name to value, schema owned by the store."""


def hit_to_report(hit: dict[str, Any]) -> Report:
    """Flatten a raw hit (``_id`` + ``_source``) into ``{"id": ..., **fields}``.

    The store identifier wins over any ``id`` field inside the source document.
    """
    source = hit.get("_source") or {}
    report: Report = {"id": hit.get("_id")}
    report.update((key, value) for key, value in source.items() if key != "id")
    return report
