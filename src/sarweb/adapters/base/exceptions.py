"""Failures raised by report store adapters.

Endpoints map these to HTTP statuses: ``DocumentNotFoundError`` becomes 404,
every other ``AdapterError`` becomes 500 (503 on the health route).
"""


class AdapterError(Exception):
    """Any failure talking to the report store. Messages may name internal hosts."""


class ConnectionError(AdapterError):
    """The cluster is unreachable, or the client was used before ``initialize``."""


class DocumentNotFoundError(AdapterError):
    """No SAR report is stored under the requested identifier."""


class QueryError(AdapterError):
    """A search or document fetch was sent but the store rejected or failed it."""


class ConfigurationError(AdapterError):
    """Adapter settings are unusable, e.g. an empty cluster URL."""
