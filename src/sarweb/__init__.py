"""SAR Web — HTTP gateway for paginated, searchable SAR report records."""

__version__ = "1.0.0"
