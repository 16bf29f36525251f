"""Location lookup service: CRUD and nearest-to-address queries over an in-memory store."""

__all__ = []
