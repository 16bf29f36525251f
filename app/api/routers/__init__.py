"""Router modules exposed for convenient imports."""

from . import healthz, locations, readyz

__all__ = ["healthz", "locations", "readyz"]
