"""Run the location lookup API under uvicorn.

The configured locations CSV (``LOCATIONS_CSV``) is loaded during startup; the
process exits non-zero if it cannot be read.
"""

from __future__ import annotations

import argparse
import os
from collections.abc import Sequence

import uvicorn


def _default_port() -> int:
    raw = os.getenv("PORT", "3000")
    try:
        port = int(raw)
    except ValueError:
        raise SystemExit(f"PORT must be an integer, got {raw!r}") from None
    if not 0 <= port <= 65535:
        raise SystemExit(f"PORT out of range: {port}")
    return port


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the location lookup API")
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"), help="Bind address")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: $PORT or 3000)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (dev only)")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    port = args.port if args.port is not None else _default_port()
    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=port,
        reload=args.reload,
        log_config=None,  # app.logging owns the handlers
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
