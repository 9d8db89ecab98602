"""
Local Herro CLI entrypoint.

- `serve`: run the HTTP API with uvicorn (port from `--port`, `PORT`, or settings).
- `settings`: print the effective settings (YAML defaults + env overrides).
- `distance`: haversine distance between two points, handy when checking radii by hand.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

import uvicorn

from localherro.config.settings import get_settings
from localherro.core.geo import GeoPoint, haversine_km
from localherro.core.logging import configure_logging


def _cmd_serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    host = str(args.host or settings.server.host)
    port = int(args.port or settings.server.port)
    uvicorn.run(
        "localherro.api.app:app",
        host=host,
        port=port,
        reload=bool(args.reload),
        log_config=None,
    )
    return 0


def _cmd_settings(_: argparse.Namespace) -> int:
    settings = get_settings()
    print(json.dumps(settings.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return 0


def _cmd_distance(args: argparse.Namespace) -> int:
    a = GeoPoint(lat=float(args.lat1), lon=float(args.lon1))
    b = GeoPoint(lat=float(args.lat2), lon=float(args.lon2))
    print(f"{haversine_km(a, b):.6f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the Local Herro CLI."""
    parser = argparse.ArgumentParser(prog="localherro")
    sub = parser.add_subparsers(dest="command", required=True)

    srv = sub.add_parser("serve", help="Run the HTTP API.")
    srv.add_argument("--host", type=str, default=None)
    srv.add_argument("--port", type=int, default=None)
    srv.add_argument("--reload", action="store_true", help="Restart on code changes (development only).")
    srv.set_defaults(func=_cmd_serve)

    st = sub.add_parser("settings", help="Print effective settings as JSON.")
    st.set_defaults(func=_cmd_settings)

    dist = sub.add_parser("distance", help="Great-circle distance in km between two lat/lon points.")
    dist.add_argument("lat1", type=float)
    dist.add_argument("lon1", type=float)
    dist.add_argument("lat2", type=float)
    dist.add_argument("lon2", type=float)
    dist.set_defaults(func=_cmd_distance)

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m localherro.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
