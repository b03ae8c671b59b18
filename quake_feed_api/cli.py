"""
Command line front-end for a running Quake Feed API.

Usage:
    quake-feed --url http://localhost:8080 latest
    quake-feed biggest
    quake-feed biggerthan 4.5

The base URL defaults to the ``QUAKE_FEED_URL`` environment variable,
then to ``http://localhost:8080``.  Results are printed as JSON; errors
go to stderr and the process exits with status 1.
"""

import argparse
import json
import os
import sys
from typing import Optional, Sequence

from quake_feed_api.client import QuakeFeedAPI


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="quake-feed", description="Query today's earthquakes.")
    ap.add_argument(
        "--url",
        default=os.getenv("QUAKE_FEED_URL", "http://localhost:8080"),
        help="Base URL of the Quake Feed API",
    )
    ap.add_argument("--timeout", type=float, default=15, help="Request timeout in seconds")
    sub = ap.add_subparsers(dest="command", required=True)
    sub.add_parser("latest", help="Most recent earthquake")
    sub.add_parser("biggest", help="Strongest earthquake")
    bigger = sub.add_parser("biggerthan", help="Earthquakes above a magnitude")
    bigger.add_argument("threshold", type=float, help="Magnitude threshold (exclusive)")
    return ap


def main(argv: Optional[Sequence[str]] = None, api: Optional[QuakeFeedAPI] = None) -> int:
    args = build_parser().parse_args(argv)
    api = api or QuakeFeedAPI(base_url=args.url, timeout=args.timeout)

    if args.command == "latest":
        data, error = api.latest()
    elif args.command == "biggest":
        data, error = api.biggest()
    else:
        data, error = api.bigger_than(args.threshold)

    if error:
        status = error.get("status_code")
        prefix = f"[{status}] " if status else ""
        print(f"[!] {prefix}{error.get('message')}", file=sys.stderr)
        return 1
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
