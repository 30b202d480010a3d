#!/usr/bin/env python3
"""
Check whether a catalog backend answers (the "test connection" action).

Usage (from repo root):
  python scripts/probe_backend.py                       # configured base URL
  python scripts/probe_backend.py --url http://10.0.2.2:8080 --save
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from catalog_client.config import load_client_settings
from catalog_client.service import build_catalog_service


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


async def run(url: str | None, save: bool, config: Path | None) -> int:
    service = build_catalog_service(load_client_settings(config))
    target = url or service.preferences.get_base_url()

    ok = await service.test_connection(target)
    print(f"{target}: {'reachable' if ok else 'NOT reachable'}")

    if ok and save and url:
        service.set_base_url(url)
        print(f"Saved base URL: {service.preferences.get_base_url()}")
    return 0 if ok else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Probe the catalog backend")
    parser.add_argument("--url", default=None, help="Base URL to test (default: configured one)")
    parser.add_argument("--save", action="store_true", help="Persist --url as the base URL when reachable")
    parser.add_argument("--config", type=Path, default=None, help="Path to client_config.yml")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    return asyncio.run(run(args.url, args.save, args.config))


if __name__ == "__main__":
    sys.exit(main())
