#!/usr/bin/env python3
"""
Run the reference catalog backend on the seeded demo dataset.

Usage (from repo root):
  python scripts/run_backend.py --port 8080
  # then point the client at it: CATALOG_BACKEND_URL=http://127.0.0.1:8080
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

import uvicorn

from catalog_client.backend import create_app
from catalog_client.demo import DemoDataset


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main() -> int:
    parser = argparse.ArgumentParser(description="Serve the catalog REST API from the demo dataset")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--api-prefix", default="/api", help="Path prefix for all catalog endpoints")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    app = create_app(DemoDataset.seeded(), api_prefix=args.api_prefix)
    uvicorn.run(app, host=args.host, port=args.port, log_level="debug" if args.verbose else "info")
    return 0


if __name__ == "__main__":
    sys.exit(main())
