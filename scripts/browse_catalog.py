#!/usr/bin/env python3
"""
Browse the catalog from the terminal through CatalogService.

Works with or without a running backend: when the backend is unreachable the
demo dataset answers and the mode line says so.

Usage (from repo root):
  python scripts/browse_catalog.py --search phone
  python scripts/browse_catalog.py --category Electronics --sort-by price --sort-dir DESC
  python scripts/browse_catalog.py --product 1 --summary --lang tr
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from catalog_client.config import load_client_settings
from catalog_client.contracts import FilterState, SortDirection
from catalog_client.service import CatalogService, build_catalog_service


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def print_stage(title: str) -> None:
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


async def show_products(service: CatalogService, filters: FilterState, pages: int) -> None:
    controller = service.product_list_controller(filters)
    await controller.mount()
    for _ in range(pages - 1):
        await controller.load_more()

    print_stage(f"PRODUCTS ({len(controller.items)} of {controller.total_elements})")
    for p in controller.items:
        rating = f"{p.average_rating:.1f}" if p.average_rating is not None else "-"
        print(f"  #{p.id:<4} {p.name[:40]:<40} {p.category:<16} {p.price:>9.2f}  {rating} ({p.review_count})")
    if controller.error is not None:
        print(f"  (load failed: {controller.error})")
    if controller.has_more:
        print("  ... more available (use --pages)")


async def show_product(service: CatalogService, product_id: int, with_summary: bool, lang: str) -> None:
    detail = await service.get_product(product_id)
    p = detail.product
    print_stage(f"{p.name} ({p.category}, {p.price:.2f})")
    print(f"  {p.description}")
    print(f"  Rating: {p.average_rating} from {p.review_count} reviews")

    reviews = await service.get_reviews(product_id)
    for r in reviews.content:
        print(f"  [{r.rating}/5] {r.reviewer_name or 'Anonymous'}: {r.comment or ''} (helpful: {r.helpful_count})")

    if with_summary:
        entry = await service.get_summary(product_id, lang)
        print_stage(f"SUMMARY ({entry.source.value}, {entry.language})")
        print(f"  {entry.summary.takeaway or '(no summary)'}")
        for pro in entry.summary.pros:
            print(f"  + {pro}")
        for con in entry.summary.cons:
            print(f"  - {con}")
        if entry.summary.top_topics:
            print(f"  Topics: {', '.join(entry.summary.top_topics)}")


async def run(args: argparse.Namespace) -> int:
    service = build_catalog_service(load_client_settings(args.config))

    if args.product is not None:
        await show_product(service, args.product, args.summary, args.lang)
    else:
        filters = FilterState(
            category=args.category,
            sort_by=args.sort_by,
            sort_dir=SortDirection.coerce(args.sort_dir),
            search_text=args.search or "",
            min_rating=args.min_rating,
        )
        await show_products(service, filters, args.pages)

    print(f"\nMode: {service.current_mode.value}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Browse products and reviews")
    parser.add_argument("--product", type=int, default=None, help="Show one product with its reviews")
    parser.add_argument("--summary", action="store_true", help="Include the review summary (with --product)")
    parser.add_argument("--lang", default="en", help="Summary language: en, tr or es")
    parser.add_argument("--category", default=None)
    parser.add_argument("--search", default=None)
    parser.add_argument("--min-rating", type=float, default=None)
    parser.add_argument("--sort-by", default="id")
    parser.add_argument("--sort-dir", default="ASC")
    parser.add_argument("--pages", type=int, default=1)
    parser.add_argument("--config", type=Path, default=None, help="Path to client_config.yml")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(args.verbose)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
