"""Build the search index from the configured catalog database and print stats.

Usage:
    python -m scripts.inspect_search_index [query] [--type TYPE] [--platform ID] [--limit N]
With a query, also prints the top hits with their scores and URLs.
Requires DATABASE_URL.
"""

import argparse
import asyncio
import sys
from collections import Counter

from app.api.v1.dependencies import create_search_service
from app.application.use_cases.search import SearchService, build_query
from app.core.config import Settings, get_settings
from app.domain.exceptions import HubSearchException
from app.infrastructure.persistence.database import dispose_engine
from app.shared.telemetry import setup_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("query", nargs="?", default="")
    parser.add_argument("--type", dest="entity_type", default=None)
    parser.add_argument("--platform", default=None)
    parser.add_argument("--limit", default="10")
    return parser.parse_args(argv)


async def _run_query(
    service: SearchService, settings: Settings, args: argparse.Namespace
) -> None:
    outcome = await service.search(
        build_query(
            args.query,
            type=args.entity_type,
            platform=args.platform,
            limit=args.limit,
            default_limit=settings.search_default_limit,
            max_limit=settings.search_max_limit,
        )
    )
    print(f"\n{outcome.total} match(es) for {args.query!r} in {outcome.latency:.1f}ms")
    for item in outcome.results:
        print(f"  {item.score:.3f}  [{item.entity_type.value}] {item.title}  {item.url}")


async def main(argv: list[str]) -> int:
    """Build once, print counts per entity type, optionally run one query."""
    args = _parse_args(argv)
    settings = get_settings()
    setup_logging()
    if not settings.database_url:
        print("DATABASE_URL not configured", file=sys.stderr)
        return 1

    service = create_search_service(settings=settings)
    try:
        try:
            await service.index_cache.ensure_fresh()
        except HubSearchException as e:
            print(f"Index build failed: {e.message} {e.details}", file=sys.stderr)
            return 1

        stats = service.get_stats()
        print(f"Documents: {stats.number_of_documents} (TTL {stats.ttl_seconds:.0f}s)")
        per_type = Counter(doc.entity_type.value for doc in service.index_cache.documents)
        for entity_type, count in sorted(per_type.items()):
            print(f"  {entity_type:<10} {count}")

        if args.query:
            await _run_query(service, settings, args)
    finally:
        await dispose_engine()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
