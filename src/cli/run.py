import argparse
import asyncio
import logging
import time
from typing import List, Optional

from core.categories import ALL_CATEGORIES
from core.entities import Category, UnifiedResult
from services.config import load_config
from services.logging import setup_logging
from workflows.engine_factory import create_engine_from_config
from workflows.search_engine import SearchEngine


def _category(value: str) -> Category:
    try:
        return Category.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search rentals, market items, rides, teams and forum posts")
    parser.add_argument("query", nargs="?", help="Free-text query. If omitted, prints the hot ranking.")
    parser.add_argument("--category", type=_category, help="Restrict the query to one category")
    parser.add_argument("--hot", type=_category, default=Category.RENT, help="Category for the hot ranking")
    parser.add_argument("--limit", type=int, default=20, help="Maximum results to print")
    parser.add_argument("--reactions", action="store_true", help="Show like counts next to results")
    parser.add_argument("--history", action="store_true", help="Print recent queries and exit")
    parser.add_argument("--clear-history", action="store_true", help="Forget recent queries and exit")
    parser.add_argument("--config", help="Path to config.yml")
    return parser


def _format_row(rank: int, result: UnifiedResult, score: Optional[int] = None, likes: Optional[int] = None) -> str:
    parts = [f"{rank:02d}."]
    if score is not None:
        parts.append(f"score={score}")
    parts.append(f"[{ALL_CATEGORIES[result.category].display_name}]")
    parts.append(result.title)
    parts.append(f"| {result.subtitle}")
    if likes is not None:
        parts.append(f"| likes={likes}")
    return "  " + " ".join(parts)


async def _print_results(
    engine: SearchEngine,
    results: List[UnifiedResult],
    *,
    scores: bool,
    reactions: bool,
) -> None:
    likes = {}
    if reactions:
        for item in await engine.overlay_reactions(results):
            likes[item.result.identity] = item.reaction.like_count

    for rank, result in enumerate(results, start=1):
        score = engine.last_query.score_of(result) if scores else None
        print(_format_row(rank, result, score=score, likes=likes.get(result.identity)))


async def main(argv: Optional[List[str]] = None) -> int:
    start_time = time.perf_counter()
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.LOG_LEVEL)
    logger = logging.getLogger(__name__)

    engine = await create_engine_from_config(config)

    # ----------------------------
    # History commands
    # ----------------------------
    if args.clear_history:
        await engine.clear_recent_queries()
        print("Recent queries cleared.")
        return 0

    if args.history:
        recent = engine.recent_queries()
        if not recent:
            print("No recent queries.")
        for query in recent:
            print(f"  {query}")
        return 0

    # ----------------------------
    # Refresh
    # ----------------------------
    report = await engine.refresh()
    if report.failed_categories:
        logger.info(f"Categories unavailable: {[c.value for c in report.failed_categories]}")

    # ----------------------------
    # Query or ranking
    # ----------------------------
    if args.query:
        results = engine.search(args.query, args.category)
        await engine.add_recent_query(args.query)
        print(f"Query: {args.query.strip()} | results: {len(results)}")
        if not results:
            print("  No matches.")
        await _print_results(engine, results[:args.limit], scores=True, reactions=args.reactions)
    else:
        counts = ", ".join(
            f"{spec.display_name}: {engine.count_by_category(category)}"
            for category, spec in ALL_CATEGORIES.items()
        )
        print(f"Indexed {len(engine.index)} results ({counts})")
        print("Trending:")
        await _print_results(engine, engine.trending(), scores=False, reactions=args.reactions)
        print(f"Hot ranking: {ALL_CATEGORIES[args.hot].display_name}")
        ranking = engine.top_by_category(args.hot)
        if not ranking:
            print("  No trending content yet.")
        await _print_results(engine, ranking, scores=False, reactions=args.reactions)

    logger.info(f"Total time: {time.perf_counter() - start_time:.3f}s")
    return 0


def run() -> None:
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run()
