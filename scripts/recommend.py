#!/usr/bin/env python3
"""Get recommendations for a vibe description from the command line.

Needs TMDB_API_KEY and GEMINI_API_KEY in the environment (or .env).

Usage:
    python scripts/recommend.py "<query>" [--type=movie|tv|anime] [--hidden-gems] [--region=XX] [--json]

Options:
    --type          Kind of media to recommend (default: movie)
    --hidden-gems   Prefer highly rated lesser-known titles
    --region        Region for streaming availability (default: DEFAULT_REGION)
    --json          Print the results as JSON instead of a summary
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from vibematch.exceptions import ConfigurationError, QueryTooShortError
from vibematch.models.recommendation import MediaKind
from vibematch.models.schemas import RecommendationRead
from vibematch.services.recommendations import get_recommendations
from vibematch.utils.http_client import close_all_clients
from vibematch.utils.logging import setup_logging


async def recommend(query: str, media_type: str, hidden_gems: bool, region: str | None, as_json: bool) -> int:
    try:
        results = await get_recommendations(
            query,
            media_kind=media_type,
            hidden_gems=hidden_gems,
            region=region,
        )
    except QueryTooShortError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    finally:
        await close_all_clients()

    if as_json:
        payload = [RecommendationRead.model_validate(r).model_dump(mode="json") for r in results]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0

    if not results:
        print("No recommendations found")
        return 0

    for i, rec in enumerate(results, 1):
        year = f" ({rec.year})" if rec.year else ""
        print(f"{i}. {rec.title}{year}  [{rec.match_percentage}% match, {rec.source}]")
        print(f"   Rating: {rec.rating:.1f}/10")
        if rec.genres:
            print(f"   Genres: {', '.join(rec.genres)}")
        if rec.number_of_seasons:
            print(f"   Seasons: {rec.number_of_seasons} ({rec.number_of_episodes} episodes)")
        if rec.ai_explanation:
            print(f"   Why: {rec.ai_explanation}")
        if rec.streaming_platforms:
            print(f"   Watch on: {', '.join(rec.streaming_platforms)}")
        if rec.trailer_key:
            print(f"   Trailer: https://www.youtube.com/watch?v={rec.trailer_key}")
        print()

    print(f"Done! {len(results)} recommendations")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Recommend movies, TV shows or anime for a vibe")
    parser.add_argument("query", help="What you feel like watching (at least 3 words)")
    parser.add_argument(
        "--type",
        dest="media_type",
        choices=[kind.value for kind in MediaKind],
        default=MediaKind.MOVIE.value,
        help="Kind of media to recommend",
    )
    parser.add_argument("--hidden-gems", action="store_true", help="Prefer lesser-known, highly rated titles")
    parser.add_argument("--region", help="Two-letter region code for streaming availability")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    args = parser.parse_args()

    setup_logging()
    sys.exit(asyncio.run(recommend(
        args.query,
        media_type=args.media_type,
        hidden_gems=args.hidden_gems,
        region=args.region,
        as_json=args.json,
    )))
