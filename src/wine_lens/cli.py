"""Command-line interface for wine-lens."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from wine_lens import __version__, extract
from wine_lens.exceptions import WineLensError
from wine_lens.matching.types import GuessMatch
from wine_lens.pipeline import MatchConfig, match_wines, write_search_results
from wine_lens.schema import GuessedWine, SearchHit
from wine_lens.search.vivino import VivinoSearchClient

_GUESSES_ADAPTER = TypeAdapter(list[GuessedWine])


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="wine-lens",
        description="Identify wines from an image and match them on Vivino",
    )
    parser.add_argument("image", nargs="?", help="Path to wine bottle, shelf or list image")
    parser.add_argument(
        "--guesses",
        help="JSON file with guessed wines; skips image extraction",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--api-key",
        help="Gemini API key (default: GEMINI_API_KEY env var)",
    )
    parser.add_argument(
        "--results-path",
        help="Write raw Vivino search results to this JSON file",
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help="Maximum concurrent searches (default: one per guess)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"wine-lens {__version__}",
    )

    args = parser.parse_args(argv)
    if not args.image and not args.guesses:
        parser.error("an image or --guesses file is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        guesses = _load_guesses(args.guesses) if args.guesses else extract(args.image, api_key=args.api_key)
        matches, results = match_wines(
            guesses,
            search_client=VivinoSearchClient(),
            config=MatchConfig.from_env(),
            max_workers=args.max_workers,
        )
    except WineLensError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.results_path:
        write_search_results(args.results_path, results)

    if args.json:
        payload = [match.model_dump(mode="json", exclude_none=True) for match in matches]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_formatted(matches)

    return 0


def _load_guesses(path: str) -> list[GuessedWine]:
    try:
        return _GUESSES_ADAPTER.validate_json(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        raise WineLensError(f"Failed to read guesses from {path}: {e}") from e


def _print_formatted(matches: list[GuessMatch]) -> None:
    """Print matches in human-readable format."""
    print()
    print("  wine-lens")

    for match in matches:
        guess = match.guess
        print()
        print(f"  Wine: {guess.name}")
        print(f"  {'Guess:':<9} {_format_guess(guess.type, guess.year)}")
        print(f"  {'Status:':<9} {match.status} ({len(match.hits)} of {match.total_hits} hits)")
        for hit in match.hits:
            print(f"    - {_format_hit(hit)}")

    print()


def _format_guess(color: str | None, year: int | None) -> str:
    return f"{color or 'unknown color'}, {year if year is not None else 'unknown year'}"


def _format_hit(hit: SearchHit) -> str:
    """Format a hit and its vintage years on one line."""
    years = [str(vintage.year) for vintage in hit.vintages if vintage.year is not None]
    label = hit.name or hit.seo_name or "-"
    if not years:
        return label
    return f"{label} [{', '.join(years)}]"


if __name__ == "__main__":
    sys.exit(main())
