"""Guess -> search -> match pipeline."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from urllib import error, request

from wine_lens.core import ImageInput, extract
from wine_lens.matching.resolver import MatchResolver, select_candidates
from wine_lens.matching.types import GuessMatch, MatchStatus
from wine_lens.normalization.engine import normalize_guesses
from wine_lens.schema import GuessedWine, SearchResult
from wine_lens.search.base import BaseSearchClient

logger = logging.getLogger(__name__)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _safe_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class MatchConfig:
    unresolved_queue_path: str | None = None
    unresolved_queue_webhook_url: str | None = None
    unresolved_queue_webhook_timeout_sec: float = 2.0
    unresolved_queue_webhook_token: str | None = None
    queue_ambiguous: bool = False

    @classmethod
    def from_env(cls) -> "MatchConfig":
        return cls(
            unresolved_queue_path=os.getenv("UNRESOLVED_QUEUE_PATH"),
            unresolved_queue_webhook_url=os.getenv("UNRESOLVED_QUEUE_WEBHOOK_URL"),
            unresolved_queue_webhook_timeout_sec=_safe_float(
                os.getenv("UNRESOLVED_QUEUE_WEBHOOK_TIMEOUT_SEC"), 2.0
            ),
            unresolved_queue_webhook_token=os.getenv("UNRESOLVED_QUEUE_WEBHOOK_TOKEN"),
            queue_ambiguous=_parse_bool(os.getenv("UNRESOLVED_QUEUE_AMBIGUOUS"), False),
        )

    def should_queue(self, status: MatchStatus) -> bool:
        if status in {"fallback", "no_hits"}:
            return True
        return status == "ambiguous" and self.queue_ambiguous


def search_all(
    guesses: Sequence[GuessedWine],
    client: BaseSearchClient,
    *,
    max_workers: int | None = None,
) -> list[SearchResult]:
    """Search once per guess, concurrently. Results come back in guess order."""

    if not guesses:
        return []
    workers = max_workers or len(guesses)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(client.search, [guess.name for guess in guesses]))


def match_wines(
    guesses: Sequence[GuessedWine],
    *,
    search_client: BaseSearchClient,
    config: MatchConfig | None = None,
    resolver: MatchResolver | None = None,
    max_workers: int | None = None,
) -> tuple[list[GuessMatch], list[SearchResult]]:
    """Match every guess against its own search results.

    Returns the per-guess matches and the raw search results, both in guess order.
    """
    config = config or MatchConfig()
    resolver = resolver or MatchResolver()
    normalized = normalize_guesses(guesses)
    results = search_all(guesses, search_client, max_workers=max_workers)

    matches: list[GuessMatch] = []
    for guess, result in zip(normalized, results):
        match = select_candidates(result, guess, resolver=resolver)
        if match.status == "fallback":
            logger.info(
                "no likely hit for %r (%d hits), falling back to first hit",
                guess.name,
                match.total_hits,
            )
        if config.should_queue(match.status):
            _enqueue_unresolved(match, config)
        matches.append(match)
    return matches, results


def identify_wines(
    image: ImageInput,
    *,
    search_client: BaseSearchClient,
    api_key: str | None = None,
    provider: str | None = None,
    config: MatchConfig | None = None,
    max_workers: int | None = None,
) -> tuple[list[GuessMatch], list[SearchResult]]:
    """Guess the wines in an image and match each one against the search service."""

    guesses = extract(image, api_key=api_key, provider=provider)
    return match_wines(
        guesses,
        search_client=search_client,
        config=config,
        max_workers=max_workers,
    )


def write_search_results(path: str | Path, results: Sequence[SearchResult]) -> Path:
    """Write the raw per-guess search results as a JSON array."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = [result.model_dump(mode="json") for result in results]
    target.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return target


def _enqueue_unresolved(match: GuessMatch, config: MatchConfig) -> None:
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "name": match.guess.name,
        "year": match.guess.year,
        "type": match.guess.type,
        "status": match.status,
        "total_hits": match.total_hits,
        "candidate_ids": [hit.id for hit in match.hits],
    }
    path_value = config.unresolved_queue_path
    if path_value:
        path = Path(path_value)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(payload, ensure_ascii=False) + "\n")

    webhook_url = config.unresolved_queue_webhook_url
    if webhook_url:
        _send_unresolved_webhook(
            webhook_url,
            payload,
            timeout_sec=config.unresolved_queue_webhook_timeout_sec,
            token=config.unresolved_queue_webhook_token,
        )


def _send_unresolved_webhook(
    url: str,
    payload: dict,
    *,
    timeout_sec: float,
    token: str | None,
) -> None:
    data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    headers = {"Content-Type": "application/json"}
    if token:
        headers["x-webhook-token"] = token
    try:
        req = request.Request(
            url,
            data=data,
            headers=headers,
            method="POST",
        )
        with request.urlopen(req, timeout=timeout_sec):
            pass
    except (error.URLError, TimeoutError, ValueError) as exc:
        # Unresolved queue should never break matching.
        logger.warning("unresolved queue webhook failed: %s", exc)
