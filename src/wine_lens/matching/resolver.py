"""Match resolver: narrow search hits down to the likely bottle.

Each hit goes through a small cascade of vintage filters:

1. year: keep vintages whose year equals the guessed year. An unknown
   guessed year only matches vintages with a non-numeric year.
2. color: only when the year left two or more vintages. Keep vintages whose
   slug carries a keyword for the guessed color.

A hit is dropped as soon as a stage leaves it with no vintages. Survivors
keep their original order and are returned as shallow copies.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from wine_lens.matching.types import GuessMatch
from wine_lens.normalization.types import NormalizedGuess, WineColor
from wine_lens.schema import SearchHit, SearchResult, Vintage

logger = logging.getLogger(__name__)

_NUMERIC_YEAR = re.compile(r"\s*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)\s*", re.ASCII)

COLOR_KEYWORDS: Mapping[WineColor, frozenset[str]] = MappingProxyType(
    {
        "red": frozenset({"tinto", "red"}),
        "white": frozenset({"branco", "white"}),
    }
)


def _is_blank_year(value: int | float | str | None) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def vintage_year(vintage: Vintage) -> int | float | None:
    """Numeric year of a vintage, or None when the field is not a number.

    Only plain ASCII decimals count as numbers (``"2018"``, ``" 2018.0 "``).
    Integral values come back as ``int``; ``2018.5`` stays a float and so
    never equals a guessed year.
    """

    value = vintage.year
    if isinstance(value, bool) or _is_blank_year(value):
        return None
    if isinstance(value, str):
        if not _NUMERIC_YEAR.fullmatch(value):
            return None
        value = float(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def filter_by_year(vintages: Iterable[Vintage], year: int | None) -> list[Vintage]:
    """Keep vintages whose year equals ``year``. Blank vintage years match nothing."""

    return [
        vintage
        for vintage in vintages
        if not _is_blank_year(vintage.year) and vintage_year(vintage) == year
    ]


def filter_by_color(
    vintages: Iterable[Vintage],
    color: WineColor | None,
    color_keywords: Mapping[WineColor, frozenset[str]] = COLOR_KEYWORDS,
) -> list[Vintage]:
    """Keep vintages whose slug contains a keyword for ``color``; no color keeps nothing."""

    keywords = color_keywords.get(color, frozenset()) if color else frozenset()
    if not keywords:
        return []
    return [
        vintage
        for vintage in vintages
        if any(keyword in (vintage.seo_name or "") for keyword in keywords)
    ]


class MatchResolver:
    """Year-then-color filter cascade over search hits."""

    def __init__(self, color_keywords: Mapping[WineColor, frozenset[str]] | None = None):
        self.color_keywords = color_keywords if color_keywords is not None else COLOR_KEYWORDS

    def resolve(self, search_result: SearchResult, guess: NormalizedGuess) -> list[SearchHit]:
        matched: list[SearchHit] = []
        for hit in search_result.hits:
            resolved = self.resolve_hit(hit, guess)
            if resolved is not None:
                matched.append(resolved)
        return matched

    def resolve_hit(self, hit: SearchHit, guess: NormalizedGuess) -> SearchHit | None:
        by_year = filter_by_year(hit.vintages, guess.year)
        if not by_year:
            logger.debug("hit %s dropped: no vintage for year %s", hit.id, guess.year)
            return None
        if len(by_year) == 1:
            return hit.model_copy(update={"vintages": by_year})

        by_color = filter_by_color(by_year, guess.type, self.color_keywords)
        if not by_color:
            logger.debug(
                "hit %s dropped: %d vintages for year %s, none matching color %s",
                hit.id,
                len(by_year),
                guess.year,
                guess.type,
            )
            return None
        return hit.model_copy(update={"vintages": by_color})


def resolve_most_likely(
    search_result: SearchResult,
    guess: NormalizedGuess,
    *,
    color_keywords: Mapping[WineColor, frozenset[str]] | None = None,
) -> list[SearchHit]:
    """Return the hits most likely to be the guessed wine, narrowed to matching vintages."""

    return MatchResolver(color_keywords).resolve(search_result, guess)


def select_candidates(
    search_result: SearchResult,
    guess: NormalizedGuess,
    *,
    resolver: MatchResolver | None = None,
) -> GuessMatch:
    """Apply the fallback policy on top of the resolver.

    - nothing survived, hits exist: fall back to the first raw hit
    - nothing survived, no hits: empty candidate list
    - one hit with one vintage: confident match
    - anything else: every surviving hit, left ambiguous
    """
    resolver = resolver or MatchResolver()
    hits: Sequence[SearchHit] = search_result.hits
    most_likely = resolver.resolve(search_result, guess)

    if not most_likely:
        if not hits:
            return GuessMatch(guess=guess, status="no_hits", hits=[], total_hits=0)
        return GuessMatch(guess=guess, status="fallback", hits=[hits[0]], total_hits=len(hits))

    if len(most_likely) == 1 and len(most_likely[0].vintages) == 1:
        status = "confident"
    else:
        status = "ambiguous"
    return GuessMatch(guess=guess, status=status, hits=most_likely, total_hits=len(hits))
