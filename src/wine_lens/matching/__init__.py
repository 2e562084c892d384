"""Matching of guessed wines against search hits."""

from wine_lens.matching.resolver import (
    COLOR_KEYWORDS,
    MatchResolver,
    filter_by_color,
    filter_by_year,
    resolve_most_likely,
    select_candidates,
    vintage_year,
)
from wine_lens.matching.types import GuessMatch, MatchStatus

__all__ = [
    "COLOR_KEYWORDS",
    "GuessMatch",
    "MatchResolver",
    "MatchStatus",
    "filter_by_color",
    "filter_by_year",
    "resolve_most_likely",
    "select_candidates",
    "vintage_year",
]
