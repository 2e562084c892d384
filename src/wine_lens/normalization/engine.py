"""Turn raw guesses into normalized guesses."""

from __future__ import annotations

from collections.abc import Iterable

from wine_lens.normalization.types import NormalizedGuess, WineColor
from wine_lens.normalization.year import normalize_year
from wine_lens.schema import GuessedWine

_KNOWN_COLORS: dict[str, WineColor] = {"red": "red", "white": "white"}


def normalize_type(raw_type: str | None) -> WineColor | None:
    if not raw_type:
        return None
    return _KNOWN_COLORS.get(raw_type.strip().lower())


def normalize_guess(guess: GuessedWine) -> NormalizedGuess:
    """Normalize one guess. The name is kept verbatim since it is the search query."""

    return NormalizedGuess(
        name=guess.name,
        type=normalize_type(guess.type),
        year=normalize_year(guess.year),
    )


def normalize_guesses(guesses: Iterable[GuessedWine]) -> list[NormalizedGuess]:
    return [normalize_guess(guess) for guess in guesses]
