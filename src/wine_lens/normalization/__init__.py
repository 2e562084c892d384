"""Normalization utilities for wine-lens."""

from wine_lens.normalization.engine import normalize_guess, normalize_guesses, normalize_type
from wine_lens.normalization.types import NormalizedGuess, WineColor
from wine_lens.normalization.year import normalize_year

__all__ = [
    "NormalizedGuess",
    "WineColor",
    "normalize_guess",
    "normalize_guesses",
    "normalize_type",
    "normalize_year",
]
