"""Data models for match output."""

from typing import Literal

from pydantic import BaseModel, Field

from wine_lens.normalization.types import NormalizedGuess
from wine_lens.schema import SearchHit

MatchStatus = Literal["confident", "ambiguous", "fallback", "no_hits"]


class GuessMatch(BaseModel):
    """Candidate hits selected for one guessed wine."""

    guess: NormalizedGuess
    status: MatchStatus
    hits: list[SearchHit] = Field(default_factory=list)
    total_hits: int = 0
