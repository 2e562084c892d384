"""Data models for normalization output."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

WineColor = Literal["red", "white"]


class NormalizedGuess(BaseModel):
    """A guessed wine with its year parsed and its color resolved."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: WineColor | None = None
    year: int | None = None
