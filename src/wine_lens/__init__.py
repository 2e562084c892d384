"""wine-lens: Match wines guessed from images against Vivino search results."""

from wine_lens.core import extract
from wine_lens.matching import GuessMatch, resolve_most_likely, select_candidates
from wine_lens.normalization import NormalizedGuess, normalize_guess, normalize_year
from wine_lens.pipeline import MatchConfig, identify_wines, match_wines
from wine_lens.schema import GuessedWine, SearchHit, SearchResult, Vintage

__version__ = "0.1.0"

__all__ = [
    "extract",
    "identify_wines",
    "match_wines",
    "normalize_guess",
    "normalize_year",
    "resolve_most_likely",
    "select_candidates",
    "GuessedWine",
    "GuessMatch",
    "MatchConfig",
    "NormalizedGuess",
    "SearchHit",
    "SearchResult",
    "Vintage",
    "__version__",
]
