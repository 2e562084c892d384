"""Wine search clients for wine-lens."""

from wine_lens.search.base import BaseSearchClient
from wine_lens.search.vivino import VivinoSearchClient

__all__ = ["BaseSearchClient", "VivinoSearchClient"]
