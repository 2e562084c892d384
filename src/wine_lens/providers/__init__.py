"""Providers for wine-lens."""

from wine_lens.providers.base import BaseProvider
from wine_lens.providers.gemini import GeminiProvider

__all__ = ["BaseProvider", "GeminiProvider"]
