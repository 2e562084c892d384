"""Core extraction function."""

import os
from pathlib import Path

from PIL import Image

from wine_lens.providers.base import BaseProvider
from wine_lens.schema import GuessedWine

ImageInput = str | Path | Image.Image


def _build_gemini_provider(api_key: str | None) -> BaseProvider:
    from wine_lens.providers.gemini import GeminiProvider

    return GeminiProvider(api_key=api_key)


def _select_provider(provider: str | None, api_key: str | None) -> BaseProvider:
    provider_name = (provider or os.getenv("WINE_LENS_PROVIDER", "gemini")).strip().lower()
    if provider_name in {"gemini", "vision"}:
        return _build_gemini_provider(api_key)
    raise ValueError(f"Unsupported provider: {provider_name}")


def extract(
    image: ImageInput,
    *,
    api_key: str | None = None,
    provider: str | None = None,
) -> list[GuessedWine]:
    """Guess the wines shown in a bottle, shelf or wine list image.

    Args:
        image: Image input - file path (str), Path object, or PIL Image.
        api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
        provider: Provider name (`gemini`). Defaults to
            `WINE_LENS_PROVIDER` env var, then `gemini`.

    Returns:
        Guessed wines. Year, type and price are raw model text.
    """
    engine = _select_provider(provider, api_key)
    return engine.extract(image)


def extract_with_metadata(
    image: ImageInput,
    *,
    api_key: str | None = None,
    provider: str | None = None,
) -> tuple[list[GuessedWine], dict[str, str]]:
    """Extract guessed wines and return provider metadata."""

    engine = _select_provider(provider, api_key)
    result = engine.extract(image)
    metadata = engine.get_extraction_metadata() or {}
    return result, metadata
