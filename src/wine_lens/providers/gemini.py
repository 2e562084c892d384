"""Gemini provider implementation."""

import os
from pathlib import Path

from google import genai
from google.genai import types
from PIL import Image
from pydantic import TypeAdapter

from wine_lens.exceptions import AuthenticationError, ImageError, RateLimitError
from wine_lens.providers.base import BaseProvider, ImageInput
from wine_lens.schema import GuessedWine

EXTRACTION_PROMPT = """Analyze this image of wine bottles, a wine shelf or a wine list and identify every wine in it.
Return a JSON array with one object per wine, with these fields:

[
  {
    "name": "Name of the wine as printed, producer included (e.g., Quinta do Carmo)",
    "type": "red or white",
    "year": "Vintage year as printed, or N/A if not visible",
    "price": "Price as printed without currency symbol, or N/A if not visible"
  }
]

Important:
- Keep names in their original language (Portuguese, Spanish, etc.)
- Use "N/A" for any year or price that is not clearly visible
- Return valid JSON only, no additional text"""

_GUESSES_ADAPTER = TypeAdapter(list[GuessedWine])


class GeminiProvider(BaseProvider):
    """Gemini Vision API provider."""

    def __init__(self, api_key: str | None = None, model: str = "gemini-2.0-flash"):
        """Initialize Gemini provider.

        Args:
            api_key: Gemini API key. Falls back to GEMINI_API_KEY env var.
            model: Model name to use.

        Raises:
            AuthenticationError: If no API key is provided or found.
        """
        self.api_key = api_key or os.environ.get("GEMINI_API_KEY")
        if not self.api_key:
            raise AuthenticationError(
                "No API key provided. Set GEMINI_API_KEY environment variable "
                "or pass api_key parameter."
            )
        self.model = model
        self.client = genai.Client(api_key=self.api_key)

    def _load_image(self, image: ImageInput) -> Image.Image:
        """Load image from various input types."""
        if isinstance(image, Image.Image):
            return image

        path = Path(image) if isinstance(image, str) else image
        if not path.exists():
            raise ImageError(f"Image file not found: {path}")

        try:
            return Image.open(path)
        except Exception as e:
            raise ImageError(f"Failed to open image: {e}") from e

    def extract(self, image: ImageInput) -> list[GuessedWine]:
        """Guess wines from an image using Gemini Vision.

        Args:
            image: Image input (file path, Path object, or PIL Image)

        Returns:
            Guessed wines in the order the model returned them

        Raises:
            ImageError: If image cannot be loaded
            RateLimitError: If API rate limit is exceeded
            AuthenticationError: If API key is invalid
        """
        pil_image = self._load_image(image)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=[pil_image, EXTRACTION_PROMPT],
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=list[GuessedWine],
                ),
            )
            return _GUESSES_ADAPTER.validate_json(response.text)

        except genai.errors.ClientError as e:
            if "rate" in str(e).lower() or "quota" in str(e).lower():
                raise RateLimitError(f"API rate limit exceeded: {e}") from e
            if "auth" in str(e).lower() or "key" in str(e).lower():
                raise AuthenticationError(f"Invalid API key: {e}") from e
            raise
        except Exception as e:
            raise ImageError(f"Failed to extract wines: {e}") from e

    def get_extraction_metadata(self) -> dict[str, str]:
        return {"provider": "gemini", "model": self.model}
