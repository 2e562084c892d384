"""Base provider interface."""

from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image

from wine_lens.schema import GuessedWine

ImageInput = str | Path | Image.Image


class BaseProvider(ABC):
    """Abstract base class for LLM providers."""

    @abstractmethod
    def extract(self, image: ImageInput) -> list[GuessedWine]:
        """Guess the wines visible in an image.

        Args:
            image: Image input (file path, Path object, or PIL Image)

        Returns:
            Guessed wines, in the order the model listed them
        """
        pass

    def get_extraction_metadata(self) -> dict[str, str]:
        """Return provider-specific extraction metadata."""
        return {}
