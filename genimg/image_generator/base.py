"""
Abstract interface for image generation. One generator name (+ optional seed) → one PNG.
Implementations render procedurally onto a canvas; the pipeline only sees this interface.
"""
from abc import ABC, abstractmethod
from pathlib import Path


class ImageGenerator(ABC):
    """
    Generates still images by generator name. Used by the pipeline to produce a numbered
    series of files, one call per image.
    """

    @abstractmethod
    def available(self) -> list[str]:
        """Generator names this implementation can render."""
        ...

    @abstractmethod
    def generate_image(
        self,
        name: str,
        output_path: Path,
        *,
        seed: int | None = None,
    ) -> Path:
        """
        Render generator `name` and write it to output_path.
        - seed makes the image reproducible; None draws fresh entropy.
        - Returns the path where the image was written.
        - Raises CanvasError when the canvas cannot be created or encoded.
        """
        ...
