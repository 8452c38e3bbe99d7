from pathlib import Path
from typing import Union
import numpy as np

from ..models.pixel_buffer import PixelBuffer
from ..repositories.image_repository import ImageRepository
from .band_dispatcher import BandDispatcher, FilterResult


class ImageService:
    """I/O helpers plus the edge filter. No decoding logic of its own."""

    def __init__(self):
        self.image_repository = ImageRepository()
        self.dispatcher = BandDispatcher()

    def create_buffer(self, pixels: np.ndarray, path: Union[str, Path] = None) -> PixelBuffer:
        return self.image_repository.create_buffer(pixels, path)

    def load(self, path: str | Path) -> PixelBuffer:
        """Load a single image from disk as grayscale."""
        return self.image_repository.load(path)

    def save(self, buffer: PixelBuffer, path: str | Path | None = None, format: str | None = None) -> Path:
        """
        Business-level method to save the buffer to a specific path.
        """
        return self.image_repository.save(buffer, path, format=format)

    def detect_edges(self, buffer: PixelBuffer, num_workers: int) -> FilterResult:
        """
        Run the band-parallel Sobel filter over a decoded image.

        Args:
            buffer (PixelBuffer): Decoded grayscale image.
            num_workers (int): Number of row bands / concurrent workers.
        Returns:
            FilterResult with an output buffer of the same shape.
        """
        return self.dispatcher.run(buffer, buffer.width, buffer.height, num_workers)
