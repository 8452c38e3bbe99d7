from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np


@dataclass
class PixelBuffer:
    """
    Single-channel intensity samples, flat and row-major.
    No decoding logic outside the repository layer.
    """
    data: np.ndarray # Shape (width * height,), dtype uint8.
    width: int
    height: int
    path: Path | None = None # Source or destination of the image.

    def __post_init__(self):
        if isinstance(self.data, (bytes, bytearray, memoryview)):
            self.data = np.frombuffer(self.data, dtype=np.uint8)
        else:
            self.data = np.asarray(self.data, dtype=np.uint8).reshape(-1)

        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.data.size != self.width * self.height:
            raise ValueError(
                f"Buffer holds {self.data.size} samples, expected {self.width}x{self.height}="
                f"{self.width * self.height}"
            )

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int, path: Path | None = None) -> PixelBuffer:
        return cls(data=data, width=width, height=height, path=path)

    @classmethod
    def from_array(cls, pixels: np.ndarray, path: Path | None = None) -> PixelBuffer:
        """Wrap a (H, W) grayscale array. The array is flattened in row-major order."""
        if pixels.ndim != 2:
            raise ValueError(f"Expected a single-channel (H, W) array, got shape {pixels.shape}")
        height, width = pixels.shape
        flat = np.ascontiguousarray(pixels, dtype=np.uint8).reshape(-1)
        return cls(data=flat, width=width, height=height, path=path)

    def __len__(self) -> int:
        return self.data.size

    def rows(self) -> np.ndarray:
        """(height, width) view sharing memory with the flat buffer."""
        return self.data.reshape(self.height, self.width)

    def read_only(self) -> PixelBuffer:
        """Return a view of this buffer that nobody can write through."""
        view = self.data.view()
        view.flags.writeable = False
        return PixelBuffer(data=view, width=self.width, height=self.height, path=self.path)

    def tobytes(self) -> bytes:
        return self.data.tobytes()
