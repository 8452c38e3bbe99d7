from pathlib import Path
from typing import Union
import logging
import signal
import threading
import numpy as np
import cv2
from PIL import Image as PILImage

from ..config import IMAGE_LOAD_TIMEOUT
from ..errors import ImageLoadError, ImageWriteError
from ..models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O for PixelBuffer entities.
    Decodes with OpenCV, encodes with Pillow. Everything is single-channel.
    """

    @staticmethod
    def create_buffer(pixels: np.ndarray, path: Union[str, Path] = None) -> PixelBuffer:
        if path is None:
            return PixelBuffer.from_array(pixels)
        return PixelBuffer.from_array(pixels, path=Path(path))

    @staticmethod
    def _imread_gray(path: Path, timeout: int) -> np.ndarray | None:
        # SIGALRM only exists on POSIX and can only be installed from the main thread
        use_alarm = (
            timeout > 0
            and hasattr(signal, "SIGALRM")
            and threading.current_thread() is threading.main_thread()
        )
        if not use_alarm:
            return cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)

        # ─── timeout wrapper (5 s default) ────────────────────────────────
        def _handler(signum, frame):
            raise TimeoutError(f"cv2.imread timed-out after {timeout}s: {path}")

        previous = signal.signal(signal.SIGALRM, _handler)
        signal.alarm(timeout)
        try:
            return cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)
        finally:
            signal.alarm(0)  # always disarm
            signal.signal(signal.SIGALRM, previous)

    @classmethod
    def load(cls, path: Union[str, Path], timeout: int = IMAGE_LOAD_TIMEOUT) -> PixelBuffer:
        """
        Decode an image file as 8-bit grayscale.

        Raises:
            ImageLoadError: The file does not exist or is not a decodable image.
            TimeoutError: Decoding took longer than ``timeout`` seconds.
        """
        path = Path(path)
        if not path.is_file():
            raise ImageLoadError(f"Error loading image {path}")

        pixels = cls._imread_gray(path, timeout)
        if pixels is None or pixels.size == 0:
            raise ImageLoadError(f"Error loading image {path}")

        logger.debug(f"Loaded {path.name}: {pixels.shape[1]}x{pixels.shape[0]}")
        return PixelBuffer.from_array(pixels, path=path)

    @staticmethod
    def save(buffer: PixelBuffer, path: Union[str, Path] = None, format: str | None = None) -> Path:
        """
        Encode the buffer with Pillow. Without ``format`` the file extension
        decides the encoder; with it, the extension is ignored.

        Raises:
            ImageWriteError: Pillow could not encode or write the file.
        """
        target = Path(path) if path is not None else buffer.path
        if target is None:
            raise ValueError("No destination path given and buffer has no path")

        try:
            PILImage.fromarray(np.ascontiguousarray(buffer.rows())).save(target, format=format)
        except (OSError, ValueError) as err:
            raise ImageWriteError(f"Error writing image {target}: {err}") from err

        logger.debug(f"Saved {buffer.width}x{buffer.height} image to {target}")
        return target
