"""
Gradient Kernel Evaluator.

Computes the Sobel response of single pixels (``evaluate``) and of whole row
bands (``evaluate_rows``). Both follow the same border rule: a neighbour that
falls outside the image contributes nothing to either sum. No clamp-to-edge,
no wrap-around, no reflection.
"""
import math
from typing import Sequence

import numpy as np

from ..models.kernels import SOBEL_X, SOBEL_Y, OFFSETS
from ..models.pixel_buffer import PixelBuffer


def clamp_magnitude(value: int) -> int:
    return max(0, min(255, value))


def gradient_magnitude(gx: int, gy: int) -> int:
    """
    Euclidean norm of (gx, gy), truncated to an int and clamped to [0, 255].
    Truncation, not rounding: sqrt(13) = 3.6 becomes 3.
    """
    return clamp_magnitude(int(math.sqrt(gx * gx + gy * gy)))


def evaluate(pixels: Sequence[int], width: int, height: int, x: int, y: int) -> int:
    """
    Sobel magnitude for the pixel at (x, y).

    Args:
        pixels: Flat row-major intensity samples (bytes, list or uint8 array).
        width, height: Image dimensions.
        x, y: Pixel location.

    Returns:
        int: Gradient magnitude in [0, 255].
    """
    gx = 0
    gy = 0
    for kx, ky in OFFSETS:
        ix = x + kx
        iy = y + ky
        if 0 <= ix < width and 0 <= iy < height:
            pixel = int(pixels[iy * width + ix])
            gx += pixel * int(SOBEL_X[ky + 1][kx + 1])
            gy += pixel * int(SOBEL_Y[ky + 1][kx + 1])
    return gradient_magnitude(gx, gy)


def zero_pad_rows(buffer: PixelBuffer, start_row: int, end_row: int) -> np.ndarray:
    """
    Rows [start_row - 1, end_row + 1) of the image as int32, with zeros
    wherever that window leaves the image. A zero sample adds nothing to
    gx or gy, so reading the border is the same as skipping the
    out-of-bounds neighbour.

    Returns:
        np.ndarray: Shape (end_row - start_row + 2, width + 2); window row j
        is image row start_row - 1 + j.
    """
    lo = max(start_row - 1, 0)
    hi = min(end_row + 1, buffer.height)
    window = np.zeros((end_row - start_row + 2, buffer.width + 2), dtype=np.int32)
    top = lo - (start_row - 1)
    window[top:top + hi - lo, 1:-1] = buffer.rows()[lo:hi]
    window.flags.writeable = False
    return window


def zero_pad(buffer: PixelBuffer) -> np.ndarray:
    """Whole image with a one-pixel border of zeros."""
    return zero_pad_rows(buffer, 0, buffer.height)


def evaluate_rows(padded: np.ndarray, width: int, start_row: int, end_row: int) -> np.ndarray:
    """
    Vectorised ``evaluate`` over every pixel of rows [start_row, end_row).

    Args:
        padded: Zero-bordered rows, as built by ``zero_pad`` or ``zero_pad_rows``.
        width: Image width (padded has width + 2 columns).
        start_row, end_row: Rows to evaluate, in the coordinates of ``padded``
            minus its top border row.

    Returns:
        np.ndarray: uint8 array of shape (end_row - start_row, width).
    """
    n_rows = end_row - start_row
    gx = np.zeros((n_rows, width), dtype=np.int32)
    gy = np.zeros((n_rows, width), dtype=np.int32)

    for kx, ky in OFFSETS:
        wx = int(SOBEL_X[ky + 1][kx + 1])
        wy = int(SOBEL_Y[ky + 1][kx + 1])
        if wx == 0 and wy == 0:
            continue
        # image row y reads padded row y + 1 + ky, image column x reads padded column x + 1 + kx
        window = padded[start_row + 1 + ky:end_row + 1 + ky, 1 + kx:1 + kx + width]
        if wx:
            gx += window * wx
        if wy:
            gy += window * wy

    magnitude = np.sqrt((gx * gx + gy * gy).astype(np.float64)).astype(np.int64)
    return np.clip(magnitude, 0, 255).astype(np.uint8)
