import numpy as np


def _frozen(rows) -> np.ndarray:
    kernel = np.array(rows, dtype=np.int32)
    kernel.flags.writeable = False
    return kernel


# Indexed as KERNEL[ky + 1][kx + 1] for neighbour offset (kx, ky).
SOBEL_X = _frozen([
    [-1, 0, 1],
    [-2, 0, 2],
    [-1, 0, 1],
])

SOBEL_Y = _frozen([
    [1, 2, 1],
    [0, 0, 0],
    [-1, -2, -1],
])

OFFSETS = tuple((kx, ky) for ky in (-1, 0, 1) for kx in (-1, 0, 1))
