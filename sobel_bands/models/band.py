from __future__ import annotations
from dataclasses import dataclass
import numpy as np
from .pixel_buffer import PixelBuffer


@dataclass(frozen=True)
class Band:
    """Half-open row range [start_row, end_row) owned by exactly one worker."""
    start_row: int
    end_row: int

    def __post_init__(self):
        if self.start_row < 0 or self.end_row < self.start_row:
            raise ValueError(f"Invalid band [{self.start_row}, {self.end_row})")

    def __len__(self) -> int:
        return self.end_row - self.start_row

    def rows(self) -> range:
        return range(self.start_row, self.end_row)

    def overlaps(self, other: Band) -> bool:
        return self.start_row < other.end_row and other.start_row < self.end_row


@dataclass(frozen=True)
class WorkItem:
    """
    Everything one worker needs. The input is shared read-only; the worker
    writes only output rows inside its band.
    """
    index: int
    source: PixelBuffer # read-only view of the input
    output: np.ndarray # shared flat output, shape (W * H,)
    width: int
    height: int
    band: Band

    def output_rows(self) -> np.ndarray:
        """The slice of the output this worker is allowed to write."""
        return self.output[self.band.start_row * self.width:self.band.end_row * self.width]
