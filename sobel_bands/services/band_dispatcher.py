"""
Band Dispatcher.

Splits the image height into one contiguous row band per worker, runs every
band on its own thread and returns the output only after all of them are
done. Bands are disjoint, so workers share the output buffer without locks.

Limitation: a running filter pass cannot be cancelled or timed out; ``run``
always waits for every band.
"""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

from ..config import MAX_WORKERS
from ..errors import BufferAllocationError, InvalidWorkerCountError
from ..models.band import Band, WorkItem
from ..models.pixel_buffer import PixelBuffer
from .gradient_evaluator import evaluate_rows, zero_pad_rows

logger = logging.getLogger(__name__)


@dataclass
class FilterResult:
    """Output of one filter pass plus the timing of its dispatch+join phase."""
    output: PixelBuffer
    num_workers: int
    bands: List[Band] = field(default_factory=list)
    elapsed_ms: float = 0.0


def validate_worker_count(num_workers: int, max_workers: int = MAX_WORKERS) -> int:
    # bool is an int subclass; True workers makes no sense
    if isinstance(num_workers, bool) or not isinstance(num_workers, (int, np.integer)):
        raise InvalidWorkerCountError(num_workers, max_workers)
    if num_workers < 1 or num_workers > max_workers:
        raise InvalidWorkerCountError(num_workers, max_workers)
    return int(num_workers)


def partition_bands(height: int, num_workers: int) -> List[Band]:
    """
    Split [0, height) into num_workers contiguous bands.

    Every worker but the last gets height // num_workers rows; the last one
    also takes the remainder. For height=10, num_workers=3 that is
    [0, 3), [3, 6), [6, 10). When height < num_workers the leading bands
    are empty and the last band holds the whole image.
    """
    validate_worker_count(num_workers)
    if height < 0:
        raise ValueError(f"Height must be non-negative, got {height}")

    band_size = height // num_workers
    bands = []
    for i in range(num_workers):
        start_row = i * band_size
        end_row = height if i == num_workers - 1 else start_row + band_size
        bands.append(Band(start_row, end_row))
    return bands


def _run_work_item(item: WorkItem) -> int:
    """Fill the output rows of one band. Returns the number of rows written."""
    if len(item.band) == 0:
        return 0
    padded = zero_pad_rows(item.source, item.band.start_row, item.band.end_row)
    rows = evaluate_rows(padded, item.width, 0, len(item.band))
    item.output_rows()[:] = rows.reshape(-1)
    return len(item.band)


def _band_worker(item: WorkItem, errors: List[Optional[BaseException]]) -> None:
    # Each worker owns errors[item.index]; the dispatcher reads it after join()
    try:
        _run_work_item(item)
    except Exception as err:
        errors[item.index] = err


class BandDispatcher:
    """
    One-shot parallel Sobel filter.
    Spawns a fresh set of workers per call; nothing is reused between calls.
    """

    @staticmethod
    def _as_buffer(source: Union[PixelBuffer, bytes, np.ndarray], width: int, height: int) -> PixelBuffer:
        if isinstance(source, PixelBuffer):
            if (source.width, source.height) != (width, height):
                raise ValueError(
                    f"Buffer is {source.width}x{source.height}, caller passed {width}x{height}"
                )
            return source.read_only()
        return PixelBuffer(data=source, width=width, height=height).read_only()

    @staticmethod
    def _allocate_output(width: int, height: int) -> np.ndarray:
        try:
            return np.zeros(width * height, dtype=np.uint8)
        except MemoryError as err:
            raise BufferAllocationError(
                f"Error allocating memory for output image ({width}x{height})"
            ) from err

    def run(self, source, width: int, height: int, num_workers: int) -> FilterResult:
        """
        Filter an image and report how long the dispatch+join phase took.

        Args:
            source: PixelBuffer, or raw bytes / uint8 array of width * height samples.
            width, height: Image dimensions.
            num_workers: Number of concurrent band workers, 1..MAX_WORKERS.

        Returns:
            FilterResult: Output buffer, the bands used and the elapsed time in ms.
        """
        # Caller errors are rejected before anything is allocated or spawned
        num_workers = validate_worker_count(num_workers)
        source = self._as_buffer(source, width, height)

        output = self._allocate_output(width, height)
        bands = partition_bands(height, num_workers)
        items = [
            WorkItem(index=i, source=source, output=output,
                     width=width, height=height, band=band)
            for i, band in enumerate(bands)
        ]
        errors: List[Optional[BaseException]] = [None] * len(items)
        threads = [
            threading.Thread(target=_band_worker, args=(item, errors), name=f"sobel-band-{item.index}")
            for item in items
        ]

        start = time.perf_counter()
        started = []
        try:
            for thread in threads:
                thread.start()
                started.append(thread)
        finally:
            # Join barrier. An exception from one band is raised only after
            # every started band has finished.
            for thread in started:
                thread.join()
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        for err in errors:
            if err is not None:
                raise err

        logger.debug(f"Filtered {width}x{height} image with {num_workers} workers in {elapsed_ms:.3f} ms")
        return FilterResult(
            output=PixelBuffer(data=output, width=width, height=height),
            num_workers=num_workers,
            bands=bands,
            elapsed_ms=elapsed_ms,
        )

    def filter(self, source, width: int, height: int, num_workers: int) -> PixelBuffer:
        return self.run(source, width, height, num_workers).output


def sobel_filter(source, width: int, height: int, num_workers: int) -> PixelBuffer:
    """Module-level shortcut for ``BandDispatcher().filter``."""
    return BandDispatcher().filter(source, width, height, num_workers)
