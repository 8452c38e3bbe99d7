"""
Edge Detection Pipeline
Load a grayscale image, run the band-parallel Sobel filter and save the result.
"""

import logging
from pathlib import Path

from ..errors import ImageWriteError
from ..services.band_dispatcher import FilterResult, validate_worker_count
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

# Edge maps are always written as PNG, whatever the output extension
OUTPUT_FORMAT = "PNG"


def detect_edges(
    input_path: str | Path,
    output_path: str | Path,
    num_workers: int,
    *,
    image_service: ImageService = ImageService(),
) -> FilterResult | None:
    """
    1. Reject a bad worker count before touching the filesystem
    2. Decode the input as grayscale
    3. Filter it, printing the dispatch+join time to stdout
    4. Encode the result to output_path as PNG

    A failed write is only a warning: the result is dropped and None is
    returned, but it is not treated as a failure of the run.

    Returns:
        FilterResult | None: The filter result, or None when it could not be saved.
    """
    num_workers = validate_worker_count(num_workers)

    source = image_service.load(input_path)
    logger.info(f"Loaded {Path(input_path).name} ({source.width}x{source.height})")

    result = image_service.detect_edges(source, num_workers)
    print(f"Execution time with {num_workers} threads: {result.elapsed_ms:.6f} ms")

    result.output.path = Path(output_path)
    try:
        image_service.save(result.output, format=OUTPUT_FORMAT)
    except ImageWriteError as err:
        logger.warning(f"{err}")
        return None

    logger.info(f"Edge map saved to {output_path}")
    return result
