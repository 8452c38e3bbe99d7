"""
sobel-filter <input_image> <output_image> <num_threads>

Three positional arguments, no flags. Exit status 1 on a bad command line,
an unreadable input or a failed allocation. A failed write only logs a
warning and still exits 0.
"""
import logging
import sys
from typing import List, Optional

from ..config import MAX_WORKERS, configure_logging
from ..errors import BufferAllocationError, ImageLoadError, InvalidWorkerCountError, UsageError
from ..pipeline.edge_detect import detect_edges

logger = logging.getLogger(__name__)

PROG = "sobel-filter"


def parse_args(argv: List[str]):
    if len(argv) != 3:
        raise UsageError(f"Usage: {PROG} <input_image> <output_image> <num_threads>")

    input_path, output_path, raw_workers = argv
    try:
        num_workers = int(raw_workers)
    except ValueError:
        raise InvalidWorkerCountError(raw_workers, MAX_WORKERS) from None
    return input_path, output_path, num_workers


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    argv = sys.argv[1:] if argv is None else argv

    try:
        input_path, output_path, num_workers = parse_args(argv)
        detect_edges(input_path, output_path, num_workers)
    except (UsageError, InvalidWorkerCountError) as err:
        print(err, file=sys.stderr)
        return 1
    except (ImageLoadError, TimeoutError) as err:
        logger.debug(f"{err}")
        print(f"Error loading image {argv[0]}", file=sys.stderr)
        return 1
    except BufferAllocationError as err:
        print(err, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
