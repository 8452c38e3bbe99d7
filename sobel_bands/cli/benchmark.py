"""
sobel-benchmark <input_image> [report.csv]

Times the filter with every worker count from 1 to MAX_WORKERS and prints a
table; with a second argument the table is also written as CSV. Exit status
1 on a bad command line, an unreadable input or an unwritable report, 2 when
worker counts disagree.
"""
import logging
import sys
from typing import List, Optional

from ..config import configure_logging
from ..errors import DeterminismError, ImageLoadError
from ..pipeline.benchmark import benchmark, write_report

logger = logging.getLogger(__name__)

PROG = "sobel-benchmark"


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    argv = sys.argv[1:] if argv is None else argv

    if len(argv) not in (1, 2):
        print(f"Usage: {PROG} <input_image> [report.csv]", file=sys.stderr)
        return 1

    try:
        rows = benchmark(argv[0])
    except (ImageLoadError, TimeoutError):
        print(f"Error loading image {argv[0]}", file=sys.stderr)
        return 1
    except DeterminismError as err:
        logger.error(f"{err}")
        return 2

    for row in rows:
        print(f"{row.num_workers:2d} threads: {row.elapsed_ms:10.3f} ms  (x{row.speedup:.2f})")

    if len(argv) == 2:
        try:
            report = write_report(rows, argv[1])
        except OSError as err:
            logger.debug(f"{err}")
            print(f"Error writing report {argv[1]}", file=sys.stderr)
            return 1
        print(f"Report saved to {report}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
