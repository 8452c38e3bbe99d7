"""
Worker-count benchmark.
Filters one image with every worker count, keeps the best time of each and
checks that all outputs match the single-worker output byte for byte.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List

import numpy as np

from ..config import BENCHMARK_REPEATS, MAX_WORKERS
from ..errors import DeterminismError
from ..services.band_dispatcher import validate_worker_count
from ..services.image_service import ImageService

logger = logging.getLogger(__name__)

REPORT_HEADER = ["Image Name", "Workers", "Time (ms)", "Speedup"]


@dataclass
class BenchmarkRow:
    image_name: str
    num_workers: int
    elapsed_ms: float   # best of all repeats
    speedup: float      # relative to the first worker count measured


def benchmark(
    input_path: str | Path,
    worker_counts: Iterable[int] = range(1, MAX_WORKERS + 1),
    *,
    repeats: int = BENCHMARK_REPEATS,
    image_service: ImageService = ImageService(),
) -> List[BenchmarkRow]:
    worker_counts = [validate_worker_count(n) for n in worker_counts]
    if not worker_counts:
        raise ValueError("At least one worker count is required")
    if repeats < 1:
        raise ValueError(f"repeats must be at least 1, got {repeats}")

    source = image_service.load(input_path)
    image_name = Path(input_path).name

    # Reference output is always the single-worker pass
    reference = image_service.detect_edges(source, 1).output.data

    rows: List[BenchmarkRow] = []
    baseline_ms = None
    for num_workers in worker_counts:
        best_ms = None
        for _ in range(repeats):
            result = image_service.detect_edges(source, num_workers)
            mismatched = int(np.count_nonzero(result.output.data != reference))
            if mismatched:
                raise DeterminismError(num_workers, mismatched)
            if best_ms is None or result.elapsed_ms < best_ms:
                best_ms = result.elapsed_ms

        if baseline_ms is None:
            baseline_ms = best_ms
        speedup = baseline_ms / best_ms if best_ms > 0 else float("inf")
        rows.append(BenchmarkRow(image_name, num_workers, best_ms, speedup))
        logger.info(f"{image_name}: {num_workers} workers -> {best_ms:.3f} ms (x{speedup:.2f})")

    return rows


def write_report(rows: List[BenchmarkRow], report_file: str | Path) -> Path:
    report_file = Path(report_file)
    report_file.parent.mkdir(parents=True, exist_ok=True)

    with open(report_file, mode='w', newline='') as csvfile:
        csvwriter = csv.writer(csvfile)
        csvwriter.writerow(REPORT_HEADER)
        for row in rows:
            csvwriter.writerow([row.image_name, row.num_workers, f"{row.elapsed_ms:.6f}", f"{row.speedup:.4f}"])

    return report_file
