from __future__ import annotations

import csv
import logging

import numpy as np
import pytest

from sobel_bands.errors import DeterminismError, ImageLoadError, InvalidWorkerCountError
from sobel_bands.pipeline.benchmark import REPORT_HEADER, benchmark, write_report
from sobel_bands.pipeline.edge_detect import detect_edges
from sobel_bands.repositories.image_repository import ImageRepository
from sobel_bands.services import band_dispatcher
from sobel_bands.services.band_dispatcher import sobel_filter


def test_detect_edges_writes_output(tmp_path, noise_png, noise_pixels, capsys) -> None:
    out = tmp_path / "edges.png"
    result = detect_edges(noise_png, out, 4)

    assert result is not None
    assert "Execution time with 4 threads:" in capsys.readouterr().out
    expected = sobel_filter(noise_pixels.tobytes(), 23, 19, 1).rows()
    np.testing.assert_array_equal(ImageRepository.load(out).rows(), expected)


def test_detect_edges_checks_workers_before_loading(tmp_path) -> None:
    with pytest.raises(InvalidWorkerCountError):
        detect_edges(tmp_path / "missing.png", tmp_path / "out.png", 9)


def test_detect_edges_missing_input(tmp_path) -> None:
    with pytest.raises(ImageLoadError):
        detect_edges(tmp_path / "missing.png", tmp_path / "out.png", 2)


def test_failed_write_is_only_a_warning(tmp_path, noise_png, caplog) -> None:
    out = tmp_path / "no_such_dir" / "edges.png"
    with caplog.at_level(logging.WARNING):
        result = detect_edges(noise_png, out, 2)

    assert result is None
    assert not out.exists()
    assert any(r.levelno == logging.WARNING and "Error writing image" in r.getMessage()
               for r in caplog.records)


def test_benchmark_rows_and_report(tmp_path, noise_png) -> None:
    rows = benchmark(noise_png, [1, 2, 3], repeats=2)

    assert [r.num_workers for r in rows] == [1, 2, 3]
    assert all(r.image_name == "noise.png" for r in rows)
    assert rows[0].speedup == pytest.approx(1.0)

    report = write_report(rows, tmp_path / "reports" / "bench.csv")
    with open(report, newline="") as fh:
        table = list(csv.reader(fh))
    assert table[0] == REPORT_HEADER
    assert [line[1] for line in table[1:]] == ["1", "2", "3"]


def test_benchmark_rejects_bad_arguments(noise_png) -> None:
    with pytest.raises(InvalidWorkerCountError):
        benchmark(noise_png, [1, 0])
    with pytest.raises(ValueError):
        benchmark(noise_png, [])
    with pytest.raises(ValueError):
        benchmark(noise_png, [1], repeats=0)


def test_benchmark_detects_diverging_outputs(monkeypatch, noise_png) -> None:
    original = band_dispatcher._run_work_item

    def _broken(item):
        written = original(item)
        if item.band.start_row > 0:
            item.output_rows()[:] = 0
        return written

    monkeypatch.setattr(band_dispatcher, "_run_work_item", _broken)
    with pytest.raises(DeterminismError) as excinfo:
        benchmark(noise_png, [1, 2])
    assert excinfo.value.num_workers == 2
