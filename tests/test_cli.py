from __future__ import annotations

import numpy as np
import pytest
from PIL import Image as PILImage

from sobel_bands.cli import benchmark as benchmark_cli
from sobel_bands.cli import sobel
from sobel_bands.services.band_dispatcher import sobel_filter


def test_filter_success(tmp_path, noise_png, capsys) -> None:
    out = tmp_path / "edges.png"
    assert sobel.main([str(noise_png), str(out), "3"]) == 0
    assert out.exists()
    assert "Execution time with 3 threads:" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [[], ["a.png"], ["a.png", "b.png"], ["a.png", "b.png", "2", "extra"]])
def test_wrong_argument_count(argv, capsys) -> None:
    assert sobel.main(argv) == 1
    assert "Usage: sobel-filter" in capsys.readouterr().err


@pytest.mark.parametrize("workers", ["0", "9", "-2", "four", "2.5"])
def test_bad_worker_count(tmp_path, noise_png, workers, capsys) -> None:
    out = tmp_path / "edges.png"
    assert sobel.main([str(noise_png), str(out), workers]) == 1
    assert "Number of threads must be between 1 and 8" in capsys.readouterr().err
    assert not out.exists()


def test_unreadable_input(tmp_path, capsys) -> None:
    missing = tmp_path / "missing.png"
    assert sobel.main([str(missing), str(tmp_path / "out.png"), "2"]) == 1
    assert f"Error loading image {missing}" in capsys.readouterr().err


def test_failed_write_still_exits_zero(tmp_path, noise_png) -> None:
    out = tmp_path / "missing_dir" / "edges.png"
    assert sobel.main([str(noise_png), str(out), "2"]) == 0
    assert not out.exists()


def test_benchmark_cli(tmp_path, noise_png, capsys) -> None:
    report = tmp_path / "bench.csv"
    assert benchmark_cli.main([str(noise_png), str(report)]) == 0
    assert report.exists()
    assert " 8 threads:" in capsys.readouterr().out


def test_benchmark_cli_usage(capsys) -> None:
    assert benchmark_cli.main([]) == 1
    assert "Usage: sobel-benchmark" in capsys.readouterr().err


def test_benchmark_cli_missing_input(tmp_path, capsys) -> None:
    assert benchmark_cli.main([str(tmp_path / "missing.png")]) == 1
    assert "Error loading image" in capsys.readouterr().err


@pytest.mark.parametrize("name", ["edges.jpg", "edges"])
def test_output_is_png_whatever_the_extension(tmp_path, noise_png, noise_pixels, name) -> None:
    out = tmp_path / name
    assert sobel.main([str(noise_png), str(out), "2"]) == 0
    assert out.exists()

    expected = sobel_filter(noise_pixels.tobytes(), 23, 19, 1).rows()
    with PILImage.open(out) as img:
        assert img.format == "PNG"
        np.testing.assert_array_equal(np.asarray(img), expected)


def test_benchmark_cli_unwritable_report(tmp_path, noise_png, capsys) -> None:
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    report = blocker / "bench.csv"

    assert benchmark_cli.main([str(noise_png), str(report)]) == 1
    assert f"Error writing report {report}" in capsys.readouterr().err
