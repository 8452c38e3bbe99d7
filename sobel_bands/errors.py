"""Exception types for the band-parallel Sobel filter.

Configuration errors are ``ValueError`` subclasses, resource errors map onto
the built-in I/O and memory errors, and sink errors are ``OSError`` so that
callers can catch them the same way they catch any failed write.
"""

from __future__ import annotations


class UsageError(ValueError):
    """Raised when the command line does not have the expected shape."""


class InvalidWorkerCountError(ValueError):
    """Raised when a worker count falls outside [1, MAX_WORKERS]."""

    def __init__(self, num_workers, max_workers: int) -> None:
        self.num_workers = num_workers
        self.max_workers = max_workers
        super().__init__(f"Number of threads must be between 1 and {max_workers}")


class ImageLoadError(FileNotFoundError):
    """Raised when an input image is missing or cannot be decoded."""


class BufferAllocationError(MemoryError):
    """Raised when the output buffer cannot be allocated."""


class ImageWriteError(OSError):
    """Raised when the output image cannot be encoded or written."""


class DeterminismError(RuntimeError):
    """Raised when two worker counts produce different outputs for one image."""

    def __init__(self, num_workers: int, mismatched: int) -> None:
        self.num_workers = num_workers
        self.mismatched = mismatched
        super().__init__(
            f"Output with {num_workers} workers differs from the single-worker output "
            f"in {mismatched} pixels"
        )
