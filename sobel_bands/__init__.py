"""Band-parallel Sobel edge filter for grayscale images."""
from .config import MAX_WORKERS
from .models.band import Band
from .models.pixel_buffer import PixelBuffer
from .services.band_dispatcher import BandDispatcher, FilterResult, partition_bands, sobel_filter
from .services.gradient_evaluator import evaluate

__version__ = "1.0.0"
