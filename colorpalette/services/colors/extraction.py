"""
Dominant color extraction.

This module implements the extraction pipeline: stride sampling, alpha
filtering, fixed-bucket quantization into a frequency histogram, a near-gray
filter, CIE76 merging of near-duplicate buckets and padding with a
deterministic grayscale ramp so the caller always receives the requested
number of colors.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

import numpy as np
from loguru import logger

from colorpalette.config import config
from colorpalette.exceptions import ColorValidationError, UnsupportedSourceError
from colorpalette.utils.metrics import performance_monitor
from ..imaging import ArrayPixelSource, PixelSource
from .analysis import saturation_value_arrays
from .color import Color
from .conversions import rgb_array_to_lab
from .palette import ColorPalette

# Grayscale ramp used to pad short results
DEFAULT_RAMP_START = 255
DEFAULT_RAMP_END = 30


@dataclass
class ExtractionPolicy:
    """Tunable thresholds for the extraction pipeline."""

    # Target samples per axis; the stride is dim // sample_size
    sample_size: int = config.SAMPLE_SIZE

    # Bucket width per channel
    quantize_step: int = config.QUANTIZE_STEP

    # Near-gray / near-black filter (HSV, fractions)
    min_saturation: float = config.MIN_SATURATION
    min_value: float = config.MIN_VALUE

    # Buckets closer than this (CIE76) merge into an already selected color
    merge_delta_e: float = config.MERGE_DELTA_E

    def __post_init__(self):
        if self.sample_size < 1:
            raise ColorValidationError(f"sample_size must be positive, got {self.sample_size}")
        if not config.validate_quantize_step(self.quantize_step):
            raise ColorValidationError(f"quantize_step must be in [1, 128], got {self.quantize_step}")


def default_palette(count: int) -> List[Color]:
    """
    Evenly spaced grays from white down to a dark gray.

    A single default color is the midpoint of the ramp.
    """
    if count <= 0:
        return []
    if count == 1:
        value = round((DEFAULT_RAMP_START + DEFAULT_RAMP_END) / 2)
        return [Color(value, value, value)]

    span = DEFAULT_RAMP_START - DEFAULT_RAMP_END
    values = [round(DEFAULT_RAMP_START - span * i / (count - 1)) for i in range(count)]
    return [Color(v, v, v) for v in values]


def sample_pixels(image: np.ndarray, sample_size: int) -> np.ndarray:
    """
    Stride-sample an (H, W, C) image.

    Returns:
        Array of shape (N, C) uint8
    """
    height, width = image.shape[:2]
    step_y = max(1, height // sample_size)
    step_x = max(1, width // sample_size)
    sampled = image[::step_y, ::step_x]
    return sampled.reshape(-1, image.shape[2])


def drop_transparent(pixels: np.ndarray) -> np.ndarray:
    """Remove fully transparent RGBA samples and return RGB rows."""
    if pixels.shape[1] == 4:
        pixels = pixels[pixels[:, 3] > 0]
    return pixels[:, :3]


def quantize_pixels(pixels_rgb: np.ndarray, step: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Histogram pixels into fixed-width buckets.

    Args:
        pixels_rgb: Array of shape (N, 3) uint8
        step: Bucket width per channel

    Returns:
        Tuple of (representatives (K, 3) uint8, counts (K,), bucket keys (K,)).
        A representative is the rounded mean of the bucket's member pixels.
    """
    if pixels_rgb.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.uint8), np.zeros(0, dtype=np.int64), np.zeros(0, dtype=np.int64)

    levels = (255 // step) + 1
    bins = pixels_rgb.astype(np.int64) // step
    keys = (bins[:, 0] * levels + bins[:, 1]) * levels + bins[:, 2]

    unique_keys, inverse, counts = np.unique(keys, return_inverse=True, return_counts=True)
    inverse = inverse.ravel()

    sums = np.stack([
        np.bincount(inverse, weights=pixels_rgb[:, c].astype(np.float64), minlength=len(unique_keys))
        for c in range(3)
    ], axis=1)
    representatives = np.clip(np.rint(sums / counts[:, np.newaxis]), 0, 255).astype(np.uint8)

    return representatives, counts.astype(np.int64), unique_keys.astype(np.int64)


def filter_near_gray(representatives: np.ndarray, counts: np.ndarray, keys: np.ndarray,
                     min_saturation: float, min_value: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Discard buckets whose representative is near-gray or near-black."""
    saturation, value = saturation_value_arrays(representatives)
    keep = (saturation >= min_saturation) & (value >= min_value)
    logger.debug(f"Near-gray filter: kept {int(np.sum(keep))}/{len(keep)} buckets")
    return representatives[keep], counts[keep], keys[keep]


def merge_similar_buckets(representatives: np.ndarray, counts: np.ndarray, keys: np.ndarray,
                          count: int, merge_delta_e: float) -> List[Tuple[Color, int]]:
    """
    Select up to ``count`` distinct colors by descending frequency.

    Buckets are visited most frequent first (ties broken by bucket key). A
    bucket within ``merge_delta_e`` of an already selected color adds its
    frequency to that color instead of being selected.

    Returns:
        List of (color, accrued count), most frequent first
    """
    if representatives.shape[0] == 0:
        return []

    order = np.lexsort((keys, -counts))
    lab = rgb_array_to_lab(representatives)

    selected: List[int] = []
    accrued: List[int] = []
    for index in order:
        if selected:
            distances = np.linalg.norm(lab[selected] - lab[index], axis=1)
            nearest = int(np.argmin(distances))
            if distances[nearest] < merge_delta_e:
                accrued[nearest] += int(counts[index])
                continue
        if len(selected) < count:
            selected.append(int(index))
            accrued.append(int(counts[index]))

    # Stable sort keeps selection order on equal counts
    ranking = sorted(range(len(selected)), key=lambda k: -accrued[k])
    return [(Color(*(int(v) for v in representatives[selected[k]])), accrued[k]) for k in ranking]


class ColorExtractor:
    """Extracts a fixed number of dominant colors from a PixelSource."""

    def __init__(self, policy: Optional[ExtractionPolicy] = None):
        self.policy = policy or ExtractionPolicy()

    def extract(self, source: Union[PixelSource, np.ndarray], count: int = config.DEFAULT_COUNT) -> ColorPalette:
        """
        Extract dominant colors.

        Args:
            source: PixelSource (or a raw RGB(A) numpy array)
            count: Number of colors to return, in [1, 50]

        Returns:
            ColorPalette of exactly ``count`` colors in descending frequency
            order, padded with default grays when the image has too few
            distinct non-gray colors

        Raises:
            ColorValidationError: If count is out of bounds
            UnsupportedSourceError: If source does not expose pixel data
        """
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise ColorValidationError(f"count must be an integer, got {count!r}")
        if not config.validate_count(int(count)):
            raise ColorValidationError(
                f"count must be between {config.MIN_COUNT} and {config.MAX_COUNT}, got {count}"
            )
        count = int(count)

        if isinstance(source, np.ndarray):
            source = ArrayPixelSource(source)
        if not hasattr(source, "to_array"):
            raise UnsupportedSourceError(f"Not a pixel source: {type(source).__name__}")

        with performance_monitor("color_extraction", count=count):
            image = source.to_array()
            logger.info(f"Extracting {count} colors from {image.shape[1]}x{image.shape[0]} image")

            pixels = drop_transparent(sample_pixels(image, self.policy.sample_size))
            logger.debug(f"Sampled {pixels.shape[0]} opaque pixels")

            representatives, counts, keys = quantize_pixels(pixels, self.policy.quantize_step)
            representatives, counts, keys = filter_near_gray(
                representatives, counts, keys,
                self.policy.min_saturation, self.policy.min_value
            )

            ranked = merge_similar_buckets(representatives, counts, keys, count, self.policy.merge_delta_e)
            colors = [color for color, _ in ranked]

            missing = count - len(colors)
            if missing > 0:
                logger.warning(f"Only {len(colors)} distinct colors found, padding {missing} with defaults")
                colors.extend(default_palette(missing))

            logger.info(f"Extracted palette: {[c.to_hex() for c in colors]}")
            return ColorPalette(colors)
