"""
Face region upscaling.

Uses a learned super-resolution backend when one is configured and the
scale is large enough to be worth it. Any backend failure degrades to
bicubic interpolation at the same scale; callers never see the error.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, Union

import cv2
import numpy as np

from ..logging_config import get_logger
from ..superres import SuperResBackend

logger = get_logger(__name__)

NOOP_SCALE = 1.01
MIN_SUPERRES_SCALE = 1.5

# Checked in order; none of these names contains another
ALGORITHM_FAMILIES = ('edsr', 'espcn', 'fsrcnn', 'lapsrn')
DEFAULT_ALGORITHM = 'edsr'


@dataclass(frozen=True)
class Upsampled:
    """Backend produced an image."""

    image: np.ndarray


@dataclass(frozen=True)
class BackendFailed:
    """Backend raised; ``error`` is the original exception."""

    error: Exception


SuperResOutcome = Union[Upsampled, BackendFailed]


class UpscaleResult(NamedTuple):
    image: np.ndarray
    method: str  # 'none', 'superres', 'bicubic' or 'bicubic-fallback'


def infer_algorithm(name: str) -> str:
    """
    Guess the super-resolution family from a model name.

    Case-insensitive substring match, e.g. 'LapSRN_x2.pb' -> 'lapsrn'.
    Unrecognized names default to EDSR.
    """
    lowered = name.lower()
    for family in ALGORITHM_FAMILIES:
        if family in lowered:
            return family
    return DEFAULT_ALGORITHM


def target_size(shape: Tuple[int, ...], scale: float) -> Tuple[int, int]:
    """(width, height) of a region of ``shape`` scaled by ``scale``."""
    height, width = shape[:2]
    return max(1, int(round(width * scale))), max(1, int(round(height * scale)))


def resize_bicubic(region: np.ndarray, scale: float) -> np.ndarray:
    return cv2.resize(region, target_size(region.shape, scale), interpolation=cv2.INTER_CUBIC)


def super_resolve(region: np.ndarray, scale: float, backend: SuperResBackend) -> SuperResOutcome:
    """
    Run the learned backend once.

    Model loading, algorithm selection and inference all happen inside
    the guard, so an unreadable model or unsupported scale is reported
    the same way as an inference error.
    """
    algorithm = infer_algorithm(backend.name)
    try:
        backend.load_model()
        backend.set_algorithm(algorithm, int(round(scale)))
        upsampled = backend.upsample(region)
    except Exception as e:
        return BackendFailed(e)

    if upsampled is None or upsampled.size == 0:
        return BackendFailed(RuntimeError('backend returned an empty image'))
    return Upsampled(upsampled)


def upscale(
    region: np.ndarray,
    scale: float,
    backend: Optional[SuperResBackend] = None
) -> UpscaleResult:
    """
    Upscale a region by ``scale``.

    Args:
        region: BGR uint8 image
        scale: Upscale factor; <= 1.01 is a no-op
        backend: Optional learned super-resolution backend

    Returns:
        UpscaleResult with output size round(w*scale) x round(h*scale),
        or an unchanged copy when the no-op threshold applies
    """
    if scale <= NOOP_SCALE:
        return UpscaleResult(region.copy(), 'none')

    if backend is None or scale < MIN_SUPERRES_SCALE:
        return UpscaleResult(resize_bicubic(region, scale), 'bicubic')

    outcome = super_resolve(region, scale, backend)

    if isinstance(outcome, BackendFailed):
        logger.warning(f'Super-resolution failed: {outcome.error}. Using bicubic.')
        return UpscaleResult(resize_bicubic(region, scale), 'bicubic-fallback')

    image = outcome.image
    size = target_size(region.shape, scale)
    if (image.shape[1], image.shape[0]) != size:
        # integer model scale vs fractional request
        image = cv2.resize(image, size, interpolation=cv2.INTER_CUBIC)
    return UpscaleResult(image, 'superres')
