"""
Feathered compositing.

Blends an enhanced region back into the source frame with a soft-edged
weight mask so the rectangular ROI boundary does not show.
"""

import cv2
import numpy as np
from typing import Tuple

from .kernels import feather_radius, gaussian_kernel, separable_blur
from .region import Rect


def build_feather_mask(size: Tuple[int, int], radius: int) -> np.ndarray:
    """
    Build a radial feather weight field.

    A field of ones is blurred with a Gaussian of half-width ``radius``
    and zero padding, so values drop towards the border where the kernel
    hangs off the field. The result is rescaled to span [0, 1].

    Args:
        size: (width, height) of the mask
        radius: Kernel half-width (kernel length 2*radius+1, sigma=radius)

    Returns:
        float32 array of shape (height, width), max exactly 1.0
    """
    width, height = size
    r = max(1, int(radius))
    kernel = gaussian_kernel(2 * r + 1, r)

    field = np.ones((height, width), dtype=np.float64)
    weights = separable_blur(field, kernel, border=cv2.BORDER_CONSTANT)

    lo, hi = float(weights.min()), float(weights.max())
    if hi - lo <= 1e-12:
        return np.ones((height, width), dtype=np.float32)

    mask = (weights - lo) / (hi - lo)
    return np.clip(mask, 0.0, 1.0).astype(np.float32)


def paste_with_feather(
    processed: np.ndarray,
    roi: Rect,
    canvas: np.ndarray,
    min_radius: int = 3,
    radius_divisor: int = 20
) -> None:
    """
    Blend ``processed`` into ``canvas`` at ``roi``, in place.

    canvas = processed * mask + canvas * (1 - mask), computed in [0, 1]
    float space. Mask centre is 1 so the middle of the face is fully
    replaced; the border falls off towards the original pixels.

    Args:
        processed: Enhanced region, any size (resized to the ROI)
        roi: Target rectangle inside ``canvas``
        canvas: uint8 image, modified in place
        min_radius: Lower bound of the feather radius
        radius_divisor: Feather radius is roi.width // radius_divisor
    """
    if roi.is_empty:
        raise ValueError(f'Cannot composite into an empty region: {roi}')

    dst_roi = canvas[roi.y:roi.y + roi.height, roi.x:roi.x + roi.width]
    resized = cv2.resize(processed, roi.size, interpolation=cv2.INTER_CUBIC)

    mask = build_feather_mask(
        roi.size,
        feather_radius(roi.width, minimum=min_radius, divisor=radius_divisor)
    )
    if dst_roi.ndim == 3:
        mask = mask[..., np.newaxis]

    dst_f = dst_roi.astype(np.float32) / 255.0
    src_f = resized.astype(np.float32) / 255.0
    blended = src_f * mask + dst_f * (1.0 - mask)

    dst_roi[...] = np.clip(np.rint(blended * 255.0), 0, 255).astype(np.uint8)
