"""
Local contrast enhancement.

CLAHE on the luminance channel only, so skin tones keep their color.
"""

import cv2
import numpy as np
from typing import Tuple


def enhance_local_contrast(
    region: np.ndarray,
    clip_limit: float = 2.0,
    tile_grid: Tuple[int, int] = (8, 8)
) -> np.ndarray:
    """
    Apply contrast-limited adaptive histogram equalization to luma.

    Args:
        region: BGR or grayscale uint8 image
        clip_limit: CLAHE contrast limiting (higher = more contrast)
        tile_grid: Tiles per (column, row)

    Returns:
        Enhanced image, same shape and dtype
    """
    clahe = cv2.createCLAHE(
        clipLimit=clip_limit,
        tileGridSize=tuple(tile_grid)
    )

    if region.ndim == 2:
        return clahe.apply(region)

    # YCrCb keeps chroma untouched while Y is equalized
    ycrcb = cv2.cvtColor(region, cv2.COLOR_BGR2YCrCb)
    y, cr, cb = cv2.split(ycrcb)
    y_enhanced = clahe.apply(y)

    return cv2.cvtColor(
        cv2.merge([y_enhanced, cr, cb]),
        cv2.COLOR_YCrCb2BGR
    )
