"""
Grain removal after sharpening and equalization.
"""

import cv2
import numpy as np


def denoise(
    region: np.ndarray,
    strength: int = 3,
    color_strength: int = 3,
    template_window: int = 7,
    search_window: int = 21
) -> np.ndarray:
    """
    Non-local means denoising with mild default strengths.

    Args:
        region: BGR or grayscale uint8 image
        strength: Luminance filter strength
        color_strength: Color filter strength (ignored for grayscale)
        template_window: Template patch size, odd
        search_window: Search window size, odd

    Returns:
        Denoised image, same shape and dtype
    """
    if region.ndim == 2:
        return cv2.fastNlMeansDenoising(
            region,
            None,
            h=strength,
            templateWindowSize=template_window,
            searchWindowSize=search_window
        )

    return cv2.fastNlMeansDenoisingColored(
        region,
        None,
        h=strength,
        hColor=color_strength,
        templateWindowSize=template_window,
        searchWindowSize=search_window
    )
