"""
Region quality metrics.

Evaluates a face region based on:
- Sharpness (Laplacian variance)
- Brightness (mean luma)

Recorded before and after enhancement for logging; they never change
what the pipeline does.
"""

import cv2
import numpy as np
from typing import Dict


def compute_blur_score(gray: np.ndarray) -> float:
    """
    Compute blur score using Laplacian variance.

    Higher values indicate sharper images.

    Args:
        gray: Grayscale image

    Returns:
        Blur score (Laplacian variance)
    """
    return float(cv2.Laplacian(gray, cv2.CV_64F).var())


def region_metrics(region: np.ndarray) -> Dict[str, float]:
    """
    Measure a BGR or grayscale region.

    Returns:
        Dict with 'blur_score' and 'brightness'
    """
    gray = region if region.ndim == 2 else cv2.cvtColor(region, cv2.COLOR_BGR2GRAY)
    return {
        'blur_score': compute_blur_score(gray),
        'brightness': float(np.mean(gray)),
    }
