"""
Kernel construction helpers.

Separable Gaussian kernels shared by the sharpener and the feather
compositor, and the size/radius rules that pick them.
"""

import cv2
import numpy as np
from typing import Tuple

# (upper bound on amount, kernel size); amounts past the last bound use 9
SHARPEN_KERNEL_STEPS: Tuple[Tuple[float, int], ...] = (
    (0.75, 3),
    (1.5, 5),
    (2.5, 7),
)
MAX_SHARPEN_KERNEL = 9


def gaussian_kernel(size: int, sigma: float = 0.0) -> np.ndarray:
    """
    Build a normalized 1-D Gaussian kernel.

    Args:
        size: Odd kernel length
        sigma: Standard deviation. Values <= 0 derive sigma from size
            the same way cv2.GaussianBlur does.

    Returns:
        Column vector of shape (size, 1), float64, summing to 1
    """
    if size < 1 or size % 2 == 0:
        raise ValueError(f'Kernel size must be a positive odd number, got {size}')
    return cv2.getGaussianKernel(size, sigma, cv2.CV_64F)


def separable_blur(
    image: np.ndarray,
    kernel: np.ndarray,
    border: int = cv2.BORDER_REFLECT_101
) -> np.ndarray:
    """
    Convolve an image with the same 1-D kernel along both axes.

    Returns a float64 result regardless of input dtype.
    """
    src = image.astype(np.float64, copy=False)
    return cv2.sepFilter2D(src, cv2.CV_64F, kernel, kernel, borderType=border)


def sharpen_kernel_size(amount: float) -> int:
    """
    Blur kernel size for a given unsharp mask amount.

    Stronger sharpening uses a coarser blur: 3 below 0.75, 5 below 1.5,
    7 below 2.5 and 9 otherwise.
    """
    for upper, size in SHARPEN_KERNEL_STEPS:
        if amount < upper:
            return size
    return MAX_SHARPEN_KERNEL


def feather_radius(roi_width: int, minimum: int = 3, divisor: int = 20) -> int:
    """Feather radius proportional to region width, never below ``minimum``."""
    return max(minimum, roi_width // divisor)
