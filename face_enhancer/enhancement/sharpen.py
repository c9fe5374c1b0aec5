"""
Unsharp masking.

Amplifies the difference between a region and a Gaussian-blurred copy
of itself. The blur window grows with the requested amount.
"""

import numpy as np

from .kernels import gaussian_kernel, separable_blur, sharpen_kernel_size


def unsharp_mask(region: np.ndarray, amount: float) -> np.ndarray:
    """
    Sharpen a region.

    output = region * (1 + amount) - blurred * amount, clamped to [0, 255]

    Args:
        region: BGR or grayscale uint8 image
        amount: Sharpening strength, <= 0 disables

    Returns:
        New uint8 image of the same shape
    """
    if amount <= 0:
        return region.copy()

    kernel = gaussian_kernel(sharpen_kernel_size(amount))
    blurred = separable_blur(region, kernel)

    sharp = region.astype(np.float64) * (1.0 + amount) - blurred * amount
    return np.clip(np.rint(sharp), 0, 255).astype(np.uint8)
