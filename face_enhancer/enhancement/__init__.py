"""
Face region enhancement package.

Contains modules for:
- Kernel construction
- Region selection
- Upscaling with super-resolution fallback
- Sharpening
- Local contrast enhancement
- Denoising
- Feathered compositing
- Region quality metrics
"""

from .kernels import gaussian_kernel, separable_blur, sharpen_kernel_size, feather_radius
from .region import Rect, Found, NotFound, select_largest, expand_and_clip, visible_candidates, crop
from .upscale import (
    Upsampled,
    BackendFailed,
    UpscaleResult,
    infer_algorithm,
    super_resolve,
    upscale,
)
from .sharpen import unsharp_mask
from .contrast import enhance_local_contrast
from .denoise import denoise
from .compositing import build_feather_mask, paste_with_feather
from .quality import compute_blur_score, region_metrics

__all__ = [
    'gaussian_kernel',
    'separable_blur',
    'sharpen_kernel_size',
    'feather_radius',
    'Rect',
    'Found',
    'NotFound',
    'select_largest',
    'expand_and_clip',
    'visible_candidates',
    'crop',
    'Upsampled',
    'BackendFailed',
    'UpscaleResult',
    'infer_algorithm',
    'super_resolve',
    'upscale',
    'unsharp_mask',
    'enhance_local_contrast',
    'denoise',
    'build_feather_mask',
    'paste_with_feather',
    'compute_blur_score',
    'region_metrics',
]
