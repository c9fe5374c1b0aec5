"""
Configuration module for Face Enhancer.

Loads configuration from environment variables with sensible defaults.
All settings are immutable after initialization.
"""

import os
from dataclasses import dataclass
from typing import Tuple

import cv2


DETECTORS = ('haar', 'insightface')


def default_cascade_path() -> str:
    """Path of the frontal face Haar cascade bundled with OpenCV."""
    return os.path.join(cv2.data.haarcascades, 'haarcascade_frontalface_default.xml')


@dataclass(frozen=True)
class PipelineConfig:
    """
    Immutable configuration for one enhancement run.

    Enhancement:
        sharpen_amount: Unsharp mask strength (0 disables, typical 0-3)
        clahe_clip_limit: CLAHE contrast limiting on the luma channel
        clahe_tile_grid: CLAHE tile grid (columns, rows)
        denoise_strength: Non-local means luminance strength
        denoise_color_strength: Non-local means color strength
        denoise_template_window: Template patch size in pixels
        denoise_search_window: Search window size in pixels

    Super-resolution:
        sr_model_path: Path to an EDSR/ESPCN/FSRCNN/LapSRN model file
            (empty disables the learned backend)
        sr_scale: Upscale factor for the face region. Used by the learned
            backend only when >= 1.5, bicubic interpolation otherwise.

    Detection:
        detector: 'haar' or 'insightface'
        cascade_path: Haar cascade XML file
        detect_scale_factor: Cascade pyramid scale step
        detect_min_neighbors: Cascade neighbour votes per detection
        detect_min_size: Smallest face (width, height) in pixels
        insightface_det_size: Detection size for InsightFace (width, height)

    Region & compositing:
        pad_x_divisor: Horizontal ROI padding per side is face width / divisor
        pad_y_divisor: Vertical ROI padding per side is face height / divisor
        min_feather_radius: Lower bound of the feather radius
        feather_radius_divisor: Feather radius is ROI width / divisor

    System:
        debug_mode: Enable debug logging
    """

    # Enhancement
    sharpen_amount: float = 1.0
    clahe_clip_limit: float = 2.0
    clahe_tile_grid: Tuple[int, int] = (8, 8)
    denoise_strength: int = 3
    denoise_color_strength: int = 3
    denoise_template_window: int = 7
    denoise_search_window: int = 21

    # Super-resolution
    sr_model_path: str = ''
    sr_scale: float = 2.0

    # Detection
    detector: str = 'haar'
    cascade_path: str = ''
    detect_scale_factor: float = 1.2
    detect_min_neighbors: int = 5
    detect_min_size: Tuple[int, int] = (40, 40)
    insightface_det_size: Tuple[int, int] = (640, 640)

    # Region & compositing
    pad_x_divisor: int = 8
    pad_y_divisor: int = 6
    min_feather_radius: int = 3
    feather_radius_divisor: int = 20

    # System
    debug_mode: bool = False

    def __post_init__(self) -> None:
        if self.sr_scale <= 0:
            raise ValueError(f'sr_scale must be positive, got {self.sr_scale}')
        if self.detector not in DETECTORS:
            raise ValueError(f'Unknown detector {self.detector!r}, expected one of {DETECTORS}')
        if self.clahe_clip_limit <= 0:
            raise ValueError(f'clahe_clip_limit must be positive, got {self.clahe_clip_limit}')
        for name in ('pad_x_divisor', 'pad_y_divisor', 'feather_radius_divisor'):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f'{name} must be >= 1, got {value}')
        if not self.cascade_path:
            # frozen: bypass __setattr__ for the derived default
            object.__setattr__(self, 'cascade_path', default_cascade_path())

    @property
    def superres_enabled(self) -> bool:
        return bool(self.sr_model_path) and self.sr_scale >= 1.5


def load_config() -> PipelineConfig:
    """
    Load configuration from environment variables.

    Returns:
        PipelineConfig: Immutable configuration object
    """
    return PipelineConfig(
        # Enhancement
        sharpen_amount=float(os.getenv('SHARPEN_AMOUNT', '1.0')),
        clahe_clip_limit=float(os.getenv('CLAHE_CLIP', '2.0')),
        denoise_strength=int(os.getenv('DENOISE_STRENGTH', '3')),
        denoise_color_strength=int(os.getenv('DENOISE_COLOR_STRENGTH', '3')),

        # Super-resolution
        sr_model_path=os.getenv('SR_MODEL_PATH', ''),
        sr_scale=float(os.getenv('SR_SCALE', '2.0')),

        # Detection
        detector=os.getenv('FACE_DETECTOR', 'haar').lower(),
        cascade_path=os.getenv('CASCADE_PATH', ''),

        # System
        debug_mode=os.getenv('DEBUG', 'false').lower() == 'true',
    )
