"""
Face enhancement pipeline.

Orchestrates the full run for one image:
1. Detect faces on the grayscale, equalized frame
2. Select the largest face (no face: return the original unchanged)
3. Crop a padded ROI
4. Upscale (learned super-resolution with bicubic fallback)
5. Unsharp mask
6. CLAHE on luma
7. Non-local means denoise
8. Resize back to ROI size
9. Feathered composite into a copy of the original
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import cv2
import numpy as np

from .config import PipelineConfig
from .detection import FaceDetector, prepare_for_detection
from .enhancement.compositing import paste_with_feather
from .enhancement.contrast import enhance_local_contrast
from .enhancement.denoise import denoise
from .enhancement.quality import region_metrics
from .enhancement.region import (
    Found,
    Rect,
    crop,
    expand_and_clip,
    select_largest,
    visible_candidates,
)
from .enhancement.sharpen import unsharp_mask
from .enhancement.upscale import upscale
from .logging_config import get_logger
from .superres import SuperResBackend
from .utils.timing import StageTimer, format_elapsed

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """
    Outcome of a single run.

    ``image`` is always a complete frame: enhanced when a face was found,
    an unmodified copy of the input otherwise.
    """

    image: np.ndarray
    face_found: bool = False
    face: Optional[Rect] = None
    roi: Optional[Rect] = None
    cropped_size: Optional[Tuple[int, int]] = None
    upscaled_size: Optional[Tuple[int, int]] = None
    upscale_method: Optional[str] = None
    metrics_before: Dict[str, float] = field(default_factory=dict)
    metrics_after: Dict[str, float] = field(default_factory=dict)
    timings: Dict[str, float] = field(default_factory=dict)


def _size(image: np.ndarray) -> Tuple[int, int]:
    return image.shape[1], image.shape[0]


class EnhancementPipeline:
    """
    Runs detection, region enhancement and compositing for one image.

    Holds only read-only collaborators, so one instance may serve many
    images; each run() owns its own arrays.
    """

    def __init__(
        self,
        config: PipelineConfig,
        detector: FaceDetector,
        backend: Optional[SuperResBackend] = None
    ):
        self.config = config
        self.detector = detector
        self.backend = backend

    def run(self, image: np.ndarray) -> PipelineResult:
        """
        Enhance the dominant face in ``image``.

        Args:
            image: BGR uint8 frame, not modified

        Returns:
            PipelineResult
        """
        config = self.config
        timer = StageTimer()

        with timer.stage('detect'):
            candidates = self.detector.detect(prepare_for_detection(image))
        logger.debug(f'{len(candidates)} face candidate(s)')

        # Boxes lying entirely outside the frame clip to nothing
        candidates = visible_candidates(
            candidates,
            _size(image),
            pad_x_divisor=config.pad_x_divisor,
            pad_y_divisor=config.pad_y_divisor
        )
        selection = select_largest(candidates)
        if not isinstance(selection, Found):
            logger.warning('No face detected. Passing original through.')
            return PipelineResult(image=image.copy(), timings=timer.timings)

        face = selection.rect
        roi = expand_and_clip(
            face,
            _size(image),
            pad_x_divisor=config.pad_x_divisor,
            pad_y_divisor=config.pad_y_divisor
        )
        logger.info(f'Face {tuple(face)} -> ROI {tuple(roi)}')

        region = crop(image, roi)
        metrics_before = region_metrics(region)

        with timer.stage('upscale'):
            upscaled = upscale(region, config.sr_scale, self.backend)
        logger.info(
            f'Upscale ({upscaled.method}): {_size(region)} -> {_size(upscaled.image)}'
        )

        with timer.stage('sharpen'):
            face_img = unsharp_mask(upscaled.image, config.sharpen_amount)

        with timer.stage('contrast'):
            face_img = enhance_local_contrast(
                face_img,
                clip_limit=config.clahe_clip_limit,
                tile_grid=config.clahe_tile_grid
            )

        with timer.stage('denoise'):
            face_img = denoise(
                face_img,
                strength=config.denoise_strength,
                color_strength=config.denoise_color_strength,
                template_window=config.denoise_template_window,
                search_window=config.denoise_search_window
            )

        with timer.stage('composite'):
            face_back = cv2.resize(face_img, roi.size, interpolation=cv2.INTER_CUBIC)
            result = image.copy()
            paste_with_feather(
                face_back,
                roi,
                result,
                min_radius=config.min_feather_radius,
                radius_divisor=config.feather_radius_divisor
            )

        metrics_after = region_metrics(crop(result, roi))
        logger.info(
            f"Sharpness {metrics_before['blur_score']:.1f} -> {metrics_after['blur_score']:.1f}, "
            f"brightness {metrics_before['brightness']:.1f} -> {metrics_after['brightness']:.1f}"
        )
        logger.debug(f'Stage timings: {timer.summary()} (total {format_elapsed(timer.total)})')

        return PipelineResult(
            image=result,
            face_found=True,
            face=face,
            roi=roi,
            cropped_size=_size(region),
            upscaled_size=_size(upscaled.image),
            upscale_method=upscaled.method,
            metrics_before=metrics_before,
            metrics_after=metrics_after,
            timings=timer.timings,
        )


def enhance_face(
    image: np.ndarray,
    config: PipelineConfig,
    detector: FaceDetector,
    backend: Optional[SuperResBackend] = None
) -> PipelineResult:
    """Run the pipeline once with the given collaborators."""
    return EnhancementPipeline(config, detector, backend).run(image)
