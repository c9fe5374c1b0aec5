"""
Face detection module.

Haar cascade detection plus the preprocessing the pipeline applies
before any detector sees the frame.
"""

from pathlib import Path
from typing import List, Protocol, Tuple

import cv2
import numpy as np

from .config import PipelineConfig
from .enhancement.region import Rect
from .errors import DetectorLoadError
from .logging_config import get_logger

logger = get_logger(__name__)


class FaceDetector(Protocol):
    def detect(self, gray: np.ndarray) -> List[Rect]: ...


def prepare_for_detection(image: np.ndarray) -> np.ndarray:
    """
    Convert to grayscale and equalize the global histogram.

    Makes cascade detection more robust to lighting.
    """
    gray = image if image.ndim == 2 else cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    return cv2.equalizeHist(gray)


class HaarCascadeDetector:
    """OpenCV Haar cascade face detector."""

    def __init__(
        self,
        cascade_path: str,
        scale_factor: float = 1.2,
        min_neighbors: int = 5,
        min_size: Tuple[int, int] = (40, 40)
    ):
        self.cascade_path = cascade_path
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_size = tuple(min_size)
        self.classifier = None

    def load(self) -> 'HaarCascadeDetector':
        """
        Load the cascade file.

        Raises:
            DetectorLoadError: If the file is missing or not a valid cascade
        """
        if not Path(self.cascade_path).is_file():
            raise DetectorLoadError(f'Failed to load cascade: {self.cascade_path}')

        classifier = cv2.CascadeClassifier()
        try:
            loaded = classifier.load(self.cascade_path)
        except cv2.error as e:
            raise DetectorLoadError(f'Failed to load cascade: {self.cascade_path} ({e})') from e

        if not loaded or classifier.empty():
            raise DetectorLoadError(f'Failed to load cascade: {self.cascade_path}')

        self.classifier = classifier
        logger.debug(f'Cascade loaded: {self.cascade_path}')
        return self

    def detect(self, gray: np.ndarray) -> List[Rect]:
        if self.classifier is None:
            self.load()

        faces = self.classifier.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            flags=cv2.CASCADE_SCALE_IMAGE,
            minSize=self.min_size
        )
        return [Rect(*(int(v) for v in face)) for face in faces]


def create_detector(config: PipelineConfig) -> FaceDetector:
    """
    Build and load the configured detector.

    Raises:
        DetectorLoadError: If the detector model cannot be loaded
    """
    if config.detector == 'insightface':
        try:
            from .face_app import InsightFaceDetector
        except ImportError as e:
            raise DetectorLoadError(
                f'InsightFace detector requested but not installed ({e}); '
                'install with: pip install "face-enhancer[insightface]"'
            ) from e

        return InsightFaceDetector(config.insightface_det_size).load()

    return HaarCascadeDetector(
        config.cascade_path,
        scale_factor=config.detect_scale_factor,
        min_neighbors=config.detect_min_neighbors,
        min_size=config.detect_min_size
    ).load()
