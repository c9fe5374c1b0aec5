"""
InsightFace detector module.

Optional face detection backend using InsightFace models. Installed via
the ``insightface`` extra and selected with FACE_DETECTOR=insightface.
"""

from typing import List, Tuple

import cv2
import numpy as np
from insightface.app import FaceAnalysis

from .enhancement.region import Rect
from .errors import DetectorLoadError
from .logging_config import get_logger

logger = get_logger(__name__)


class InsightFaceDetector:
    """RetinaFace detection through InsightFace's FaceAnalysis."""

    def __init__(self, det_size: Tuple[int, int] = (640, 640)):
        self.det_size = tuple(det_size)
        self.face_app = None

    def load(self) -> 'InsightFaceDetector':
        """
        Initialize InsightFace FaceAnalysis.

        Raises:
            DetectorLoadError: If the model pack cannot be prepared
        """
        logger.info('Initializing InsightFace AI...')
        try:
            face_app = FaceAnalysis(allowed_modules=['detection'], providers=['CPUExecutionProvider'])
            face_app.prepare(ctx_id=0, det_size=self.det_size)
        except Exception as e:
            raise DetectorLoadError(f'Failed to initialize InsightFace: {e}') from e

        self.face_app = face_app
        logger.info(f'✅ InsightFace initialized (det_size={self.det_size})')
        return self

    def detect(self, gray: np.ndarray) -> List[Rect]:
        """
        Detect faces in a grayscale, histogram-equalized image.

        InsightFace expects three channels, so the gray plane is replicated.
        """
        if self.face_app is None:
            self.load()

        frame = cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR) if gray.ndim == 2 else gray
        faces = self.face_app.get(frame)
        return [Rect.from_xyxy(face.bbox) for face in faces]
