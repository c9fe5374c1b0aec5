"""
Learned super-resolution backend.

Wraps OpenCV's dnn_superres module (opencv-contrib). Model files are the
pretrained EDSR / ESPCN / FSRCNN / LapSRN .pb graphs.
"""

from typing import Optional, Protocol

import cv2
import numpy as np

from .config import PipelineConfig
from .logging_config import get_logger

logger = get_logger(__name__)


class SuperResBackend(Protocol):
    """Interface the upscaler drives. Any method may raise."""

    name: str

    def load_model(self) -> None: ...

    def set_algorithm(self, algorithm: str, scale: int) -> None: ...

    def upsample(self, image: np.ndarray) -> np.ndarray: ...


class DnnSuperResBackend:
    """
    cv2.dnn_superres backed implementation.

    Nothing is read from disk until load_model() is called, so a bad
    path only fails inside the upscaler's guarded call. The model is read
    once and reused by later calls; a failed read is retried next time.
    """

    def __init__(self, model_path: str):
        self.model_path = model_path
        self.name = model_path
        self._impl = None

    def load_model(self) -> None:
        if self._impl is not None:
            return
        impl = cv2.dnn_superres.DnnSuperResImpl_create()
        impl.readModel(self.model_path)
        self._impl = impl
        logger.debug(f'Super-resolution model loaded: {self.model_path}')

    def set_algorithm(self, algorithm: str, scale: int) -> None:
        if self._impl is None:
            raise RuntimeError('load_model() must be called before set_algorithm()')
        self._impl.setModel(algorithm, scale)

    def upsample(self, image: np.ndarray) -> np.ndarray:
        if self._impl is None:
            raise RuntimeError('load_model() must be called before upsample()')
        return self._impl.upsample(image)


def create_backend(config: PipelineConfig) -> Optional[SuperResBackend]:
    """
    Build the configured backend.

    Returns:
        Backend instance, or None when no model path is configured
    """
    if not config.sr_model_path:
        return None
    return DnnSuperResBackend(config.sr_model_path)
