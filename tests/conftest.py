import logging

import numpy as np
import pytest

from face_enhancer.enhancement.region import Rect


class FakeDetector:
    """Returns fixed candidates and remembers what it was shown."""

    def __init__(self, faces=()):
        self.faces = [Rect(*face) for face in faces]
        self.calls = []

    def detect(self, gray):
        self.calls.append(gray)
        return list(self.faces)


class FakeBackend:
    """Super-resolution double: nearest-neighbour upsampling by the model scale."""

    def __init__(self, name='models/EDSR_x2.pb', fail_on=None):
        self.name = name
        self.fail_on = fail_on
        self.algorithm = None
        self.scale = None
        self.loaded = False

    def _maybe_fail(self, step):
        if self.fail_on == step:
            raise RuntimeError(f'{step} exploded')

    def load_model(self):
        self._maybe_fail('load_model')
        self.loaded = True

    def set_algorithm(self, algorithm, scale):
        self._maybe_fail('set_algorithm')
        self.algorithm = algorithm
        self.scale = scale

    def upsample(self, image):
        self._maybe_fail('upsample')
        return np.repeat(np.repeat(image, self.scale, axis=0), self.scale, axis=1)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """setup_logging() installs a handler on the package logger; undo it between tests."""
    package_logger = logging.getLogger('face_enhancer')
    handlers, level = package_logger.handlers[:], package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


@pytest.fixture
def portrait_image():
    """800x600 BGR frame: smooth gradient with seeded grain."""
    rng = np.random.default_rng(7)
    h, w = 600, 800
    yy, xx = np.mgrid[0:h, 0:w]
    base = np.stack(
        [
            60 + 100 * xx / w,
            80 + 80 * yy / h,
            120 + 60 * (xx + yy) / (w + h),
        ],
        axis=-1,
    )
    noise = rng.normal(0, 18, size=(h, w, 3))
    return np.clip(base + noise, 0, 255).astype(np.uint8)


@pytest.fixture
def small_region():
    rng = np.random.default_rng(11)
    return rng.integers(30, 220, size=(48, 40, 3), dtype=np.uint8)


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        'SHARPEN_AMOUNT',
        'CLAHE_CLIP',
        'DENOISE_STRENGTH',
        'DENOISE_COLOR_STRENGTH',
        'SR_MODEL_PATH',
        'SR_SCALE',
        'FACE_DETECTOR',
        'CASCADE_PATH',
        'DEBUG',
    ):
        monkeypatch.delenv(name, raising=False)
