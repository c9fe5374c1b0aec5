import cv2
import numpy as np
import pytest

from conftest import FakeBackend
from face_enhancer.enhancement.upscale import (
    BackendFailed,
    Upsampled,
    infer_algorithm,
    super_resolve,
    target_size,
    upscale,
)
from face_enhancer.superres import DnnSuperResBackend


@pytest.mark.parametrize('scale', [0.5, 1.0, 1.01])
def test_upscale_noop_threshold_returns_identical_pixels(small_region, scale):
    result = upscale(small_region, scale, FakeBackend())

    assert result.method == 'none'
    np.testing.assert_array_equal(result.image, small_region)
    assert result.image is not small_region


@pytest.mark.parametrize('scale', [1.02, 1.3, 2.0, 3.0, 2.5])
def test_upscale_without_backend_uses_bicubic(small_region, scale):
    h, w = small_region.shape[:2]

    result = upscale(small_region, scale)

    assert result.method == 'bicubic'
    assert result.image.shape == (round(h * scale), round(w * scale), 3)
    assert result.image.dtype == np.uint8


def test_upscale_below_superres_threshold_skips_backend(small_region):
    backend = FakeBackend()

    result = upscale(small_region, 1.4, backend)

    assert result.method == 'bicubic'
    assert not backend.loaded


def test_upscale_uses_backend_when_configured(small_region):
    backend = FakeBackend(name='/models/LapSRN_x2.pb')

    result = upscale(small_region, 2.0, backend)

    assert result.method == 'superres'
    assert backend.algorithm == 'lapsrn'
    assert backend.scale == 2
    assert result.image.shape == (96, 80, 3)
    np.testing.assert_array_equal(result.image[::2, ::2], small_region)


def test_upscale_resizes_integer_model_output_to_requested_scale(small_region):
    backend = FakeBackend()

    result = upscale(small_region, 2.4, backend)

    # model ran at x2, output is still round(dim * 2.4)
    assert backend.scale == 2
    assert result.method == 'superres'
    assert result.image.shape[:2] == (round(48 * 2.4), round(40 * 2.4))


@pytest.mark.parametrize('step', ['load_model', 'set_algorithm', 'upsample'])
@pytest.mark.parametrize('scale', [1.5, 2.0, 3.0, 4.0])
def test_upscale_falls_back_on_backend_failure(small_region, step, scale):
    h, w = small_region.shape[:2]

    result = upscale(small_region, scale, FakeBackend(fail_on=step))

    assert result.method == 'bicubic-fallback'
    assert result.image.shape == (round(h * scale), round(w * scale), 3)


def test_upscale_failure_is_logged_as_warning(small_region, caplog):
    with caplog.at_level('WARNING'):
        upscale(small_region, 2.0, FakeBackend(fail_on='upsample'))

    assert 'Super-resolution failed' in caplog.text
    assert 'upsample exploded' in caplog.text


def test_upscale_with_unreadable_model_file_falls_back(small_region, tmp_path):
    backend = DnnSuperResBackend(str(tmp_path / 'missing_EDSR_x2.pb'))

    result = upscale(small_region, 2.0, backend)

    assert result.method == 'bicubic-fallback'
    assert result.image.shape == (96, 80, 3)


def test_super_resolve_reports_both_outcomes(small_region):
    ok = super_resolve(small_region, 2.0, FakeBackend())
    failed = super_resolve(small_region, 2.0, FakeBackend(fail_on='upsample'))

    assert isinstance(ok, Upsampled)
    assert ok.image.shape == (96, 80, 3)
    assert isinstance(failed, BackendFailed)
    assert isinstance(failed.error, RuntimeError)


def test_super_resolve_treats_empty_output_as_failure(small_region):
    backend = FakeBackend()
    backend.upsample = lambda image: np.zeros((0, 0, 3), dtype=np.uint8)

    assert isinstance(super_resolve(small_region, 2.0, backend), BackendFailed)


@pytest.mark.parametrize(
    'name, expected',
    [
        ('EDSR_x4.pb', 'edsr'),
        ('/models/LapSRN_x8.pb', 'lapsrn'),
        ('models/ESPCN_x3.pb', 'espcn'),
        ('FSRCNN-small_x2.pb', 'fsrcnn'),
        ('my_custom_model.pb', 'edsr'),
        ('', 'edsr'),
    ],
)
def test_infer_algorithm(name, expected):
    assert infer_algorithm(name) == expected


def test_target_size_is_width_height():
    assert target_size((21, 33, 3), 2.0) == (66, 42)
    assert target_size((1, 1), 0.1) == (1, 1)


class _CountingImpl:
    def __init__(self, reads, fail=False):
        self.reads = reads
        self.fail = fail
        self.scale = None

    def readModel(self, path):
        self.reads.append(path)
        if self.fail:
            raise cv2.error('cannot read model')

    def setModel(self, algorithm, scale):
        self.scale = scale

    def upsample(self, image):
        return np.repeat(np.repeat(image, self.scale, axis=0), self.scale, axis=1)


def test_dnn_backend_reads_model_once_across_images(small_region, monkeypatch):
    reads = []
    monkeypatch.setattr(cv2.dnn_superres, 'DnnSuperResImpl_create', lambda: _CountingImpl(reads))
    backend = DnnSuperResBackend('models/ESPCN_x2.pb')

    first = upscale(small_region, 2.0, backend)
    second = upscale(small_region, 2.0, backend)

    assert first.method == second.method == 'superres'
    assert reads == ['models/ESPCN_x2.pb']


def test_dnn_backend_retries_after_failed_read(monkeypatch):
    reads = []
    impls = iter([_CountingImpl(reads, fail=True), _CountingImpl(reads)])
    monkeypatch.setattr(cv2.dnn_superres, 'DnnSuperResImpl_create', lambda: next(impls))
    backend = DnnSuperResBackend('models/EDSR_x2.pb')

    with pytest.raises(cv2.error):
        backend.load_model()
    backend.load_model()

    assert len(reads) == 2
