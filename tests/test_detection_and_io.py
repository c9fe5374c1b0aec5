import cv2
import numpy as np
import pytest

from face_enhancer.config import PipelineConfig
from face_enhancer.detection import HaarCascadeDetector, create_detector, prepare_for_detection
from face_enhancer.errors import DetectorLoadError, ImageReadError, ImageWriteError
from face_enhancer.image_io import load_image, save_image


def test_prepare_for_detection_equalizes_grayscale(portrait_image):
    gray = prepare_for_detection(portrait_image)

    assert gray.shape == (600, 800)
    assert gray.dtype == np.uint8
    # global equalization spreads the histogram over the full range
    assert gray.min() == 0
    assert gray.max() == 255


def test_prepare_for_detection_accepts_grayscale():
    gray = np.tile(np.arange(100, 150, dtype=np.uint8), (10, 1))

    assert prepare_for_detection(gray).shape == (10, 50)


def test_bundled_cascade_loads_and_finds_nothing_on_blank_image():
    detector = create_detector(PipelineConfig())

    assert isinstance(detector, HaarCascadeDetector)
    assert detector.detect(np.zeros((200, 200), dtype=np.uint8)) == []


def test_missing_cascade_raises(tmp_path):
    with pytest.raises(DetectorLoadError):
        HaarCascadeDetector(str(tmp_path / 'missing.xml')).load()


def test_invalid_cascade_raises(tmp_path):
    bogus = tmp_path / 'bogus.xml'
    bogus.write_text('<?xml version="1.0"?><opencv_storage></opencv_storage>')

    with pytest.raises(DetectorLoadError):
        HaarCascadeDetector(str(bogus)).load()


def test_create_detector_passes_cascade_parameters():
    config = PipelineConfig()

    detector = create_detector(config)

    assert detector.scale_factor == 1.2
    assert detector.min_neighbors == 5
    assert detector.min_size == (40, 40)


def test_image_roundtrip(tmp_path, small_region):
    path = save_image(small_region, tmp_path / 'a' / 'b.png')

    np.testing.assert_array_equal(load_image(path), small_region)


def test_load_missing_image_raises(tmp_path):
    with pytest.raises(ImageReadError):
        load_image(tmp_path / 'nope.jpg')


def test_load_undecodable_image_raises(tmp_path):
    path = tmp_path / 'junk.jpg'
    path.write_bytes(b'\x00\x01\x02')

    with pytest.raises(ImageReadError):
        load_image(path)


def test_load_grayscale_file_returns_three_channels(tmp_path):
    path = tmp_path / 'gray.png'
    cv2.imwrite(str(path), np.full((8, 8), 90, dtype=np.uint8))

    assert load_image(path).shape == (8, 8, 3)


def test_save_unknown_extension_raises(tmp_path, small_region):
    with pytest.raises(ImageWriteError):
        save_image(small_region, tmp_path / 'out.xyz')


def test_error_exit_codes_are_distinct():
    codes = {ImageReadError.exit_code, DetectorLoadError.exit_code, ImageWriteError.exit_code}

    assert codes == {2, 3, 4}
