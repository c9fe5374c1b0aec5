"""
Image file I/O.

Decodes and encodes BGR images with OpenCV. Failures are fatal for the
run and surface as ImageReadError / ImageWriteError.
"""

from pathlib import Path
from typing import Union

import cv2
import numpy as np

from .errors import ImageReadError, ImageWriteError
from .logging_config import get_logger

logger = get_logger(__name__)


def load_image(path: Union[str, Path]) -> np.ndarray:
    """
    Load a color image from disk.

    Args:
        path: Image file path

    Returns:
        BGR image, dtype uint8, shape (H, W, 3)

    Raises:
        ImageReadError: If the file is missing or cannot be decoded
    """
    path = Path(path)
    if not path.is_file():
        raise ImageReadError(f'Image not found: {path}')

    image = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageReadError(f'Image unreadable: {path}')

    logger.debug(f'Loaded {path} ({image.shape[1]}x{image.shape[0]})')
    return image


def save_image(image: np.ndarray, path: Union[str, Path]) -> Path:
    """
    Write an image to disk, creating parent directories as needed.

    Raises:
        ImageWriteError: If the directory cannot be created or encoding fails
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        ok = cv2.imwrite(str(path), image)
    except (OSError, cv2.error) as e:
        raise ImageWriteError(f'Failed to write output: {path} ({e})') from e

    if not ok:
        raise ImageWriteError(f'Failed to write output: {path}')

    logger.debug(f'Saved {path}')
    return path
