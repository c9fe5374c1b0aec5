"""
Face region selection.

Picks the largest detected face and grows it into a padded region of
interest that includes hairline and jaw context.
"""

from dataclasses import dataclass
from typing import List, NamedTuple, Sequence, Tuple, Union

import numpy as np


class Rect(NamedTuple):
    """Axis-aligned integer rectangle (x, y, width, height)."""

    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height), the order OpenCV expects for dsize."""
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @classmethod
    def from_xyxy(cls, bbox) -> 'Rect':
        """Build from corner format [x1, y1, x2, y2] (e.g. InsightFace bboxes)."""
        x1, y1, x2, y2 = (int(round(float(v))) for v in bbox)
        return cls(x1, y1, x2 - x1, y2 - y1)


@dataclass(frozen=True)
class Found:
    """A face region was selected."""

    rect: Rect


@dataclass(frozen=True)
class NotFound:
    """No usable face region among the candidates."""


Selection = Union[Found, NotFound]


def select_largest(candidates: Sequence[Rect]) -> Selection:
    """
    Select the candidate with the largest area.

    Ties keep the first candidate seen. Zero-area candidates never win.

    Args:
        candidates: Detected rectangles, possibly empty

    Returns:
        Found(rect) or NotFound()
    """
    best = None
    for rect in candidates:
        rect = Rect(*(int(v) for v in rect))
        if rect.is_empty:
            continue
        if best is None or rect.area > best.area:
            best = rect

    if best is None:
        return NotFound()
    return Found(best)


def expand_and_clip(
    rect: Rect,
    image_size: Tuple[int, int],
    pad_x_divisor: int = 8,
    pad_y_divisor: int = 6
) -> Rect:
    """
    Pad a face rectangle on every side and clip it to the image.

    Args:
        rect: Detected face rectangle
        image_size: (width, height) of the source image
        pad_x_divisor: Horizontal padding per side is rect width // divisor
        pad_y_divisor: Vertical padding per side is rect height // divisor

    Returns:
        Clipped ROI inside [0, W) x [0, H)
    """
    img_w, img_h = image_size
    pad_x = rect.width // pad_x_divisor
    pad_y = rect.height // pad_y_divisor

    x1 = min(max(0, rect.x - pad_x), img_w)
    y1 = min(max(0, rect.y - pad_y), img_h)
    x2 = min(img_w, rect.x + rect.width + pad_x)
    y2 = min(img_h, rect.y + rect.height + pad_y)

    return Rect(x1, y1, max(0, x2 - x1), max(0, y2 - y1))


def visible_candidates(
    candidates: Sequence[Rect],
    image_size: Tuple[int, int],
    pad_x_divisor: int = 8,
    pad_y_divisor: int = 6
) -> List[Rect]:
    """Keep candidates whose padded ROI still overlaps the image."""
    visible = []
    for rect in candidates:
        rect = Rect(*(int(v) for v in rect))
        roi = expand_and_clip(rect, image_size, pad_x_divisor, pad_y_divisor)
        if not roi.is_empty:
            visible.append(rect)
    return visible


def crop(image: np.ndarray, rect: Rect) -> np.ndarray:
    """Copy the pixels under ``rect``."""
    if rect.is_empty:
        raise ValueError(f'Cannot crop an empty region: {rect}')
    return image[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width].copy()
