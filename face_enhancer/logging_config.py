"""
Logging for Face Enhancer.

The package logs under the ``face_enhancer`` logger. Library use leaves
handler setup to the host application; the CLI calls setup_logging() to
print diagnostics to stderr, tagged with the input image name, so stdout
stays free for the caller.
"""

import logging
import sys

PACKAGE_LOGGER = 'face_enhancer'
LOG_FORMAT = '[%(levelname)s] [image=%(image)s] %(message)s'


class ImageContextFilter(logging.Filter):
    """Stamp each record with the image being processed."""

    def __init__(self, image_name: str):
        super().__init__()
        self.image_name = image_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.image = self.image_name
        return True


def setup_logging(image_name: str, debug: bool = False) -> logging.Handler:
    """
    Attach a stderr handler to the package logger for one run.

    A handler installed by an earlier call is replaced, so repeated runs
    in one process never print twice. Handlers owned by other code,
    including the root logger's, are left alone.

    Args:
        image_name: Input image identifier for log context
        debug: Enable debug level logging

    Returns:
        The installed handler
    """
    level = logging.DEBUG if debug else logging.INFO

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        if any(isinstance(f, ImageContextFilter) for f in handler.filters):
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(ImageContextFilter(image_name))
    package_logger.addHandler(handler)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (pass __name__)."""
    return logging.getLogger(name)
