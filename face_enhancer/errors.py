"""
Error types raised by Face Enhancer.

Only these errors abort a run. Super-resolution failures are handled
inside the upscaler and never surface here.
"""


class FaceEnhancerError(Exception):
    """Base class for fatal run errors."""

    exit_code = 1


class ImageReadError(FaceEnhancerError):
    """Input image missing or not decodable."""

    exit_code = 2


class DetectorLoadError(FaceEnhancerError):
    """Face detector model could not be loaded."""

    exit_code = 3


class ImageWriteError(FaceEnhancerError):
    """Output image could not be encoded or written."""

    exit_code = 4
