"""
Face Enhancer - Targeted Face Region Enhancement

Finds the dominant face in a photograph, enhances it (upscaling, unsharp
masking, local contrast, denoising) and feathers it back into the frame.
"""

__version__ = "1.0.0"
__author__ = "Face Enhancer Team"
