"""
Face Enhancer - Main Entry Point

Enhances the largest face in a photograph and writes the composited result.

Exit status:
    0  enhanced image written, or original passed through (no face)
    1  usage / configuration error
    2  input image unreadable
    3  face detector model could not be loaded
    4  output image could not be written
"""

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, NoReturn, Optional

from .config import DETECTORS, PipelineConfig, load_config
from .detection import create_detector
from .errors import FaceEnhancerError
from .image_io import load_image, save_image
from .logging_config import setup_logging, get_logger
from .pipeline import enhance_face
from .superres import create_backend

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_ERROR = 1


class _ArgumentParser(argparse.ArgumentParser):
    """Reports usage errors with EXIT_USAGE instead of argparse's 2."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f'{self.prog}: error: {message}\n')


def _load_local_env() -> None:
    """Load environment variables from face_enhancer/.env if present."""
    env_path = Path(__file__).resolve().parent / '.env'
    if not env_path.exists():
        return

    for raw_line in env_path.read_text().splitlines():
        line = raw_line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, value = line.split('=', 1)
        os.environ.setdefault(key.strip(), value.strip())


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = _ArgumentParser(
        prog='face-enhancer',
        description='Face Enhancer - targeted enhancement of the dominant face in a photo'
    )

    parser.add_argument(
        '--input',
        required=True,
        help='Input image path'
    )

    parser.add_argument(
        '--output',
        default='enhanced.png',
        help='Output image path (default: enhanced.png)'
    )

    parser.add_argument(
        '--cascade',
        help='Haar cascade XML (or set CASCADE_PATH; default: OpenCV bundled frontal face)'
    )

    parser.add_argument(
        '--detector',
        choices=DETECTORS,
        help='Face detector backend (or set FACE_DETECTOR; default: haar)'
    )

    parser.add_argument(
        '--sr-model',
        help='EDSR/ESPCN/FSRCNN/LapSRN model file (or set SR_MODEL_PATH)'
    )

    parser.add_argument(
        '--sr-scale',
        type=float,
        help='Face region upscale factor, e.g. 2, 3 or 4 (or set SR_SCALE; default: 2)'
    )

    parser.add_argument(
        '--sharpen',
        type=float,
        help='Unsharp mask amount 0..3 (or set SHARPEN_AMOUNT; default: 1.0)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """
    Environment configuration with command line flags applied on top.

    Raises:
        ValueError: If a value is invalid
    """
    overrides = {
        'cascade_path': args.cascade,
        'detector': args.detector,
        'sr_model_path': args.sr_model,
        'sr_scale': args.sr_scale,
        'sharpen_amount': args.sharpen,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if args.debug:
        overrides['debug_mode'] = True

    return replace(load_config(), **overrides)


def run(args: argparse.Namespace, config: PipelineConfig) -> int:
    """
    Execute one enhancement run.

    Raises:
        FaceEnhancerError: On fatal read, detector or write failures
    """
    image = load_image(args.input)
    detector = create_detector(config)
    backend = create_backend(config)

    if config.superres_enabled:
        logger.info(f'Super-resolution model: {config.sr_model_path} (x{config.sr_scale:g})')

    result = enhance_face(image, config, detector, backend)

    save_image(result.image, args.output)
    if result.face_found:
        logger.info(f'✅ Saved: {args.output}')
    else:
        logger.info(f'Saved original: {args.output}')
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    _load_local_env()
    args = parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        print(f'face-enhancer: error: {e}', file=sys.stderr)
        return EXIT_USAGE

    # Setup logging
    setup_logging(Path(args.input).name, config.debug_mode)

    try:
        return run(args, config)
    except FaceEnhancerError as e:
        logger.error(str(e))
        return e.exit_code
    except Exception as e:
        logger.error(f'Fatal error: {e}', exc_info=True)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
