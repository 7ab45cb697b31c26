"""Rotate and save a single image file."""

from enum import Enum

from .codec import load_image, save_image
from .exceptions import DecodeError, TransformError, EncodeError
from .logging_utils import get_script_logger
from .rotate import rotate_image

logger = get_script_logger()


class Outcome(Enum):
    """Result of processing one file."""

    SUCCEEDED = "succeeded"
    SKIPPED_NO_ANGLE = "skipped: angle is 0.0"
    FAILED_DECODE = "failed to decode"
    FAILED_TRANSFORM = "failed to rotate"
    FAILED_ENCODE = "failed to encode"

    @property
    def ok(self):
        return self is Outcome.SUCCEEDED


def process_single_image(input_file, output_file, angle, output_config=None):
    """
    Rotate an image and save it, unless the angle is exactly 0.0.

    A zero angle means there is nothing to do and is reported as
    SKIPPED_NO_ANGLE, which callers treat as a failure.

    Args:
        input_file: Path of the input image file
        output_file: Path where the rotated image is written
        angle: Rotation angle in degrees
        output_config: Optional [output] config section with encoder settings

    Returns:
        Outcome of the operation
    """
    if angle == 0.0:
        logger.info("Rotation angle is 0.0, nothing to do for %s", input_file)
        return Outcome.SKIPPED_NO_ANGLE

    try:
        img = load_image(input_file)
    except DecodeError as e:
        logger.error("%s", e)
        return Outcome.FAILED_DECODE

    logger.debug("  Loaded image: %sx%s pixels", img.shape[1], img.shape[0])

    try:
        rotated = rotate_image(img, angle)
    except TransformError as e:
        logger.error("%s", e)
        return Outcome.FAILED_TRANSFORM

    try:
        save_image(output_file, rotated, output_config)
    except EncodeError as e:
        logger.error("%s", e)
        return Outcome.FAILED_ENCODE

    logger.info("Image rotated successfully and saved to %s", output_file)
    return Outcome.SUCCEEDED
