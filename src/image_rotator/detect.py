"""
Skew angle estimation from straight line content.

Only works on images with close-to-horizontal lines (ruled tables, text
baselines, page edges). The estimate is the plain mean of the detected
segment angles.
"""

from dataclasses import dataclass
import math

import cv2
import numpy as np

from .codec import load_image
from .exceptions import DecodeError
from .logging_utils import get_script_logger

logger = get_script_logger()

# Edge and line detection parameters
BLUR_KERNEL = (5, 5)
CANNY_LOW = 50
CANNY_HIGH = 150
CANNY_APERTURE = 3
HOUGH_RHO = 1
HOUGH_THETA = np.pi / 180
HOUGH_THRESHOLD = 100
HOUGH_MIN_LINE_LENGTH = 50
HOUGH_MAX_LINE_GAP = 10


@dataclass(frozen=True)
class AngleEstimate:
    """Mean segment angle in degrees and the number of segments behind it."""

    degrees: float
    count: int


def extract_lines(img_array):
    """
    Detect straight line segments in an image.

    Returns a list of (x1, y1, x2, y2) tuples, empty when nothing is found.
    """
    if len(img_array.shape) == 3:
        gray = cv2.cvtColor(img_array, cv2.COLOR_BGR2GRAY)
    else:
        gray = img_array

    blurred = cv2.GaussianBlur(gray, BLUR_KERNEL, 0)
    edges = cv2.Canny(blurred, CANNY_LOW, CANNY_HIGH, apertureSize=CANNY_APERTURE)

    lines = cv2.HoughLinesP(
        edges,
        rho=HOUGH_RHO,
        theta=HOUGH_THETA,
        threshold=HOUGH_THRESHOLD,
        minLineLength=HOUGH_MIN_LINE_LENGTH,
        maxLineGap=HOUGH_MAX_LINE_GAP,
    )
    if lines is None:
        return []

    # OpenCV 4 returns (N, 1, 4), OpenCV 5 returns (N, 4)
    return [tuple(int(v) for v in line) for line in lines.reshape(-1, 4)]


def estimate_angle(lines):
    """
    Average the angles of line segments.

    Each segment contributes atan2(dy, dx); the mean is taken in radians
    and converted to degrees. No segments gives 0.0. A raw HoughLinesP
    array is accepted in either of its layouts.
    """
    if isinstance(lines, np.ndarray):
        lines = lines.reshape(-1, 4).tolist()

    total = 0.0
    count = 0
    for x1, y1, x2, y2 in lines:
        total += math.atan2(y2 - y1, x2 - x1)
        count += 1

    if count > 0:
        total /= count

    return AngleEstimate(degrees=total * (180.0 / math.pi), count=count)


def determine_rotation_angle(img_array):
    """Estimate the rotation angle of an already decoded image."""
    lines = extract_lines(img_array)
    estimate = estimate_angle(lines)
    logger.debug("  Found %s line segments, mean angle %.3f°", estimate.count, estimate.degrees)
    return estimate


def detect_file_angle(image_path, description="image"):
    """
    Load an image and estimate its rotation angle.

    Returns None when the image cannot be read. An image without any
    detectable lines still succeeds, with an angle of 0.0.
    ``description`` names the file in log messages.
    """
    try:
        img = load_image(image_path)
    except DecodeError:
        logger.error("Could not open or find the %s: %s", description, image_path)
        return None

    estimate = determine_rotation_angle(img)
    logger.info(
        "Rotation angle determined from %s: %s degrees", description, estimate.degrees
    )
    return estimate


def calculate_reference_angle(image_path):
    """Estimate the angle of the reference image shared by a whole run."""
    return detect_file_angle(image_path, "reference image")
