"""
Pytest configuration and shared fixtures for image rotator tests.

Test images are drawn with OpenCV so line detection has something to find.
"""

import logging
from pathlib import Path
from typing import Callable

import cv2
import numpy as np
import pytest

from image_rotator.logging_utils import SCRIPT_NAME


@pytest.fixture(autouse=True)
def reset_script_logger():
    """Drop handlers installed by CLI runs so later tests start clean."""
    yield
    logger = logging.getLogger(SCRIPT_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def skewed_image() -> np.ndarray:
    """White page with three parallel dark lines tilted by about 4.6 degrees."""
    image = np.ones((400, 600, 3), dtype=np.uint8) * 255

    for y in (100, 200, 300):
        cv2.line(image, (50, y), (550, y + 40), (0, 0, 0), 2)

    return image


@pytest.fixture
def blank_image() -> np.ndarray:
    """Plain white image with no edges at all."""
    return np.ones((200, 300, 3), dtype=np.uint8) * 255


@pytest.fixture
def write_image() -> Callable[[Path, np.ndarray], Path]:
    """Write an image to disk, creating parent directories."""

    def _write(path: Path, image: np.ndarray) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        assert cv2.imwrite(str(path), image)
        return path

    return _write


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "output"
    path.mkdir()
    return path
