"""Image file recognition, decoding and encoding via OpenCV."""

from pathlib import Path

import cv2
import numpy as np

from .exceptions import DecodeError, EncodeError

# Matched case-sensitively against the exact file suffix
IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".bmp", ".tif", ".tiff")


def is_image_file(path) -> bool:
    """Check if a file is an image based on its extension."""
    return Path(path).suffix in IMAGE_EXTENSIONS


def load_image(path) -> np.ndarray:
    """Read a colour image, raising DecodeError if it cannot be read."""
    img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    if img is None or img.size == 0:
        raise DecodeError("Could not open or find the image", image_path=str(path))
    return img


def encode_params(path, output_config=None):
    """Build cv2.imwrite parameters for the output format of ``path``."""
    if not output_config:
        return []

    suffix = Path(path).suffix.lower()
    if suffix in (".jpg", ".jpeg") and output_config.get("jpeg_quality") is not None:
        return [cv2.IMWRITE_JPEG_QUALITY, output_config["jpeg_quality"]]
    if suffix == ".png" and output_config.get("png_compression") is not None:
        return [cv2.IMWRITE_PNG_COMPRESSION, output_config["png_compression"]]
    return []


def save_image(path, img: np.ndarray, output_config=None) -> None:
    """Write an image, raising EncodeError if OpenCV refuses or fails."""
    params = encode_params(path, output_config)
    try:
        written = cv2.imwrite(str(path), img, params)
    except cv2.error as e:
        raise EncodeError(
            "Failed to write the image", image_path=str(path), reason=str(e).strip()
        )
    if not written:
        raise EncodeError("Failed to write the image", image_path=str(path))
