"""Rotate an image about its centre onto a canvas that fits all corners."""

from dataclasses import dataclass
from typing import Tuple

import cv2
import numpy as np

from .exceptions import TransformError


@dataclass(frozen=True)
class RotationSpec:
    """Affine parameters for rotating one image by ``angle`` degrees."""

    angle: float
    center: Tuple[float, float]
    output_size: Tuple[int, int]
    matrix: np.ndarray


def bounding_box_size(width, height, angle):
    """Width and height of the axis-aligned box around a rotated w x h rectangle."""
    corners = cv2.boxPoints(((0.0, 0.0), (float(width), float(height)), float(angle)))
    bbox_w = float(corners[:, 0].max() - corners[:, 0].min())
    bbox_h = float(corners[:, 1].max() - corners[:, 1].min())
    return bbox_w, bbox_h


def rotation_spec(width, height, angle):
    """
    Build the rotation matrix and output canvas for a width x height image.

    The matrix rotates about the image centre at scale 1.0 and is then
    shifted so the rotated content is centred on the enlarged canvas.
    """
    center = (width / 2.0, height / 2.0)
    matrix = cv2.getRotationMatrix2D(center, angle, 1.0)

    bbox_w, bbox_h = bounding_box_size(width, height, angle)
    matrix[0, 2] += bbox_w / 2.0 - width / 2.0
    matrix[1, 2] += bbox_h / 2.0 - height / 2.0

    output_size = (int(round(bbox_w)), int(round(bbox_h)))
    return RotationSpec(angle=angle, center=center, output_size=output_size, matrix=matrix)


def rotate_image(img_array, angle):
    """
    Rotate an image by a given angle in degrees (counter-clockwise).

    Raises TransformError when the warp cannot produce an image.
    """
    h, w = img_array.shape[:2]
    if w == 0 or h == 0:
        raise TransformError("Cannot rotate an empty image", width=w, height=h)

    spec = rotation_spec(w, h, angle)
    if spec.output_size[0] <= 0 or spec.output_size[1] <= 0:
        raise TransformError("Degenerate output size", output_size=spec.output_size)

    try:
        rotated = cv2.warpAffine(img_array, spec.matrix, spec.output_size)
    except cv2.error as e:
        raise TransformError("Error rotating the image", reason=str(e).strip())

    if rotated is None or rotated.size == 0:
        raise TransformError("Error rotating the image", angle=angle)
    return rotated
