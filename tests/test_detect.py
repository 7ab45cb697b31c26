"""Tests for line extraction and skew angle estimation."""

import logging
import math

import numpy as np
import pytest

from image_rotator import detect
from image_rotator.detect import (
    AngleEstimate,
    calculate_reference_angle,
    detect_file_angle,
    determine_rotation_angle,
    estimate_angle,
    extract_lines,
)


class TestEstimateAngle:

    def test_no_lines_is_exactly_zero(self):
        estimate = estimate_angle([])
        assert estimate == AngleEstimate(degrees=0.0, count=0)

    def test_single_diagonal_segment(self):
        estimate = estimate_angle([(0, 0, 10, 10)])
        assert estimate.count == 1
        assert estimate.degrees == pytest.approx(45.0)

    def test_plain_mean_of_segment_angles(self):
        # 0 and 90 degrees average to 45
        estimate = estimate_angle([(0, 0, 10, 0), (0, 0, 0, 10)])
        assert estimate.count == 2
        assert estimate.degrees == pytest.approx(45.0)

    def test_mean_does_not_wrap_around_180(self):
        # Nearly opposite segments just either side of 180 degrees average to 0
        lines = [(0, 0, -10, 1), (0, 0, -10, -1)]
        estimate = estimate_angle(lines)
        assert estimate.degrees == pytest.approx(0.0, abs=1e-9)

    def test_accepts_any_iterable(self):
        lines = iter([(0, 0, 100, 5), (0, 0, 100, 5)])
        estimate = estimate_angle(lines)
        assert estimate.count == 2
        assert estimate.degrees == pytest.approx(math.degrees(math.atan2(5, 100)))


class TestExtractLines:

    def test_blank_image_has_no_lines(self, blank_image):
        assert extract_lines(blank_image) == []

    def test_finds_segments_on_ruled_lines(self, skewed_image):
        lines = extract_lines(skewed_image)
        assert len(lines) > 0
        for line in lines:
            assert len(line) == 4
            assert all(isinstance(v, int) for v in line)

    def test_accepts_grayscale(self, skewed_image):
        gray = skewed_image[:, :, 0].copy()
        assert len(extract_lines(gray)) > 0


def test_determine_rotation_angle_on_skewed_image(skewed_image):
    estimate = determine_rotation_angle(skewed_image)
    assert estimate.count > 0
    assert 3.0 < estimate.degrees < 6.0


def test_determine_rotation_angle_on_blank_image(blank_image):
    assert determine_rotation_angle(blank_image) == AngleEstimate(0.0, 0)


class TestCalculateReferenceAngle:

    def test_readable_image(self, tmp_path, write_image, skewed_image):
        path = write_image(tmp_path / "ref.png", skewed_image)
        estimate = calculate_reference_angle(path)
        assert estimate is not None
        assert estimate.count > 0

    def test_image_without_lines_still_succeeds(self, tmp_path, write_image, blank_image):
        path = write_image(tmp_path / "ref.png", blank_image)
        assert calculate_reference_angle(path) == AngleEstimate(0.0, 0)

    def test_missing_image_returns_none(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger="rotimage")
        missing = tmp_path / "missing.png"
        assert calculate_reference_angle(missing) is None
        assert "Could not open or find the reference image" in caplog.text

    def test_logs_detected_angle(self, tmp_path, write_image, skewed_image, caplog):
        caplog.set_level(logging.DEBUG, logger="rotimage")
        path = write_image(tmp_path / "ref.png", skewed_image)
        calculate_reference_angle(path)
        assert "Rotation angle determined from reference image" in caplog.text


SEGMENTS = [[0, 0, 10, 10], [0, 0, 10, 0]]


@pytest.mark.parametrize(
    "hough_output",
    [
        np.array(SEGMENTS, dtype=np.int32).reshape(-1, 1, 4),
        np.array(SEGMENTS, dtype=np.int32),
    ],
    ids=["opencv4-layout", "opencv5-layout"],
)
class TestHoughOutputLayouts:

    def test_extract_lines(self, monkeypatch, skewed_image, hough_output):
        monkeypatch.setattr(detect.cv2, "HoughLinesP", lambda *args, **kwargs: hough_output)
        assert extract_lines(skewed_image) == [(0, 0, 10, 10), (0, 0, 10, 0)]

    def test_estimate_angle_on_raw_array(self, hough_output):
        estimate = estimate_angle(hough_output)
        assert estimate.count == 2
        assert estimate.degrees == pytest.approx(22.5)


class TestDetectFileAngle:

    def test_unreadable_file_is_named_as_image(self, tmp_path, caplog):
        caplog.set_level(logging.DEBUG, logger="rotimage")
        missing = tmp_path / "missing.png"

        assert detect_file_angle(missing) is None
        assert "Could not open or find the image" in caplog.text
        assert "reference image" not in caplog.text

    def test_logs_detected_angle(self, tmp_path, write_image, skewed_image, caplog):
        caplog.set_level(logging.DEBUG, logger="rotimage")
        path = write_image(tmp_path / "scan.png", skewed_image)

        estimate = detect_file_angle(path)
        assert estimate is not None and estimate.count > 0
        assert "Rotation angle determined from image" in caplog.text
