"""
Image Rotation CLI Tool

Batch-rotate scanned images to correct skew:
- rotate by an explicit angle (--angle)
- rotate every image by the skew detected on a reference image (--reference)
- detect the skew of each image from its own line content

Usage:
    rotimage -i input_dir -o output_dir [--recursive] [--verbose]
    rotimage -i scan.png -o fixed.png --angle 2.5

Or directly:
    python -m image_rotator -i input_dir -o output_dir
"""

__version__ = "0.1.0"
__author__ = "Clive Holloway"
__description__ = "Batch image rotation with automatic skew detection"
