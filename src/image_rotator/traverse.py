"""
Walk a directory of images and rotate each one.

The angle for each image either comes from the reference image (shared by
the whole run) or is detected from the image itself. A detected angle
stays in effect for the following images of the same directory, so an
image whose detection fails falls back to the last angle that worked.
"""

from dataclasses import dataclass, replace
from pathlib import Path
import os

from .codec import is_image_file
from .detect import detect_file_angle
from .logging_utils import get_script_logger
from .processor import process_single_image

logger = get_script_logger()


@dataclass(frozen=True)
class TraversalState:
    """Angle currently in effect and whether a reference image fixed it."""

    angle: float
    use_reference: bool = False


def list_directory(input_dir):
    """
    List directory entries sorted by name.

    Errors opening or reading the directory are logged as warnings and
    end the listing early instead of raising.
    """
    try:
        iterator = os.scandir(input_dir)
    except OSError as e:
        logger.warning("Warning: Error accessing %s: %s", input_dir, e.strerror or e)
        return []

    entries = []
    with iterator:
        while True:
            try:
                entry = next(iterator)
            except StopIteration:
                break
            except OSError as e:
                logger.warning("Warning: Error accessing %s: %s", input_dir, e.strerror or e)
                break
            entries.append(entry)

    entries.sort(key=lambda entry: entry.name)
    return entries


def is_directory_entry(entry):
    try:
        return entry.is_dir()
    except OSError as e:
        logger.warning("Warning: Error accessing %s: %s", entry.path, e.strerror or e)
        return False


def process_image_entry(image_path, output_dir, state, output_config=None):
    """
    Rotate one image of a directory walk.

    Without a reference image the angle is detected from this file first;
    a successful detection replaces the angle in the returned state.

    Returns:
        Tuple of (Outcome, TraversalState)
    """
    if not state.use_reference:
        estimate = detect_file_angle(image_path)
        if estimate is not None:
            state = replace(state, angle=estimate.degrees)

    # Outputs all land directly in output_dir, whatever the input depth
    output_file = Path(output_dir) / Path(image_path).name
    outcome = process_single_image(image_path, output_file, state.angle, output_config)
    return outcome, state


def process_directory(input_dir, output_dir, state, recursive=False, output_config=None):
    """
    Process all images in a directory, recursively as an option.

    Stops at the first image that is not rotated and saved, including
    images in subdirectories. Angles detected inside a subdirectory are
    not carried back to the rest of this directory.

    Args:
        input_dir: The input directory path
        output_dir: The output directory path
        state: TraversalState with the angle to start from
        recursive: Whether to descend into subdirectories
        output_config: Optional [output] config section with encoder settings

    Returns:
        True if every image was processed, False on the first failure
    """
    for entry in list_directory(input_dir):
        path = Path(entry.path)

        if is_image_file(path):
            outcome, state = process_image_entry(path, output_dir, state, output_config)
            if not outcome.ok:
                logger.error("Failed to process image: %s (%s)", path, outcome.value)
                return False
            logger.info("Processed %s", path)

        if recursive and is_directory_entry(entry):
            logger.debug("Entering directory %s", path)
            if not process_directory(path, output_dir, state, True, output_config):
                return False

    return True
