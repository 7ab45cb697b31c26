import click
from pathlib import Path
import sys

from .config import load_config
from .detect import calculate_reference_angle, detect_file_angle
from .exceptions import ConfigurationError
from .logging_utils import SCRIPT_NAME, add_file_logging, setup_script_logging
from .processor import process_single_image
from .traverse import TraversalState, process_directory


@click.command()
@click.option(
    "-i", "--input", "input_path", required=True, type=click.Path(path_type=Path),
    help="Input image file path or input directory path.",
)
@click.option(
    "-o", "--output", "output_path", required=True, type=click.Path(path_type=Path),
    help="Output image file path or output directory path.",
)
@click.option(
    "-a", "--angle", type=float, default=0.0, show_default=True,
    help="Rotation angle in degrees.",
)
@click.option(
    "-r", "--recursive", is_flag=True,
    help="Recursively process all image files in subdirectories.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output.")
@click.option(
    "-d", "--detect", is_flag=True,
    help="Automatically detect and correct the rotation angle of the image.",
)
@click.option(
    "-ref", "--reference", type=click.Path(),
    help="Reference image; its rotation angle is used for all other images.",
)
@click.option("--config", type=click.Path(path_type=Path), help="Path to a TOML config file")
def main(input_path, output_path, angle, recursive, verbose, detect, reference, config):
    """Rotate an image, or a directory of images, to correct skew."""

    try:
        config_data = load_config(config)
    except ConfigurationError as e:
        click.echo(f"✗ Failed to load configuration: {e}", err=True)
        sys.exit(1)

    logger = setup_script_logging(SCRIPT_NAME, config_data, verbose)

    logger.debug("Input: %s", input_path)
    logger.debug("Output: %s", output_path)
    logger.debug("Log target: %s", config_data["debug"]["log_target"])

    # An empty --reference counts as no reference at all
    use_reference = bool(reference)

    # The reference angle, when readable, replaces --angle for the whole run
    if use_reference:
        estimate = calculate_reference_angle(reference)
        if estimate is not None:
            angle = estimate.degrees

    if input_path.is_dir():
        if not output_path.exists():
            try:
                output_path.mkdir(parents=True)
            except OSError as e:
                logger.error("Failed to create output directory: %s (%s)", output_path, e)
                sys.exit(1)
            logger.debug("Created output directory: %s", output_path)

        if config_data["debug"]["log_target"] == "file":
            try:
                add_file_logging(logger, output_path, verbose)
            except OSError as e:
                logger.error("Failed to open log file in %s (%s)", output_path, e)
                sys.exit(1)

        state = TraversalState(angle=angle, use_reference=use_reference)
        ok = process_directory(
            input_path, output_path, state, recursive, config_data["output"]
        )
    else:
        # Without a reference, a 0.0 angle means "detect it from the input"
        if angle == 0.0 and not use_reference:
            estimate = detect_file_angle(input_path)
            if estimate is None:
                sys.exit(1)
            angle = estimate.degrees

        outcome = process_single_image(input_path, output_path, angle, config_data["output"])
        ok = outcome.ok

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
