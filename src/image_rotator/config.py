from pathlib import Path
import copy
import sys

from .exceptions import ConfigurationError

# tomllib ships with Python 3.11+, tomli is the same parser for older versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

DEFAULT_CONFIG_PATH = Path("rotimage.toml")

DEFAULT_CONFIG = {
    "debug": {
        "log_target": "stdout",
        "use_rich": False,
    },
    "output": {
        "jpeg_quality": None,
        "png_compression": None,
    },
}

LOG_TARGETS = {"stdout", "file"}


def load_config(config_path=None):
    """
    Load configuration from a TOML file, filling in defaults.

    With no explicit path, ``rotimage.toml`` in the working directory is
    used when it exists; otherwise the defaults apply. An explicit path
    that does not exist is an error.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return config
        config_path = DEFAULT_CONFIG_PATH

    # Ensure it's a Path object
    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigurationError("Config file not found", {"path": config_path})
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Error loading config: {e}", {"path": config_path})

    for section, values in data.items():
        if section in config and isinstance(values, dict):
            config[section].update(values)

    validate_config(config)
    return config


def validate_config(config):
    """Check value types and ranges of a merged configuration."""
    log_target = config["debug"]["log_target"]
    if log_target not in LOG_TARGETS:
        raise ConfigurationError(
            "Invalid debug.log_target", {"value": log_target, "allowed": sorted(LOG_TARGETS)}
        )

    if not isinstance(config["debug"]["use_rich"], bool):
        raise ConfigurationError("debug.use_rich must be true or false")

    quality = config["output"]["jpeg_quality"]
    if quality is not None and not (isinstance(quality, int) and 0 <= quality <= 100):
        raise ConfigurationError("output.jpeg_quality must be an integer 0-100", {"value": quality})

    compression = config["output"]["png_compression"]
    if compression is not None and not (isinstance(compression, int) and 0 <= compression <= 9):
        raise ConfigurationError("output.png_compression must be an integer 0-9", {"value": compression})
