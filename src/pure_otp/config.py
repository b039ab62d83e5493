"""Code-generation options and the optional user configuration file."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from pure_otp.bits import Number, require_finite
from pure_otp.errors import ConfigError, RangeError
from pure_otp.hotp import DEFAULT_DIGITS, validate_digits


log = logging.getLogger(__name__)

APP_NAME = "pure-otp"
APP_AUTHOR = "pure-otp"
CONFIG_FILENAME = "config.json"

DEFAULT_START_TIME = 0
DEFAULT_STEP = 30
DEFAULT_WINDOW = 1


@dataclass(frozen=True)
class OtpConfig:
    """
    Parameters shared by HOTP and TOTP generation.

    Attributes:
        digits: Length of each code, 6 to 10 (default: 6).
        start_time: Unix time at which step counting begins (default: 0).
        step: Length of one time step in seconds (default: 30).
    """

    digits: int = DEFAULT_DIGITS
    start_time: Number = DEFAULT_START_TIME
    step: Number = DEFAULT_STEP

    def __post_init__(self) -> None:
        validate_digits(self.digits)
        require_finite(self.start_time, "start_time")
        require_finite(self.step, "step")
        if self.step <= 0:
            raise RangeError(f"step must be positive, got {self.step}")


@dataclass(frozen=True)
class Settings:
    """User settings for the command-line driver."""

    otp: OtpConfig = field(default_factory=OtpConfig)
    window: int = DEFAULT_WINDOW

    def __post_init__(self) -> None:
        window = self.window
        if not isinstance(window, int) or isinstance(window, bool) or window < 1:
            raise RangeError(f"window must be a positive integer, got {window!r}")


def get_config_dir() -> Path:
    """
    Get the cross-platform directory holding the configuration file.

    Returns:
        Path to the configuration directory.
    """
    return Path(user_config_dir(APP_NAME, APP_AUTHOR))


def get_config_path() -> Path:
    """Get the default configuration file path."""
    return get_config_dir() / CONFIG_FILENAME


def _settings_from_dict(data: Dict[str, Any]) -> Settings:
    otp_fields = {}
    for name in ("digits", "start_time", "step"):
        if name in data:
            otp_fields[name] = data[name]

    unknown = sorted(set(data) - {"digits", "start_time", "step", "window"})
    if unknown:
        log.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

    return Settings(
        otp=OtpConfig(**otp_fields),
        window=data.get("window", DEFAULT_WINDOW),
    )


def load_config(path: Optional[Path] = None) -> Settings:
    """
    Load settings from a JSON configuration file.

    Args:
        path: File to read (default: the per-user config path).

    Returns:
        Settings built from the file, or the defaults if it does not exist.

    Raises:
        ConfigError: If the file cannot be read or is not a JSON object.
        RangeError: If a configured value is out of range.
    """
    config_path = Path(path) if path is not None else get_config_path()
    if not config_path.exists():
        log.debug("No configuration file at %s, using defaults", config_path)
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except OSError as e:
        raise ConfigError(
            f"Cannot read configuration file {config_path}: {e}"
        ) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid configuration file format: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Configuration file {config_path} must contain a JSON object"
        )

    log.debug("Loaded configuration from %s", config_path)
    return _settings_from_dict(data)
