"""RFC 6238 TOTP (Time-based One-Time Password) on top of HOTP."""

import logging
from typing import Optional, Union

from pure_otp.bits import BytesLike, Number, require_finite
from pure_otp.config import DEFAULT_START_TIME, DEFAULT_STEP, OtpConfig
from pure_otp.errors import RangeError
from pure_otp.hotp import DEFAULT_DIGITS, hotp


log = logging.getLogger(__name__)


def time_factor(
    now: Number,
    start_time: Number = DEFAULT_START_TIME,
    step: Number = DEFAULT_STEP,
) -> int:
    """
    Convert a Unix time into the number of whole steps since start_time.

    Args:
        now: Current Unix time in seconds, supplied by the caller.
        start_time: Unix time at which counting starts (default: 0).
        step: Step length in seconds (default: 30).

    Returns:
        floor((now - start_time) / step). Negative when now < start_time.

    Raises:
        RangeError: If an argument is not a finite number or step is not
            positive.
    """
    require_finite(now, "now")
    require_finite(start_time, "start_time")
    require_finite(step, "step")
    if step <= 0:
        raise RangeError(f"step must be positive, got {step}")
    # Floor division rounds toward negative infinity for ints and floats alike
    return int((now - start_time) // step)


def totp(
    key: Union[BytesLike, str], factor: int, digits: int = DEFAULT_DIGITS
) -> str:
    """Generate the TOTP code for an already computed time factor."""
    return hotp(key, factor, digits)


def totp_at(
    key: Union[BytesLike, str], now: Number, config: Optional[OtpConfig] = None
) -> str:
    """
    Generate the TOTP code valid at Unix time now.

    Args:
        key: Raw secret bytes.
        now: Unix time in seconds.
        config: Digits, start time and step (default: OtpConfig()).

    Returns:
        The zero-padded code string.
    """
    config = config or OtpConfig()
    factor = time_factor(now, config.start_time, config.step)
    log.debug("totp now=%s step=%s factor=%d", now, config.step, factor)
    return totp(key, factor, config.digits)
