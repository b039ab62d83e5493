"""Exception types raised by pure-otp."""


class OtpError(Exception):
    """Base class for all pure-otp errors."""
    pass


class FormatError(OtpError, ValueError):
    """Input text is not valid Base32 or not a well-formed secret."""
    pass


class RangeError(OtpError, ValueError):
    """A numeric parameter is outside the supported range."""
    pass


class InvariantError(OtpError, RuntimeError):
    """An internal consistency check failed. Indicates a bug, not bad input."""
    pass


class ConfigError(OtpError, ValueError):
    """The configuration file could not be read or parsed."""
    pass
