"""Command-line interface for pure-otp."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence, TextIO

from pure_otp import base32
from pure_otp.config import OtpConfig, Settings, load_config
from pure_otp.errors import ConfigError, FormatError, InvariantError, RangeError
from pure_otp.hotp import hotp
from pure_otp.totp import time_factor, totp


log = logging.getLogger(__name__)

SECRET_LENGTH = 16

EXIT_OK = 0
EXIT_FORMAT = 1
EXIT_RANGE = 2
EXIT_CONFIG = 3
EXIT_INVARIANT = 4


def read_secret(value: Optional[str], stdin: TextIO) -> bytes:
    """
    Read and decode the Base32 secret given on the command line or stdin.

    Args:
        value: The SECRET argument; None or "-" reads the first line of stdin.
        stdin: Stream to read from when no argument was given.

    Returns:
        The raw 10-byte secret.

    Raises:
        FormatError: If the secret is not exactly 16 Base32 characters.
    """
    if value is None or value == "-":
        value = stdin.readline()
    secret = value.strip()

    if len(secret) != SECRET_LENGTH:
        raise FormatError(
            f"Secret must be {SECRET_LENGTH} Base32 characters, got {len(secret)}"
        )
    bad = sorted(set(secret) - set(base32.ALPHABET))
    if bad:
        raise FormatError(f"Secret contains characters outside A-Z2-7: {''.join(bad)}")

    return base32.decode(secret)


def _override(value, fallback):
    return fallback if value is None else value


def _settings(args: argparse.Namespace) -> Settings:
    """Merge command-line options over the configuration file."""
    settings = load_config(args.config)
    otp = settings.otp
    return Settings(
        otp=OtpConfig(
            digits=_override(args.digits, otp.digits),
            start_time=_override(getattr(args, "start_time", None), otp.start_time),
            step=_override(getattr(args, "step", None), otp.step),
        ),
        window=_override(getattr(args, "window", None), settings.window),
    )


def totp_command(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> int:
    """Handle the totp command."""
    settings = _settings(args)
    key = read_secret(args.secret, stdin or sys.stdin)
    now = args.time if args.time is not None else time.time()
    otp = settings.otp

    for i in range(settings.window):
        factor = time_factor(now + otp.step * i, otp.start_time, otp.step)
        print(totp(key, factor, otp.digits))
    return EXIT_OK


def hotp_command(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> int:
    """Handle the hotp command."""
    settings = _settings(args)
    key = read_secret(args.secret, stdin or sys.stdin)
    print(hotp(key, args.counter, settings.otp.digits))
    return EXIT_OK


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "secret",
        nargs="?",
        default=None,
        help="Base32 secret (16 characters); omit or use '-' to read stdin",
    )
    parser.add_argument(
        "--digits",
        "-d",
        type=int,
        default=None,
        help="Number of digits in the code (default: 6)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file (default: per-user config.json)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="HOTP/TOTP one-time password generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # TOTP command
    totp_parser = subparsers.add_parser(
        "totp",
        aliases=["time"],
        help="Generate time-based codes",
    )
    _add_common_arguments(totp_parser)
    totp_parser.add_argument(
        "--step",
        "-s",
        type=int,
        default=None,
        help="Time step in seconds (default: 30)",
    )
    totp_parser.add_argument(
        "--start-time",
        type=int,
        default=None,
        help="Unix time at which steps start (default: 0)",
    )
    totp_parser.add_argument(
        "--window",
        "-w",
        type=int,
        default=None,
        help="Number of consecutive codes to print (default: 1)",
    )
    totp_parser.add_argument(
        "--time",
        "-t",
        type=float,
        default=None,
        help="Unix time to generate for (default: now)",
    )

    # HOTP command
    hotp_parser = subparsers.add_parser(
        "hotp",
        aliases=["counter"],
        help="Generate a counter-based code",
    )
    _add_common_arguments(hotp_parser)
    hotp_parser.add_argument(
        "--counter",
        "-c",
        type=int,
        required=True,
        help="Counter value",
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    if not args.command:
        parser.print_help()
        return EXIT_FORMAT

    try:
        if args.command in ("totp", "time"):
            return totp_command(args)
        return hotp_command(args)
    except FormatError as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_FORMAT
    except RangeError as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_RANGE
    except ConfigError as e:
        print(f"✗ {e}", file=sys.stderr)
        return EXIT_CONFIG
    except InvariantError as e:
        log.exception("Internal error")
        print(f"✗ Internal error: {e}", file=sys.stderr)
        return EXIT_INVARIANT


if __name__ == "__main__":
    sys.exit(main())
