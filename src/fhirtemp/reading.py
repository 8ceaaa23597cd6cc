"""
Input resolution for a single body-temperature reading.

The reading comes from the first command-line argument or, when that is
absent, from one line of standard input after a prompt. Parsing is permissive
by default: like C's `atof`, the longest numeric prefix wins and text without
one reads as 0.0. `strict=True` rejects anything `float()` rejects.
"""

import logging
import math
import re
import sys
import typing

import click

from fhirtemp.errors import InputError, ValidationError

logger = logging.getLogger(__name__)

PROMPT = "Enter body temperature (e.g. 36.5): "

# sign, then either inf/infinity/nan or a decimal with optional exponent
_NUMERIC_PREFIX = re.compile(
    r"""
    [+-]?
    (?:
        inf(?:inity)?
      | nan
      | (?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?
    )
    """,
    re.IGNORECASE | re.VERBOSE | re.ASCII,
)


def parse_temperature(text: str, strict: bool = False) -> float:
    """
    Turn user text into a float.

    Permissive mode never fails: "37.5abc" gives 37.5, "abc" gives 0.0 and
    "1e" gives 1.0 (the dangling exponent is ignored). Only ASCII digits count.

    Strict mode requires the whole text, less surrounding whitespace, to be one
    such literal, so "3_7" and non-ASCII digits are rejected.
    """
    if strict:
        if not _NUMERIC_PREFIX.fullmatch(text.strip()):
            raise ValidationError(f"Not a number: {text!r}")
        return float(text)

    match = _NUMERIC_PREFIX.match(text.lstrip())
    if not match:
        logger.debug(f"No numeric prefix in {text!r}, reading as 0.0")
        return 0.0
    return float(match.group(0))


def resolve_temperature(
    argument: typing.Optional[str],
    strict: bool = False,
    stream: typing.Optional[typing.IO] = None,
) -> float:
    """
    Produce one finite temperature value.

    Prompts on stdout and reads `stream` (stdin by default) only when no
    argument was given. Bytes that are not UTF-8 are replaced rather than
    rejected, so they read like any other non-numeric text.
    """
    if argument is None:
        click.echo(PROMPT, nl=False)
        line = _read_line(stream or sys.stdin)
        if not line:
            raise InputError("No input")
        argument = line

    value = parse_temperature(argument, strict=strict)
    if not math.isfinite(value):
        raise ValidationError("Invalid temperature value.")

    logger.info(f"Resolved temperature {value!r} from {argument.strip()!r}")
    return value


def _read_line(stream: typing.IO) -> str:
    # prefer the binary layer of a text stream so decoding never raises
    raw = getattr(stream, "buffer", stream)
    line = raw.readline()
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line
