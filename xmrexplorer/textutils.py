"""Text, time and amount helpers used across the explorer."""

from __future__ import annotations

import os
import re
import time
from collections.abc import Iterable, Iterator, Sequence
from datetime import datetime, timezone
from typing import TypeVar

T = TypeVar("T")

ATOMIC_UNITS_PER_XMR = 1e12

SECONDS_PER_YEAR = 31536000
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

# Timestamp of the second block of the chain.
DEFAULT_TIME0 = 1397818193

# Timestamps below this are treated as unknown.
MIN_READABLE_TIMESTAMP = 1234567890

_TIME_BUFFER_LENGTH = 60

DEFAULT_BAD_CHARS = "[^a-zA-Z0-9+/=]"

_HEX_PREFIX = re.compile(r"\s*([0-9A-Fa-f]+)")

_METRIC_PREFIXES = ("k", "M", "G", "T")


def timestamp_difference(t1: int, t2: int) -> tuple[int, int, int, int, int]:
    """Split the absolute difference of two timestamps.

    Returns (years, days, hours, minutes, seconds), a year being 365 days.
    """
    diff = abs(t1 - t2)
    years, diff = divmod(diff, SECONDS_PER_YEAR)
    days, diff = divmod(diff, SECONDS_PER_DAY)
    hours, diff = divmod(diff, SECONDS_PER_HOUR)
    minutes, seconds = divmod(diff, SECONDS_PER_MINUTE)
    return years, days, hours, minutes, seconds


def url_decode(text: str) -> str:
    """Decode a form-encoded string: ``%XX`` escapes and ``+`` for space.

    Raises ValueError on a truncated or malformed escape.
    """
    out = bytearray()
    pos = 0
    length = len(text)
    while pos < length:
        char = text[pos]
        if char == "%":
            if pos + 3 > length:
                raise ValueError(f"truncated escape at position {pos} in {text!r}")
            match = _HEX_PREFIX.match(text[pos + 1:pos + 3])
            if match is None:
                raise ValueError(f"malformed escape at position {pos} in {text!r}")
            out.append(int(match.group(1), 16))
            pos += 3
            continue
        if char == "+":
            out += b" "
        else:
            out += char.encode("utf-8")
        pos += 1
    return out.decode("utf-8", errors="replace")


def parse_post_data(body: str) -> dict[str, str]:
    """Parse a form-encoded request body into a dict.

    Parsing stops at the first field without ``=``; a body that does not
    decode gives an empty dict.
    """
    try:
        decoded = url_decode(body)
    except ValueError:
        return {}
    fields: dict[str, str] = {}
    for part in decoded.split("&"):
        key, sep, value = part.partition("=")
        if not sep:
            break
        fields[key] = value
    return fields


def make_printable(text: str | bytes) -> str:
    """Replace non-printable characters with visible escapes."""
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    pieces: list[str] = []
    for byte in data:
        if 32 <= byte <= 126:
            pieces.append(chr(byte))
        elif byte <= 7:
            pieces.append(f"\\{byte:03o}")
        elif byte < 128:
            pieces.append(f"0x{byte:x}")
        else:
            # Bytes above 127 show as a sign-extended 32-bit value.
            pieces.append(f"0x{(byte - 256) & 0xFFFFFFFF:x}")
    return "".join(pieces)


def get_human_readable_timestamp(ts: int) -> str:
    """Format a timestamp as UTC ``YYYY-mm-dd II:MM:SS``; old ones are unknown."""
    if ts < MIN_READABLE_TIMESTAMP:
        return "<unknown>"
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %I:%M:%S")


def timestamp_to_str_gm(timestamp: int, fmt: str = "%F %T") -> str:
    """Format a timestamp in UTC with a strftime format.

    A result that does not fit the fixed 60-character buffer is empty.
    """
    portable = fmt.replace("%F", "%Y-%m-%d").replace("%T", "%H:%M:%S")
    result = time.strftime(portable, time.gmtime(timestamp))
    if len(result) >= _TIME_BUFFER_LENGTH:
        return ""
    return result


def timestamps_time_scale(
    timestamps: Iterable[int],
    time_n: int,
    resolution: int = 80,
    time0: int = DEFAULT_TIME0,
) -> tuple[str, float]:
    """Draw timestamps on a text time axis from ``time0`` to ``time_n``.

    Returns the axis, ``_`` with ``*`` at each timestamp, and the number of
    seconds one character stands for. Timestamps out of range are skipped.
    """
    if resolution <= 0:
        raise ValueError("resolution must be positive")
    interval = time_n - time0
    if interval <= 0:
        raise ValueError("time_n must be later than time0")
    axis = ["_"] * resolution
    scale = interval / resolution
    for timestamp in timestamps:
        if timestamp < time0 or timestamp > time_n:
            continue
        place = int((timestamp - time0) / interval * (resolution - 1))
        axis[min(place + 1, resolution - 1)] = "*"
    return "".join(axis), scale


def get_xmr(amount: int) -> float:
    """Convert atomic units to XMR."""
    return amount / ATOMIC_UNITS_PER_XMR


def xmr_amount_to_str(
    amount: int,
    fmt: str = "{:0.12f}",
    zero_to_question_mark: bool = True,
) -> str:
    """Format an amount of atomic units as XMR; zero becomes ``?`` by default."""
    if zero_to_question_mark and amount <= 0:
        return "?"
    return fmt.format(get_xmr(amount))


def remove_bad_chars(text: str, pattern: str | re.Pattern[str] = DEFAULT_BAD_CHARS) -> str:
    """Remove every part of ``text`` that matches ``pattern``."""
    return re.sub(pattern, "", text)


def chunks(seq: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    """Yield consecutive slices of ``seq`` of at most ``size`` items.

    An empty sequence yields one empty slice.
    """
    if size <= 0:
        raise ValueError("chunk size must be positive")
    start = 0
    while True:
        yield seq[start:start + size]
        start += size
        if start >= len(seq):
            break


def calc_median(values: Iterable[T]) -> T:
    """Return the upper median of the values without changing them."""
    data = sorted(values)  # type: ignore[type-var]
    if not data:
        raise ValueError("median of an empty collection")
    return data[len(data) // 2]


def read_file(filename: str | os.PathLike[str]) -> str:
    """Return the whole text of a file; raises FileNotFoundError if missing."""
    with open(filename, encoding="utf-8") as handle:
        return handle.read()


def get_metric_prefix(value: int) -> tuple[float, str]:
    """Scale a rate for display with a metric prefix.

    Returns (scaled value, prefix). Values below 1000, or too large for the
    ``T`` prefix, come back unscaled with an empty prefix.
    """
    if value < 1000:
        return float(value), ""
    scaled = value
    for prefix in _METRIC_PREFIXES:
        if scaled < 1000000:
            return scaled / 1000, prefix
        scaled //= 1000
    return float(value), ""


def make_difficulty(low: int, high: int) -> int:
    """Join the low and high 64-bit halves of a difficulty."""
    return (high << 64) + low