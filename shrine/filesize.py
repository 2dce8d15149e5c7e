"""Human readable file sizes.

Sizes use the binary JEDEC unit system, i.e. 1.0 KB = 1024 bytes.

Example:
    >>> pretty_filesize(5 * 1024 * 1024)
    '5.0 MB'
"""

from __future__ import annotations

FILESIZE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")

_MAX_EXPONENT = len(FILESIZE_UNITS) - 1


def filesize_exponent(size: int) -> int:
    """Return ``floor(log_1024(size))`` clamped to the largest unit index.

    Computed from the bit length of the integer size, without floating point.
    """
    if size < 1:
        return 0
    return min((int(size).bit_length() - 1) // 10, _MAX_EXPONENT)


def pretty_filesize(size: int) -> str:
    """Format a byte count with one decimal digit and a binary unit.

    Sizes beyond the largest unit stay in YB with a mantissa above 1024.

    Args:
        size: Number of bytes, must not be negative.

    Returns:
        Formatted size, e.g. ``"1.0 KB"`` or ``"1023.0 MB"``.

    Raises:
        ValueError: If size is negative.
    """
    if size < 0:
        raise ValueError(f"File size cannot be negative: {size}")
    if size == 0:
        return "0.0 B"

    exponent = filesize_exponent(size)
    return "%.1f %s" % (size / 1024**exponent, FILESIZE_UNITS[exponent])
