"""File utilities: numbered copies, block XOR, 32-bit word counting and substring search."""

from __future__ import annotations

import operator
import re
import shutil
import struct
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from functools import reduce
from pathlib import Path

UINT32_MAX = 0xFFFFFFFF
MAX_MASK_LENGTH = 8
MIN_XOR_N = 2
MAX_XOR_N = 6

_HEX_RE = re.compile(r"\s*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]+)")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", "\\": "\\"}
_WORD = struct.Struct("=I")


class FileOpsError(ValueError):
    """Base class for errors in the file utilities."""


class InvalidInputError(FileOpsError):
    """An argument is out of range or malformed."""


class NumberError(FileOpsError):
    """A numeric suffix holds characters other than digits."""


def check_n(text: str) -> str:
    """Return the part of ``text`` after its four-letter keyword.

    Raise NumberError unless that part consists only of decimal digits.
    """
    suffix = text[4:]
    if not all(ch in "0123456789" for ch in suffix):
        raise NumberError(f"not a number: {suffix!r}")
    return suffix


def parse_hex_uint32(text: str) -> int:
    """Parse a hexadecimal number (optional sign and 0x prefix) into a 32-bit value."""
    if text == "":
        return 0
    match = _HEX_RE.fullmatch(text)
    if match is None:
        raise InvalidInputError(f"not a hexadecimal number: {text!r}")
    sign, digits = match.groups()
    value = int(digits, 16)
    if value > UINT32_MAX or (sign == "-" and value):
        raise InvalidInputError(f"does not fit in 32 bits: {text!r}")
    return value


def copy_n(file_name: str | Path, copies: int) -> list[Path]:
    """Make ``copies`` copies named ``<file>_<i>.txt`` and return their paths."""
    if copies <= 0:
        raise InvalidInputError(f"number of copies must be positive: {copies}")
    source = Path(file_name)
    with source.open("rb"):
        pass
    targets = [Path(f"{file_name}_{i}.txt") for i in range(1, copies + 1)]
    with ThreadPoolExecutor() as pool:
        list(pool.map(lambda target: shutil.copyfile(source, target), targets))
    return targets


def _blocks(data: bytes, n: int) -> Iterator[int]:
    """Split the bit stream of ``data`` (low bit first) into blocks of 2**n bits."""
    if n == 2:
        for byte in data:
            yield byte & 0x0F
            yield byte >> 4
        return
    step = 1 << (n - 3)
    bits = 8 * step
    for start in range(0, len(data), step):
        chunk = data[start:start + step]
        yield int.from_bytes(chunk, "little") << (bits - 8 * len(chunk))


def xor_blocks(file_name: str | Path, n: int) -> int:
    """XOR together all 2**n-bit blocks of the file; a short last block is padded with zeros below."""
    if not MIN_XOR_N <= n <= MAX_XOR_N:
        raise InvalidInputError(f"N must be between {MIN_XOR_N} and {MAX_XOR_N}: {n}")
    data = Path(file_name).read_bytes()
    return reduce(operator.xor, _blocks(data, n), 0)


def count_mask(file_name: str | Path, mask: str) -> int:
    """Count the 32-bit words of the file that equal the hexadecimal ``mask``."""
    with open(file_name, "rb") as fh:
        if len(mask) > MAX_MASK_LENGTH:
            raise InvalidInputError(f"mask too long: {mask!r}")
        target = parse_hex_uint32(mask)
        data = fh.read()
    whole = len(data) - len(data) % _WORD.size
    return sum(1 for (word,) in _WORD.iter_unpack(data[:whole]) if word == target)


def unescape_pattern(pattern: str) -> str:
    """Resolve the escapes \\n, \\t, \\r, \\0 and \\\\; other escaped characters stand for themselves."""
    result: list[str] = []
    chars = iter(pattern)
    for ch in chars:
        if ch != "\\":
            result.append(ch)
            continue
        escaped = next(chars, None)
        if escaped is None:
            break
        result.append(_ESCAPES.get(escaped, escaped))
    return "".join(result)


def _contains(file_name: str | Path, needle: bytes) -> bool:
    if not needle:
        return False
    try:
        data = Path(file_name).read_bytes()
    except OSError:
        return False
    return needle in data.replace(b"\r", b"")


def find_string(files: Iterable[str | Path], pattern: str) -> list[bool]:
    """Report for each file whether it holds the pattern, ignoring carriage returns.

    Files that cannot be read count as not holding it.
    """
    needle = unescape_pattern(pattern).encode("utf-8", "surrogateescape")
    paths = list(files)
    if not paths:
        return []
    with ThreadPoolExecutor() as pool:
        return list(pool.map(lambda path: _contains(path, needle), paths))