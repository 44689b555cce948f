"""Byte-level operations on zip entry paths.

Paths are byte strings whose name separator is ``/``.  A normalized
path has no backslashes, no repeated separators and no trailing
separator unless the path is the root ``/`` itself.
"""

from __future__ import annotations

import codecs
from typing import Optional, Sequence

_SLASH = ord("/")
_BACKSLASH = ord("\\")
_NUL = 0
_DOT = ord(".")
_HEX_DIGITS = "0123456789abcdefABCDEF"


class InvalidPathError(ValueError):
    """Raised when a path string cannot be turned into a path."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


def _is_utf8(encoding: str) -> bool:
    return codecs.lookup(encoding).name == "utf-8"


def _normalize_bytes_from(path: bytes, off: int) -> bytes:
    to = bytearray(path[:off])
    prev = 0
    for c in path[off:]:
        if c == _BACKSLASH:
            c = _SLASH
        if c == _SLASH and prev == _SLASH:
            continue
        if c == _NUL:
            raise InvalidPathError(path.decode("utf-8", errors="replace"),
                                   "Path: nul character not allowed")
        to.append(c)
        prev = c
    if len(to) > 1 and to[-1] == _SLASH:
        del to[-1]
    return bytes(to)


def normalize_bytes(path: bytes) -> bytes:
    """Normalize a byte path; raises InvalidPathError on a NUL byte."""
    if not path:
        return path
    prev = 0
    for i, c in enumerate(path):
        if c == _BACKSLASH or c == _NUL:
            return _normalize_bytes_from(path, i)
        if c == _SLASH and prev == _SLASH:
            return _normalize_bytes_from(path, i - 1)
        prev = c
    if len(path) > 1 and prev == _SLASH:
        return path[:-1]
    return path


def _normalize_text_from(path: str, off: int) -> str:
    to = [path[:off]]
    prev = "\0"
    for c in path[off:]:
        if c == "\\":
            c = "/"
        if c == "/" and prev == "/":
            continue
        if c == "\0":
            raise InvalidPathError(path, "Path: nul character not allowed")
        to.append(c)
        prev = c
    result = "".join(to)
    if len(result) > 1 and prev == "/":
        result = result[:-1]
    return result


def normalize_text(path: str, encoding: str = "utf-8") -> bytes:
    """Normalize a textual path and encode it with ``encoding``."""
    if _is_utf8(encoding):
        return normalize_bytes(path.encode("utf-8"))
    if not path:
        return b""
    prev = "\0"
    for i, c in enumerate(path):
        if c == "\\" or c == "\0":
            return _normalize_text_from(path, i).encode(encoding)
        if c == "/" and prev == "/":
            return _normalize_text_from(path, i - 1).encode(encoding)
        prev = c
    if len(path) > 1 and prev == "/":
        path = path[:-1]
    return path.encode(encoding)


def name_offsets(path: bytes) -> tuple[int, ...]:
    """Return the start offset of each name element in a normalized path.

    The empty path has a single (empty) name starting at 0.
    """
    if not path:
        return (0,)
    offsets = []
    index = 0
    length = len(path)
    while index < length:
        if path[index] == _SLASH:
            index += 1
            continue
        offsets.append(index)
        index += 1
        while index < length and path[index] != _SLASH:
            index += 1
    return tuple(offsets)


def name_at(path: bytes, offsets: Sequence[int], index: int) -> bytes:
    """Return the name element ``index`` of ``path``; raises ValueError if out of range."""
    if index < 0 or index >= len(offsets):
        raise ValueError(f"name index {index} out of range")
    begin = offsets[index]
    if index == len(offsets) - 1:
        return path[begin:]
    return path[begin:offsets[index + 1] - 1]


def _has_dot_name(path: bytes) -> bool:
    length = len(path)
    for i, c in enumerate(path):
        if c == _DOT and (i + 1 == length or path[i + 1] == _SLASH):
            return True
    return False


def resolve_dots(path: bytes) -> bytes:
    """Remove ``.`` elements and fold ``..`` elements where possible.

    A path with nothing to resolve is returned unchanged.
    """
    if not _has_dot_name(path):
        return path
    offsets = name_offsets(path)
    absolute = path[0] == _SLASH
    to = bytearray()
    last_m: list[int] = []
    for i in range(len(offsets)):
        name = name_at(path, offsets, i)
        if name == b".":
            if not to and absolute:
                to.append(_SLASH)
            continue
        if name == b"..":
            if last_m:
                del to[last_m.pop():]
                continue
            if absolute:
                if not to:
                    to.append(_SLASH)
            else:
                if to and to[-1] != _SLASH:
                    to.append(_SLASH)
                to += name
            continue
        if (not to and absolute) or (to and to[-1] != _SLASH):
            to.append(_SLASH)
        last_m.append(len(to))
        to += name
    if len(to) > 1 and to[-1] == _SLASH:
        del to[-1]
    return bytes(to)


def _hex_value(c: str) -> int:
    if len(c) != 1 or c not in _HEX_DIGITS:
        raise ValueError(f"invalid hex digit {c!r} in escape")
    return int(c, 16)


def decode_uri(s: Optional[str]) -> Optional[str]:
    """Decode ``%XX`` escapes as UTF-8, leaving text inside ``[...]`` untouched."""
    if s is None or not s or "%" not in s:
        return s
    n = len(s)
    out: list[str] = []
    between_brackets = False
    i = 0
    while i < n:
        c = s[i]
        if c == "[":
            between_brackets = True
        elif between_brackets and c == "]":
            between_brackets = False
        if c != "%" or between_brackets:
            out.append(c)
            i += 1
            continue
        buf = bytearray()
        while c == "%":
            if i + 2 >= n:
                raise ValueError(f"incomplete escape at index {i} in {s!r}")
            buf.append((_hex_value(s[i + 1]) << 4) | _hex_value(s[i + 2]))
            i += 3
            if i >= n:
                break
            c = s[i]
        out.append(buf.decode("utf-8", errors="replace"))
    return "".join(out)