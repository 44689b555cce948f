"""Relations between two normalized zip entry paths held as bytes.

These operate on paths already normalized by ``pathbytes``: no
backslashes, no repeated separators, no trailing separator except for
the root ``/``.
"""

from __future__ import annotations

from .pathbytes import name_at, name_offsets, normalize_bytes

_SLASH = ord("/")


def _is_absolute(path: bytes) -> bool:
    return bool(path) and path[0] == _SLASH


def join_bytes(base: bytes, other: bytes) -> bytes:
    """Resolve ``other`` against ``base``.

    An empty ``other`` gives ``base``; an absolute ``other`` or an empty
    ``base`` gives ``other``; otherwise the two are joined with ``/``.
    """
    if not other:
        return base
    if _is_absolute(other) or not base:
        return other
    if base[-1] == _SLASH:
        return base + other
    return base + b"/" + other


def relativize_bytes(base: bytes, other: bytes) -> bytes:
    """Build the relative path that leads from ``base`` to ``other``.

    Raises ValueError when exactly one of the two paths is absolute.
    """
    if other == base:
        return b""
    if not base:
        return other
    if _is_absolute(base) != _is_absolute(other):
        raise ValueError("cannot relativize between absolute and relative paths")
    if base == b"/":
        return other[1:]
    base_offsets = name_offsets(base)
    other_offsets = name_offsets(other)
    limit = min(len(base_offsets), len(other_offsets))
    common = 0
    while (common < limit
           and name_at(base, base_offsets, common) == name_at(other, other_offsets, common)):
        common += 1
    parts = [b".."] * (len(base_offsets) - common)
    if common < len(other_offsets):
        parts.append(other[other_offsets[common]:])
    return normalize_bytes(b"/".join(parts))


def starts_with_bytes(path: bytes, prefix: bytes) -> bool:
    """Tell whether ``path`` begins with the name elements of ``prefix``."""
    if _is_absolute(prefix) != _is_absolute(path) or len(prefix) > len(path):
        return False
    if not prefix:
        return not path
    if not path.startswith(prefix):
        return False
    last = len(prefix) - 1
    return (len(prefix) == len(path)
            or prefix[last] == _SLASH
            or path[last + 1] == _SLASH)


def ends_with_bytes(path: bytes, suffix: bytes) -> bool:
    """Tell whether ``path`` ends with the name elements of ``suffix``."""
    olast = len(suffix) - 1
    if olast > 0 and suffix[olast] == _SLASH:
        olast -= 1
    last = len(path) - 1
    if last > 0 and path[last] == _SLASH:
        last -= 1
    if olast == -1:
        return last == -1
    if (_is_absolute(suffix) and (not _is_absolute(path) or olast != last)) or last < olast:
        return False
    while olast >= 0:
        if suffix[olast] != path[last]:
            return False
        olast -= 1
        last -= 1
    return suffix[0] == _SLASH or last == -1 or path[last] == _SLASH


def compare_bytes(a: bytes, b: bytes) -> int:
    """Compare two paths byte by byte as unsigned values.

    Returns the difference of the first differing bytes, or of the
    lengths when one path is a prefix of the other.
    """
    for c1, c2 in zip(a, b):
        if c1 != c2:
            return c1 - c2
    return len(a) - len(b)