"""Paths to entries inside a zip archive.

A ``ZipPath`` holds a normalized byte path with ``/`` as the name
separator, together with the name of the character encoding that is
used to turn text into bytes and back.
"""

from __future__ import annotations

import codecs
from typing import Iterator, Optional, Union

from .pathbytes import name_at, name_offsets, normalize_bytes, normalize_text, resolve_dots
from .pathrel import compare_bytes, ends_with_bytes, join_bytes, relativize_bytes, starts_with_bytes

_SLASH = ord("/")

PathLike = Union["ZipPath", str]


class ZipPath:
    """An immutable, normalized path to an entry of a zip archive."""

    __slots__ = ("_path", "_encoding", "_offsets", "_resolved", "_hash")

    def __init__(self, path: Union[str, bytes] = "", encoding: str = "utf-8") -> None:
        codec = codecs.lookup(encoding).name
        if isinstance(path, (bytes, bytearray)):
            raw = bytes(path)
            if codec == "utf-8":
                normalized = normalize_bytes(raw)
            else:
                normalized = normalize_text(raw.decode(codec), codec)
        elif isinstance(path, str):
            normalized = normalize_text(path, codec)
        else:
            raise TypeError(f"path must be str or bytes, not {type(path).__name__}")
        self._setup(normalized, codec)

    def _setup(self, raw: bytes, codec: str) -> None:
        self._path = raw
        self._encoding = codec
        self._offsets: Optional[tuple[int, ...]] = None
        self._resolved: Optional[bytes] = None
        self._hash: Optional[int] = None

    @classmethod
    def _of(cls, raw: bytes, codec: str) -> "ZipPath":
        """Wrap bytes that are already normalized."""
        obj = cls.__new__(cls)
        obj._setup(raw, codec)
        return obj

    def _new(self, raw: bytes) -> "ZipPath":
        return ZipPath._of(raw, self._encoding)

    @property
    def encoding(self) -> str:
        """The canonical name of the encoding used for entry names."""
        return self._encoding

    def __bytes__(self) -> bytes:
        return self._path

    def __repr__(self) -> str:
        return f"ZipPath({str(self)!r}, encoding={self._encoding!r})"

    def _names(self) -> tuple[int, ...]:
        if self._offsets is None:
            self._offsets = name_offsets(self._path)
        return self._offsets

    @staticmethod
    def _check(other: object) -> "ZipPath":
        if other is None:
            raise TypeError("path must not be None")
        if not isinstance(other, ZipPath):
            raise TypeError(f"expected a ZipPath, got {type(other).__name__}")
        return other

    def _coerce(self, other: object) -> Optional["ZipPath"]:
        if other is None:
            raise TypeError("other must not be None")
        if isinstance(other, str):
            return ZipPath(other, self._encoding)
        if isinstance(other, ZipPath):
            return other
        return None

    def is_absolute(self) -> bool:
        """Tell whether the path starts at the archive root."""
        return bool(self._path) and self._path[0] == _SLASH

    def root(self) -> Optional["ZipPath"]:
        """The root ``/`` for an absolute path, None for a relative one."""
        return self._new(b"/") if self.is_absolute() else None

    def _last_slash(self) -> Optional[int]:
        """Index of the last separator, or None for the empty path and the root."""
        path = self._path
        if not path or path == b"/":
            return None
        return path.rfind(b"/")

    def file_name(self) -> Optional["ZipPath"]:
        """The last name element, or None for the empty path and the root."""
        off = self._last_slash()
        if off is None:
            return None
        if off < 0:
            return self
        return self._new(self._path[off + 1:])

    def parent(self) -> Optional["ZipPath"]:
        """The path without its last name element, or None if there is none."""
        off = self._last_slash()
        if off is None:
            return None
        if off <= 0:
            return self.root()
        return self._new(self._path[:off])

    def name_count(self) -> int:
        """The number of name elements; the empty path has one."""
        return len(self._names())

    def name(self, index: int) -> "ZipPath":
        """Name element ``index``; raises ValueError when out of range."""
        return ZipPath(name_at(self._path, self._names(), index), self._encoding)

    def subpath(self, begin_index: int, end_index: int) -> "ZipPath":
        """The relative path of name elements ``begin_index`` to ``end_index - 1``."""
        offsets = self._names()
        count = len(offsets)
        if begin_index < 0 or begin_index >= count or end_index > count or begin_index >= end_index:
            raise ValueError(f"invalid subpath range [{begin_index}, {end_index})")
        begin = offsets[begin_index]
        if end_index == count:
            part = self._path[begin:]
        else:
            part = self._path[begin:offsets[end_index] - 1]
        return ZipPath(part, self._encoding)

    def to_absolute_path(self) -> "ZipPath":
        """This path if absolute, otherwise the path placed under the root."""
        if self.is_absolute():
            return self
        return self._new(b"/" + self._path)

    def normalize(self) -> "ZipPath":
        """The path with ``.`` elements removed and ``..`` elements folded."""
        resolved = resolve_dots(self._path)
        if resolved is self._path or resolved == self._path:
            return self
        return self._new(resolved)

    def resolved_path(self) -> bytes:
        """The absolute, dot-free byte path this path names."""
        if self._resolved is None:
            if self.is_absolute():
                self._resolved = resolve_dots(self._path)
            else:
                self._resolved = self.to_absolute_path().resolved_path()
        return self._resolved

    def resolve(self, other: PathLike) -> "ZipPath":
        """Resolve ``other`` (a ZipPath or a string) against this path."""
        if isinstance(other, str):
            opath = normalize_text(other, self._encoding)
            if not opath:
                return self
            if opath[0] == _SLASH or not self._path:
                return self._new(opath)
            return self._new(join_bytes(self._path, opath))
        o = self._check(other)
        if not o._path:
            return self
        if o.is_absolute() or not self._path:
            return o
        return self._new(join_bytes(self._path, o._path))

    def resolve_sibling(self, other: PathLike) -> "ZipPath":
        """Resolve ``other`` against the parent of this path."""
        o = self._coerce(other)
        if o is None:
            o = self._check(other)
        parent = self.parent()
        return o if parent is None else parent.resolve(o)

    def relativize(self, other: "ZipPath") -> "ZipPath":
        """The relative path that leads from this path to ``other``.

        Raises ValueError when the encodings differ or exactly one of the
        two paths is absolute.
        """
        o = self._check(other)
        if o == self:
            return self._new(b"")
        if not self._path:
            return o
        if self._encoding != o._encoding:
            raise ValueError("cannot relativize paths of different encodings")
        return self._new(relativize_bytes(self._path, o._path))

    def starts_with(self, other: PathLike) -> bool:
        """Tell whether this path begins with the name elements of ``other``."""
        o = self._coerce(other)
        if o is None:
            return False
        return starts_with_bytes(self._path, o._path)

    def ends_with(self, other: PathLike) -> bool:
        """Tell whether this path ends with the name elements of ``other``."""
        o = self._coerce(other)
        if o is None:
            return False
        return ends_with_bytes(self._path, o._path)

    def compare_to(self, other: "ZipPath") -> int:
        """Compare the byte paths as unsigned values; negative, zero or positive."""
        return compare_bytes(self._path, self._check(other)._path)

    def __iter__(self) -> Iterator["ZipPath"]:
        for index in range(self.name_count()):
            yield self.name(index)

    def __str__(self) -> str:
        return self._path.decode(self._encoding, errors="replace")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ZipPath):
            return NotImplemented
        return self._encoding == other._encoding and self._path == other._path

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._path)
        return self._hash

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ZipPath):
            return NotImplemented
        return self.compare_to(other) < 0