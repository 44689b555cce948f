"""Helpers for zip entries: little-endian writers, time conversions,
POSIX permission flags and glob-to-regex translation."""

from __future__ import annotations

import enum
from datetime import datetime, timedelta
from typing import BinaryIO, Iterable, Optional

POSIX_USER_READ = 0o400
POSIX_USER_WRITE = 0o200
POSIX_USER_EXECUTE = 0o100
POSIX_GROUP_READ = 0o040
POSIX_GROUP_WRITE = 0o020
POSIX_GROUP_EXECUTE = 0o010
POSIX_OTHER_READ = 0o004
POSIX_OTHER_WRITE = 0o002
POSIX_OTHER_EXECUTE = 0o001

# Offset of 1601-01-01 from the Unix epoch, in microseconds (negative).
WINDOWS_EPOCH_IN_MICROSECONDS = 0xFFD6A169B779C000 - (1 << 64)

_REGEX_META_CHARS = ".^$+{[]|()"
_GLOB_META_CHARS = "\\*?[{"
_EOL = "\0"
# Characters that need escaping inside a character class.
_CLASS_SPECIAL = "\\[]&|~^"

_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1


class PosixFilePermission(enum.Enum):
    """POSIX permission bits, each valued by its mode flag."""

    OWNER_READ = POSIX_USER_READ
    OWNER_WRITE = POSIX_USER_WRITE
    OWNER_EXECUTE = POSIX_USER_EXECUTE
    GROUP_READ = POSIX_GROUP_READ
    GROUP_WRITE = POSIX_GROUP_WRITE
    GROUP_EXECUTE = POSIX_GROUP_EXECUTE
    OTHERS_READ = POSIX_OTHER_READ
    OTHERS_WRITE = POSIX_OTHER_WRITE
    OTHERS_EXECUTE = POSIX_OTHER_EXECUTE


class PatternSyntaxError(ValueError):
    """Raised when a glob pattern is malformed."""

    def __init__(self, description: str, pattern: str, index: int) -> None:
        self.description = description
        self.pattern = pattern
        self.index = index
        super().__init__(f"{description} near index {index}\n{pattern}")


def perm_to_flag(perm) -> int:
    """Return the mode flag for one permission, 0 for anything else."""
    if isinstance(perm, PosixFilePermission):
        return perm.value
    return 0


def perms_to_flags(perms: Optional[Iterable[PosixFilePermission]]) -> int:
    """Combine permissions into a mode; None gives -1."""
    if perms is None:
        return -1
    flags = 0
    for perm in perms:
        flags |= perm_to_flag(perm)
    return flags


def write_short(os: BinaryIO, v: int) -> None:
    """Write the low 16 bits of v, little-endian."""
    os.write((v & 0xFFFF).to_bytes(2, "little"))


def write_int(os: BinaryIO, v: int) -> None:
    """Write the low 32 bits of v, little-endian."""
    os.write((v & 0xFFFFFFFF).to_bytes(4, "little"))


def write_long(os: BinaryIO, v: int) -> None:
    """Write the low 64 bits of v, little-endian."""
    os.write((v & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "little"))


def write_bytes(os: BinaryIO, b: bytes) -> None:
    """Write a byte string as is."""
    os.write(b)


def to_directory_path(dir_path: bytes) -> bytes:
    """Append a trailing '/' to a non-empty path that lacks one."""
    if dir_path and not dir_path.endswith(b"/"):
        return dir_path + b"/"
    return dir_path


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _saturating_mul(v: int, factor: int) -> int:
    return max(_LONG_MIN, min(_LONG_MAX, v * factor))


def _wrap_long(v: int) -> int:
    v &= 0xFFFFFFFFFFFFFFFF
    return v - (1 << 64) if v >= (1 << 63) else v


def _local_millis(dt: datetime) -> int:
    return int(round(dt.timestamp())) * 1000


def _overflow_dos_to_java_time(year: int, month: int, day: int,
                               hour: int, minute: int, second: int) -> int:
    # Out-of-range fields roll over into the next larger unit.
    y = year + (month - 1) // 12
    m = (month - 1) % 12 + 1
    dt = datetime(y, m, 1) + timedelta(days=day - 1, hours=hour,
                                       minutes=minute, seconds=second)
    return _local_millis(dt)


def dos_to_java_time(dtime: int) -> int:
    """Convert an MS-DOS date/time to epoch milliseconds in local time."""
    year = ((dtime >> 25) & 0x7F) + 1980
    month = (dtime >> 21) & 0x0F
    day = (dtime >> 16) & 0x1F
    hour = (dtime >> 11) & 0x1F
    minute = (dtime >> 5) & 0x3F
    second = (dtime << 1) & 0x3E
    if 0 < month < 13 and day > 0 and hour < 24 and minute < 60 and second < 60:
        try:
            return _local_millis(datetime(year, month, day, hour, minute, second))
        except ValueError:
            pass
    return _overflow_dos_to_java_time(year, month, day, hour, minute, second)


def java_to_dos_time(time: int) -> int:
    """Convert epoch milliseconds to an MS-DOS date/time in local time."""
    seconds, _ = divmod(time, 1000)
    ldt = datetime.fromtimestamp(seconds)
    year = ldt.year - 1980
    if year < 0:
        return (1 << 21) | (1 << 16)
    value = ((year << 25) | (ldt.month << 21) | (ldt.day << 16)
             | (ldt.hour << 11) | (ldt.minute << 5) | (ldt.second >> 1))
    return value & 0xFFFFFFFF


def win_to_java_time(wtime: int) -> int:
    """Convert a Windows FILETIME (100 ns since 1601) to epoch milliseconds."""
    return _trunc_div(_trunc_div(wtime, 10) + WINDOWS_EPOCH_IN_MICROSECONDS, 1000)


def java_to_win_time(time: int) -> int:
    """Convert epoch milliseconds to a Windows FILETIME."""
    micros = _saturating_mul(time, 1000)
    return _wrap_long(_wrap_long(micros - WINDOWS_EPOCH_IN_MICROSECONDS) * 10)


def unix_to_java_time(utime: int) -> int:
    """Convert Unix seconds to milliseconds."""
    return _saturating_mul(utime, 1000)


def java_to_unix_time(time: int) -> int:
    """Convert milliseconds to Unix seconds, truncating toward zero."""
    return _trunc_div(time, 1000)


def _is_regex_meta(c: str) -> bool:
    return c in _REGEX_META_CHARS


def _is_glob_meta(c: str) -> bool:
    return c in _GLOB_META_CHARS


def _next(glob: str, i: int) -> str:
    return glob[i] if i < len(glob) else _EOL


def _class_char(c: str) -> str:
    return "\\" + c if c in _CLASS_SPECIAL else c


def _emit_class(body: list[str], negated: bool) -> str:
    if not body:
        return "[^/]" if negated else "(?!)"
    return "(?!/)[" + ("^" if negated else "") + "".join(body) + "]"


def _parse_class(glob: str, i: int) -> tuple[str, int]:
    """Translate a bracket expression starting just after '['."""
    body: list[str] = []
    negated = False
    if _next(glob, i) == "^":
        body.append("\\^")
        i += 1
    else:
        if _next(glob, i) == "!":
            negated = True
            i += 1
        if _next(glob, i) == "-":
            body.append("\\-")
            i += 1
    has_range_start = False
    last = "\0"
    c = "["
    while i < len(glob):
        c = glob[i]
        i += 1
        if c == "]":
            break
        if c == "/":
            raise PatternSyntaxError("Explicit 'name separator' in class", glob, i - 1)
        if c == "-":
            if not has_range_start:
                raise PatternSyntaxError("Invalid range", glob, i - 1)
            c = _next(glob, i)
            i += 1
            if c == _EOL or c == "]":
                body.append("\\-")
                break
            if c < last:
                raise PatternSyntaxError("Invalid range", glob, i - 3)
            body.append("-" + _class_char(c))
            has_range_start = False
        else:
            body.append(_class_char(c))
            has_range_start = True
            last = c
    if c != "]":
        raise PatternSyntaxError("Missing ']", glob, i - 1)
    return _emit_class(body, negated), i


def to_regex_pattern(glob_pattern: str) -> str:
    """Translate a glob into an anchored regular expression for the re module."""
    in_group = False
    regex = ["^"]
    i = 0
    while i < len(glob_pattern):
        c = glob_pattern[i]
        i += 1
        if c == "\\":
            if i == len(glob_pattern):
                raise PatternSyntaxError("No character to escape", glob_pattern, i - 1)
            nxt = glob_pattern[i]
            i += 1
            if _is_glob_meta(nxt) or _is_regex_meta(nxt):
                regex.append("\\")
            regex.append(nxt)
        elif c == "/":
            regex.append(c)
        elif c == "[":
            part, i = _parse_class(glob_pattern, i)
            regex.append(part)
        elif c == "{":
            if in_group:
                raise PatternSyntaxError("Cannot nest groups", glob_pattern, i - 1)
            regex.append("(?:(?:")
            in_group = True
        elif c == "}":
            if in_group:
                regex.append("))")
                in_group = False
            else:
                regex.append("}")
        elif c == ",":
            regex.append(")|(?:" if in_group else ",")
        elif c == "*":
            if _next(glob_pattern, i) == "*":
                regex.append(".*")
                i += 1
            else:
                regex.append("[^/]*")
        elif c == "?":
            regex.append("[^/]")
        else:
            if _is_regex_meta(c):
                regex.append("\\")
            regex.append(c)
    if in_group:
        raise PatternSyntaxError("Missing '}", glob_pattern, i - 1)
    regex.append("$")
    return "".join(regex)