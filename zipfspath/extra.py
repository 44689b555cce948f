"""Human-readable dump of zip "extra field" blocks.

Each block in an extra field starts with a two-byte tag and a two-byte
size, both little-endian.  ZIP64 (0x0001), PKWare NTFS (0x000a) and
Info-ZIP extended timestamp (0x5455) blocks are decoded further; any other
tag is shown as raw bytes.
"""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from typing import Optional, TextIO

from .utils import unix_to_java_time, win_to_java_time

EXTID_ZIP64 = 0x0001
EXTID_NTFS = 0x000A
EXTID_EXTT = 0x5455

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _read(buf: bytes, pos: int, size: int) -> int:
    if pos < 0 or pos + size > len(buf):
        raise IndexError(f"read of {size} bytes at {pos} is outside the buffer")
    return int.from_bytes(buf[pos:pos + size], "little")


def _u8(buf: bytes, pos: int) -> int:
    return _read(buf, pos, 1)


def _u16(buf: bytes, pos: int) -> int:
    return _read(buf, pos, 2)


def _u32(buf: bytes, pos: int) -> int:
    return _read(buf, pos, 4)


def _u64(buf: bytes, pos: int) -> int:
    return _read(buf, pos, 8)


def _s64(buf: bytes, pos: int) -> int:
    v = _u64(buf, pos)
    return v - (1 << 64) if v >= (1 << 63) else v


def _format_time(millis: int) -> str:
    """Render epoch milliseconds as 'Tue Jan 02 03:04:05 UTC 2001' in local time."""
    try:
        dt = _EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        return str(millis)
    try:
        local = dt.astimezone()
    except (OverflowError, OSError, ValueError):
        local = dt
    return local.strftime("%a %b %d %H:%M:%S %Z %Y")


def format_extra(extra: bytes, off: int, length: int) -> str:
    """Describe the extra-field blocks in extra[off:off+length].

    Raises IndexError when a block claims data that lies outside ``extra``.
    """
    out: list[str] = []
    end = off + length
    while off + 4 <= end:
        tag = _u16(extra, off)
        sz = _u16(extra, off + 2)
        out.append(f"        [tag=0x{tag:04x}, sz={sz}, data= ")
        if off + sz > end:
            out.append("    Error: Invalid extra data, beyond extra length")
            break
        off += 4
        out.extend(f"{_u8(extra, off + i):02x} " for i in range(sz))
        out.append("]\n")
        if tag == EXTID_ZIP64:
            out.append("         ->ZIP64: ")
            pos = off
            while pos + 8 <= off + sz:
                out.append(f" *0x{_u64(extra, pos):x} ")
                pos += 8
            out.append("\n")
        elif tag == EXTID_NTFS:
            out.append("         ->PKWare NTFS\n")
            if _u16(extra, off + 4) != 1 or _u16(extra, off + 6) != 24:
                out.append("    Error: Invalid NTFS sub-tag or subsz")
            for label, pos in (("mtime", off + 8), ("atime", off + 16), ("ctime", off + 24)):
                stamp = _format_time(win_to_java_time(_s64(extra, pos)))
                out.append(f"            {label}:{stamp}\n")
        elif tag == EXTID_EXTT:
            out.append(f"         ->Info-ZIP Extended Timestamp: flag={_u8(extra, off):x}\n")
            pos = off + 1
            while pos + 4 <= off + sz:
                stamp = _format_time(unix_to_java_time(_u32(extra, pos)))
                out.append(f"            *{stamp}\n")
                pos += 4
        else:
            out.append(f"         ->[tag={tag:x}, size={sz}]\n")
        off += sz
    return "".join(out)


def print_extra(extra: bytes, off: int, length: int, out: Optional[TextIO] = None) -> None:
    """Write the description of an extra field to ``out`` (standard output by default)."""
    stream = sys.stdout if out is None else out
    stream.write(format_extra(extra, off, length))