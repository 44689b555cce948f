# zipfspath

Helpers for the paths and header metadata found inside zip archives.

## Modules

- `zipfspath.path`: `ZipPath`, an immutable path to a zip entry. It is
  stored as normalized bytes, with `/` as the separator, and carries an
  encoding name that defaults to `utf-8`. Its methods are `root`, `file_name`,
  `parent`, `name_count`, `name`, `subpath`, `is_absolute`,
  `to_absolute_path`, `normalize`, `resolved_path`, `resolve`,
  `resolve_sibling`, `relativize`, `starts_with`, `ends_with` and
  `compare_to`. It can be iterated over its name elements, and it supports
  `str()`, `bytes()`, equality, hashing and `<` ordering. Ordering compares
  the bytes as unsigned values.
- `zipfspath.pathbytes`: the byte-level operations that `ZipPath` uses:
  - `normalize_bytes` and `normalize_text` turn backslashes into `/`,
    collapse repeated separators and drop a trailing one. A NUL raises
    `InvalidPathError`.
  - `name_offsets` and `name_at` find the name elements of a path.
  - `resolve_dots` removes `.` elements and folds `..` elements.
  - `decode_uri` decodes `%XX` escapes as UTF-8.
- `zipfspath.pathrel`: relations between two normalized byte paths:
  `join_bytes`, `relativize_bytes`, `starts_with_bytes`, `ends_with_bytes`
  and `compare_bytes`.
- `zipfspath.utils`: general helpers:
  - Little-endian writers to a binary stream: `write_short`, `write_int`,
    `write_long` and `write_bytes`.
  - `to_directory_path`, which adds a trailing `/` to a path that lacks one.
  - Time conversions: `dos_to_java_time` and `java_to_dos_time` (MS-DOS
    date/time, in local time), `win_to_java_time` and `java_to_win_time`
    (Windows FILETIME), and `unix_to_java_time` and `java_to_unix_time`.
  - POSIX permission flags: the `PosixFilePermission` enum, `perm_to_flag`
    and `perms_to_flags`.
  - `to_regex_pattern`, which turns a glob into an anchored regular
    expression for the `re` module. A malformed glob raises
    `PatternSyntaxError`.
- `zipfspath.extra`: `format_extra` renders the blocks of a zip extra field
  as text. It decodes ZIP64 (0x0001), PKWare NTFS (0x000a) and Info-ZIP
  extended timestamp (0x5455) blocks, and shows any other tag as raw bytes.
  `print_extra` writes the same text to a stream, standard output by
  default.

All "java" times are milliseconds since the Unix epoch.

## Installation

```
pip install .
```

## Example

```python
from zipfspath.path import ZipPath
from zipfspath.utils import to_regex_pattern

p = ZipPath("/a/./b/../c/")
print(p)                       # /a/./b/../c
print(p.normalize())           # /a/c
print(p.parent())              # /a/./b/..
print([str(n) for n in p])     # ['a', '.', 'b', '..', 'c']

print(to_regex_pattern("*.{txt,md}"))   # ^[^/]*\.(?:(?:txt)|(?:md))$
```

## What it does not do

The package does not open, read or write zip archives. It has no file
system of archive entries: there are no streams, directory listings,
attributes or copy and move operations on entries. `ZipPath` is purely a
value for path arithmetic. The package has no command-line tool.
`format_extra` works on bytes that you have already taken from a header.

## Running the tests

```
pip install .[test]
pytest
```