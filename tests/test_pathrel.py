from functools import cmp_to_key
from itertools import combinations

import pytest

from zipfspath.pathbytes import resolve_dots
from zipfspath.pathrel import (
    compare_bytes,
    ends_with_bytes,
    join_bytes,
    relativize_bytes,
    starts_with_bytes,
)


def test_join_absolute_other_wins():
    assert join_bytes(b"a/b", b"/x/y") == b"/x/y"


def test_join_empty_base_gives_other():
    assert join_bytes(b"", b"x/y") == b"x/y"


def test_join_empty_other_gives_base():
    assert join_bytes(b"/a/b", b"") == b"/a/b"


def test_join_inserts_separator():
    assert join_bytes(b"a", b"b") == b"a/b"


def test_join_onto_root_has_no_double_separator():
    result = join_bytes(b"/", b"b")
    assert result.startswith(b"/")
    assert b"//" not in result
    assert result.endswith(b"b")


def test_relativize_equal_paths_is_empty():
    assert relativize_bytes(b"/a/b", b"/a/b") == b""


def test_relativize_from_empty_base_gives_other():
    assert relativize_bytes(b"", b"x/y") == b"x/y"


def test_relativize_from_root_drops_leading_slash():
    other = b"/a/b"
    assert relativize_bytes(b"/", other) == other[1:]


def test_relativize_worked_example():
    assert relativize_bytes(b"/a/b", b"/a/c/d") == b"../c/d"


def test_relativize_mixed_absolute_raises():
    with pytest.raises(ValueError):
        relativize_bytes(b"/a", b"a")
    with pytest.raises(ValueError):
        relativize_bytes(b"a", b"/a")


@pytest.mark.parametrize(
    "base, other",
    [
        (b"/a/b", b"/a/c/d"),
        (b"/a/b/c", b"/a"),
        (b"/a", b"/a/b"),
        (b"a/b", b"a/b/c"),
        (b"a", b"b"),
        (b"x/y/z", b"p/q"),
    ],
)
def test_relativize_then_join_round_trip(base, other):
    rel = relativize_bytes(base, other)
    assert not rel.startswith(b"/")
    assert resolve_dots(join_bytes(base, rel)) == other


def test_relativize_descendant_has_no_dotdot():
    base, other = b"a", b"a/b/c"
    rel = relativize_bytes(base, other)
    assert b".." not in rel
    assert join_bytes(base, rel) == other


@pytest.mark.parametrize(
    "path, prefix, expected",
    [
        (b"/a/b", b"/a", True),
        (b"/a/b", b"/", True),
        (b"a/b", b"a/b", True),
        (b"/a/bc", b"/a/b", False),
        (b"a/b", b"/a", False),
        (b"/a", b"/a/b", False),
        (b"", b"", True),
    ],
)
def test_starts_with(path, prefix, expected):
    assert starts_with_bytes(path, prefix) is expected


@pytest.mark.parametrize(
    "path, suffix, expected",
    [
        (b"/a/b", b"b", True),
        (b"/a/b", b"a/b", True),
        (b"/a/b", b"/a/b", True),
        (b"/a/cb", b"b", False),
        (b"a/b", b"/a/b", False),
        (b"/a/b", b"/b", False),
        (b"", b"", True),
        (b"a", b"", False),
    ],
)
def test_ends_with(path, suffix, expected):
    assert ends_with_bytes(path, suffix) is expected


@pytest.mark.parametrize("path", [b"", b"/", b"a", b"/a/b/c", b"x/y"])
def test_path_starts_and_ends_with_itself(path):
    assert starts_with_bytes(path, path)
    assert ends_with_bytes(path, path)


def test_compare_is_zero_for_equal():
    assert compare_bytes(b"/a/b", b"/a/b") == 0


@pytest.mark.parametrize(
    "a, b",
    [(b"a", b"b"), (b"/a", b"/a/b"), (b"abc", b"abd"), (b"", b"x")],
)
def test_compare_is_antisymmetric(a, b):
    assert compare_bytes(a, b) < 0
    assert compare_bytes(b, a) > 0
    assert compare_bytes(a, b) == -compare_bytes(b, a)


def test_compare_treats_bytes_as_unsigned():
    assert compare_bytes(b"\xff", b"a") > 0


def test_compare_orders_like_sorted_bytes():
    items = [b"b", b"/a", b"a/b", b"a", b"\xe4", b""]
    expected = sorted(items)
    for earlier, later in combinations(expected, 2):
        assert compare_bytes(earlier, later) < 0
        assert compare_bytes(later, earlier) > 0
    assert sorted(items, key=cmp_to_key(compare_bytes)) == expected