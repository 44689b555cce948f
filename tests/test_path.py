import pytest

from zipfspath.path import ZipPath
from zipfspath.pathbytes import InvalidPathError

SAMPLES = ["/a/b/c", "a/b", "/", "", "x", "/x", "dir/sub/file.txt"]


@pytest.mark.parametrize("text", SAMPLES)
def test_str_round_trip(text):
    assert str(ZipPath(text)) == text


@pytest.mark.parametrize("text", SAMPLES)
def test_bytes_and_text_agree(text):
    assert ZipPath(text.encode("utf-8")) == ZipPath(text)


def test_construction_normalizes_separators():
    assert ZipPath("a//b\\c/") == ZipPath("a/b/c")


@pytest.mark.parametrize("raw", ["a//b", "x\\y\\", "/p//q/"])
def test_normalization_is_idempotent(raw):
    once = ZipPath(raw)
    assert ZipPath(str(once)) == once


def test_nul_is_rejected():
    with pytest.raises(InvalidPathError):
        ZipPath("a\0b")


def test_wrong_type_rejected():
    with pytest.raises(TypeError):
        ZipPath(42)


@pytest.mark.parametrize("text", ["/a/b/c", "a/b/c", "x/y", "/x/y"])
def test_parent_and_file_name_rebuild_path(text):
    p = ZipPath(text)
    assert p.parent().resolve(p.file_name()) == p


@pytest.mark.parametrize("text", ["", "/"])
def test_empty_and_root_have_no_parent_or_name(text):
    p = ZipPath(text)
    assert p.parent() is None
    assert p.file_name() is None


def test_single_relative_name():
    p = ZipPath("only")
    assert p.parent() is None
    assert p.file_name() is p
    assert p.root() is None


def test_single_absolute_name_parent_is_root():
    p = ZipPath("/top")
    assert p.parent() == ZipPath("/")
    assert p.parent() == p.root()


@pytest.mark.parametrize("text", ["/a/b/c", "a/b", "dir/sub/file.txt"])
def test_names_match_iteration(text):
    p = ZipPath(text)
    names = list(p)
    assert len(names) == p.name_count()
    assert "/".join(str(n) for n in names) == text.lstrip("/")


def test_empty_path_has_one_name():
    p = ZipPath("")
    assert p.name_count() == 1
    assert list(p) == [ZipPath("")]


def test_name_out_of_range():
    p = ZipPath("a/b")
    with pytest.raises(ValueError):
        p.name(2)
    with pytest.raises(ValueError):
        p.name(-1)


def test_full_subpath_is_relative_copy():
    p = ZipPath("/a/b/c")
    sub = p.subpath(0, p.name_count())
    assert sub == ZipPath(str(p).lstrip("/"))
    assert not sub.is_absolute()


def test_subpath_middle_matches_names():
    p = ZipPath("a/b/c/d")
    sub = p.subpath(1, 3)
    assert list(sub) == [p.name(1), p.name(2)]


@pytest.mark.parametrize("begin,end", [(-1, 1), (2, 2), (0, 4), (3, 4)])
def test_subpath_invalid_ranges(begin, end):
    with pytest.raises(ValueError):
        ZipPath("a/b/c").subpath(begin, end)


def test_to_absolute_path():
    rel = ZipPath("a/b")
    absolute = rel.to_absolute_path()
    assert absolute.is_absolute()
    assert absolute.subpath(0, absolute.name_count()) == rel
    assert absolute.to_absolute_path() is absolute


def test_normalize_folds_dots():
    assert ZipPath("a/./b/../c").normalize() == ZipPath("a/c")


@pytest.mark.parametrize("text", ["a/./b/../c", "/x/../y/./z", "../q", "./r"])
def test_normalize_idempotent_and_dot_free(text):
    once = ZipPath(text).normalize()
    assert once.normalize() == once
    assert ZipPath(".") not in list(once)


def test_normalize_without_dots_returns_self():
    p = ZipPath("a/b")
    assert p.normalize() is p


def test_resolved_path_is_absolute():
    assert ZipPath("a/../b").resolved_path() == b"/b"
    assert ZipPath("/a/b").resolved_path() == bytes(ZipPath("/a/b"))


def test_resolve_rules():
    base = ZipPath("a/b")
    other = ZipPath("/z")
    assert base.resolve(other) is other
    assert base.resolve(ZipPath("")) is base
    assert base.resolve("") is base
    assert ZipPath("").resolve(ZipPath("q")) == ZipPath("q")


def test_resolve_string_and_path_agree():
    base = ZipPath("/a")
    assert base.resolve("b/c") == base.resolve(ZipPath("b/c"))
    assert base.resolve("b/c").starts_with(base)


def test_resolve_rejects_other_types():
    with pytest.raises(TypeError):
        ZipPath("a").resolve(3)


def test_resolve_sibling():
    p = ZipPath("a/b")
    assert p.resolve_sibling("c") == p.parent().resolve("c")
    single = ZipPath("x")
    other = ZipPath("y")
    assert single.resolve_sibling(other) is other


@pytest.mark.parametrize("base,other", [
    ("a/b/c", "a/d"),
    ("/a/b", "/a/b/c/d"),
    ("/", "/x/y"),
    ("p/q", "r/s"),
])
def test_relativize_round_trip(base, other):
    b = ZipPath(base)
    o = ZipPath(other)
    assert b.resolve(b.relativize(o)).normalize() == o


def test_relativize_same_is_empty():
    p = ZipPath("/a/b")
    assert p.relativize(ZipPath("/a/b")) == ZipPath("")


def test_relativize_mixed_absolute_fails():
    with pytest.raises(ValueError):
        ZipPath("/a").relativize(ZipPath("b"))


def test_relativize_from_empty_gives_other():
    o = ZipPath("m/n")
    assert ZipPath("").relativize(o) is o


def test_starts_with():
    p = ZipPath("/a/b")
    assert p.starts_with("/a")
    assert p.starts_with(ZipPath("/a/b"))
    assert not p.starts_with("a")
    assert not ZipPath("a/bc").starts_with("a/b")
    assert not p.starts_with(42)


def test_ends_with():
    p = ZipPath("/a/b/c")
    assert p.ends_with("b/c")
    assert p.ends_with("/a/b/c")
    assert not p.ends_with("/b/c")
    assert not ZipPath("a/bc").ends_with("c")
    assert not p.ends_with(3.5)


def test_starts_with_none_raises():
    with pytest.raises(TypeError):
        ZipPath("a").starts_with(None)


def test_compare_to_is_antisymmetric():
    a = ZipPath("a/b")
    b = ZipPath("a/c")
    assert a.compare_to(b) < 0
    assert b.compare_to(a) > 0
    assert a.compare_to(ZipPath("a/b")) == 0


def test_sorting_uses_bytes():
    paths = [ZipPath(t) for t in ["b", "a/z", "a", "/c"]]
    ordered = sorted(paths)
    assert [bytes(p) for p in ordered] == sorted(bytes(p) for p in paths)


def test_compare_to_rejects_strings():
    with pytest.raises(TypeError):
        ZipPath("a").compare_to("a")


def test_equality_and_hash():
    a = ZipPath("x/y")
    b = ZipPath("x//y")
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert a != "x/y"


def test_encoding_is_part_of_identity():
    assert ZipPath("x", encoding="latin-1") != ZipPath("x")


def test_non_utf8_encoding_round_trip():
    text = "caf\u00e9/men\u00fc"
    p = ZipPath(text, encoding="latin-1")
    assert bytes(p) == text.encode("latin-1")
    assert str(p) == text
    assert p.file_name().encoding == p.encoding