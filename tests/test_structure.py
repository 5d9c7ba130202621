import pytest

from bencodec.errors import BencodeTypeMismatch
from bencodec.structure import BencodeInt, BencodeString, BencodeList, BencodeDict, from_native


def test_canonical_bytes():
    assert BencodeInt(1).to_canonical_bytes() == b"i1e"
    assert BencodeInt(-999).to_canonical_bytes() == b"i-999e"
    assert BencodeString("foo").to_canonical_bytes() == b"3:foo"
    assert BencodeString("").to_canonical_bytes() == b"0:"
    assert from_native([1, 2, 3]).to_canonical_bytes() == b"li1ei2ei3ee"
    assert from_native({"bar": "baz"}).to_canonical_bytes() == b"d3:bar3:baze"


def test_string_stores_utf8_bytes():
    s = BencodeString("héllo")
    assert s.value == "héllo".encode()
    assert s.to_canonical_bytes() == b"6:h\xc3\xa9llo"
    assert s == BencodeString(b"h\xc3\xa9llo")


def test_structural_equality():
    assert BencodeInt(5) == BencodeInt(5)
    assert BencodeInt(5) != BencodeInt(6)
    assert BencodeInt(5) != BencodeString("5")
    assert BencodeString(b"a") != b"a"
    assert from_native([1, 2]) != from_native([2, 1])
    assert from_native({"a": 1, "b": 2}) == from_native({"b": 2, "a": 1})
    assert from_native({"a": 1}) != from_native({"a": 2})
    assert from_native({"a": 1}) != from_native({"a": 1, "b": 2})


def test_hash_matches_equality():
    left = from_native({"a": 1, "b": [1, 2], "c": {"x": "y"}})
    right = from_native({"c": {"x": "y"}, "b": [1, 2], "a": 1})
    assert hash(left) == hash(right)
    assert hash(from_native([1, 2])) == hash(from_native([1, 2]))
    assert len({BencodeInt(1), BencodeInt(1), BencodeString("1")}) == 2


def test_maps_as_keys():
    key_a = from_native({"x": 1, "y": 2})
    key_b = from_native({"y": 2, "x": 1})
    outer = BencodeDict({key_a: BencodeString("found")})
    assert outer[key_b] == BencodeString("found")


def test_render_text():
    assert BencodeInt(-3).render_text() == "-3"
    assert BencodeString("foo").render_text() == "foo"
    assert str(from_native([1, "a", [2]])) == "[1, a, [2]]"
    assert str(BencodeList([])) == "[]"
    assert str(from_native({"foo": {"bar": "baz"}})) == "{foo {bar baz}}"
    assert str(BencodeDict({})) == "{}"
    assert BencodeString(b"\xff").render_text() == "�"


def test_string_text():
    assert BencodeString("ok").text() == "ok"
    with pytest.raises(BencodeTypeMismatch):
        BencodeString(b"\xff\xfe").text()


def test_to_str_map():
    meta = from_native({"name": "file.txt", "length": 10})
    assert meta.to_str_map() == {"name": "file.txt", "length": "10"}


def test_to_str_map_requires_dict():
    with pytest.raises(BencodeTypeMismatch):
        BencodeInt(1).to_str_map()
    with pytest.raises(BencodeTypeMismatch):
        from_native([1]).to_str_map()


def test_to_str_map_renders_nested_values():
    meta = from_native({"files": [1, 2], "info": {"k": "v"}})
    assert meta.to_str_map() == {"files": "[1, 2]", "info": "{k v}"}


def test_to_str_map_strict_rejects_nested_values():
    with pytest.raises(BencodeTypeMismatch):
        from_native({"files": ["a"]}).to_str_map(strict=True)
    with pytest.raises(BencodeTypeMismatch):
        from_native({"info": {}}).to_str_map(strict=True)
    assert from_native({"n": 1}).to_str_map(strict=True) == {"n": "1"}


def test_to_str_map_rejects_invalid_utf8():
    with pytest.raises(BencodeTypeMismatch):
        BencodeDict({BencodeString(b"\xff"): BencodeString("a")}).to_str_map()
    with pytest.raises(BencodeTypeMismatch):
        BencodeDict({BencodeString("a"): BencodeString(b"\xfe")}).to_str_map()


def test_to_str_map_rejects_colliding_keys():
    print("Testing keys that render to the same text...")
    meta = BencodeDict({BencodeInt(1): BencodeString("int"), BencodeString("1"): BencodeString("str")})
    assert len(meta) == 2
    with pytest.raises(BencodeTypeMismatch, match="not unique"):
        meta.to_str_map()


def test_to_native():
    tree = from_native({"a": [1, b"\x00"], "b": {"c": "d"}})
    assert tree.to_native() == {b"a": [1, b"\x00"], b"b": {b"c": b"d"}}
    assert BencodeDict({from_native([1, 2]): BencodeInt(3)}).to_native() == {(1, 2): 3}
    with pytest.raises(BencodeTypeMismatch):
        BencodeDict({from_native({}): BencodeInt(3)}).to_native()


def test_from_native():
    assert from_native(True) == BencodeInt(1)
    assert from_native((1, "x")) == BencodeList([BencodeInt(1), BencodeString("x")])
    assert from_native(bytearray(b"ab")) == BencodeString(b"ab")
    value = BencodeInt(4)
    assert from_native(value) is value
    with pytest.raises(BencodeTypeMismatch):
        from_native(1.5)
    with pytest.raises(BencodeTypeMismatch):
        from_native(None)


def test_values_are_immutable():
    num = BencodeInt(1)
    with pytest.raises(AttributeError):
        num._value = 2
    with pytest.raises(AttributeError):
        num.value = 2

    mapping = from_native({"a": 1})
    with pytest.raises(TypeError):
        mapping.value[BencodeString("b")] = BencodeInt(2)

    items = from_native([1])
    assert isinstance(items.value, tuple)


def test_constructor_type_checks():
    with pytest.raises(TypeError):
        BencodeInt("1")
    with pytest.raises(TypeError):
        BencodeString(5)
    with pytest.raises(TypeError):
        BencodeList([1, 2])
    with pytest.raises(TypeError):
        BencodeList(b"abc")
    with pytest.raises(TypeError):
        BencodeDict({b"a": BencodeInt(1)})


def test_dict_lookup_accepts_native_keys():
    meta = from_native({"announce": "url", "private": 1})
    assert "announce" in meta
    assert b"private" in meta
    assert meta.get("missing") is None
    assert meta.get("announce") == BencodeString("url")
    assert list(meta) == [BencodeString("announce"), BencodeString("private")]
    assert len(meta) == 2
