import pytest

from huffpack import codec, container
from huffpack.errors import CorruptContainerError
from huffpack.huffman import Internal, Leaf, build_tree, count_symbols


def _sample():
    text = "aaaabbbcc"
    tree = build_tree(count_symbols(text))
    return tree, codec.encode(text, tree)


def test_tree_serialization_roundtrip():
    tree = build_tree(count_symbols("naïve 日本 🙂 text with\nnewlines"))
    assert container.deserialize_tree(container.serialize_tree(tree)) == tree


def test_leaf_encoding_layout():
    assert container.serialize_tree(Leaf(4, "z")) == (
        b"\x00" + (4).to_bytes(8, "big") + ord("z").to_bytes(4, "big")
    )


def test_container_layout():
    tree, payload = _sample()
    blob = container.dumps(tree, payload)
    tree_bytes = container.serialize_tree(tree)

    assert blob[:3] == b"HUF"
    assert blob[3] == container.VERSION
    assert int.from_bytes(blob[4:8], "big") == len(tree_bytes)
    assert blob[8:8 + len(tree_bytes)] == tree_bytes
    assert blob[8 + len(tree_bytes):] == payload


def test_loads_returns_tree_and_payload():
    tree, payload = _sample()
    assert container.loads(container.dumps(tree, payload)) == (tree, payload)


def test_write_and_read(tmp_path):
    tree, payload = _sample()
    path = tmp_path / "sample.huf"
    container.write(path, tree, payload)
    assert container.read(path) == (tree, payload)


def test_read_missing_file(tmp_path):
    with pytest.raises(OSError):
        container.read(tmp_path / "missing.huf")


def test_write_into_missing_directory(tmp_path):
    tree, payload = _sample()
    with pytest.raises(OSError):
        container.write(tmp_path / "no" / "such" / "dir.huf", tree, payload)


@pytest.mark.parametrize("blob", [
    b"",
    b"HUF",
    b"ZIP\x01\x00\x00\x00\x00",
    b"HUF\x02\x00\x00\x00\x00",
    b"HUF\x01\x00\x00\x00\xff" + b"\x00" * 10,
])
def test_loads_rejects_bad_preamble(blob):
    with pytest.raises(CorruptContainerError):
        container.loads(blob)


@pytest.mark.parametrize("tree_bytes", [
    b"",
    b"\x00\x00",
    b"\x07" + b"\x00" * 12,
    b"\x00" + (1).to_bytes(8, "big") + (0x110000).to_bytes(4, "big"),
    container.serialize_tree(Leaf(1, "a")) + b"\x00",
    container.serialize_tree(Internal(2, Leaf(1, "a"), Leaf(1, "b")))[:-1],
    container.serialize_tree(Internal(3, Leaf(1, "a"), Leaf(1, "b"))),
    container.serialize_tree(Internal(2, Leaf(1, "a"), Leaf(1, "a"))),
])
def test_deserialize_rejects_malformed_trees(tree_bytes):
    with pytest.raises(CorruptContainerError):
        container.deserialize_tree(tree_bytes)


def test_deserialize_rejects_deep_nesting():
    internal = b"\x01" + (0).to_bytes(8, "big")
    tree_bytes = internal * (container.MAX_DEPTH + 2)
    with pytest.raises(CorruptContainerError):
        container.deserialize_tree(tree_bytes)
