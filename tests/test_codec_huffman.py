from __future__ import annotations

import pytest

from text_huffman.core.bits import BitSequence
from text_huffman.core.codec_huffman import CodecHuffman, decode, encode
from text_huffman.core.codes import build_code_table, is_prefix_free
from text_huffman.core.tree import Internal, Leaf, build_tree, check_tree, count_frequencies
from text_huffman.errors import InvalidBit, UnknownSymbol

CORPUS = [
    "",
    "a",
    "aaaa",
    "ab",
    "abracadabra",
    "This is a sample text.",
    "mississippi",
    "Ω λ Ω λ λ ∂",
    "the quick brown fox jumps over the lazy dog " * 5,
]


def _pipeline(data):
    freq = count_frequencies(data)
    tree = build_tree(freq)
    codes = build_code_table(tree)
    return freq, tree, codes


# -------------------
# literal scenarios
# -------------------


def test_empty_input() -> None:
    freq, tree, codes = _pipeline("")
    assert freq == {}
    assert tree is None
    assert codes == {}
    bits = encode("", codes)
    assert len(bits) == 0 and bits.to_text() == ""
    assert decode(tree, bits, 0) == []


def test_single_symbol_input() -> None:
    freq, tree, codes = _pipeline("aaaa")
    assert freq == {"a": 4}
    assert tree == Leaf("a", 4)
    assert codes == {"a": "1"}
    bits = encode("aaaa", codes)
    assert bits.to_text() == "1111"
    assert "".join(decode(tree, bits, 4)) == "aaaa"


def test_two_symbols() -> None:
    freq, tree, codes = _pipeline("ab")
    assert freq == {"a": 1, "b": 1}
    assert isinstance(tree, Internal) and tree.weight == 2
    assert isinstance(tree.left, Leaf) and isinstance(tree.right, Leaf)
    assert len(codes["a"]) == len(codes["b"]) == 1
    bits = encode("ab", codes)
    assert len(bits) == 2
    assert "".join(decode(tree, bits, 2)) == "ab"


def test_abracadabra() -> None:
    freq, tree, codes = _pipeline("abracadabra")
    assert freq == {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1}
    assert tree is not None and tree.weight == 11
    assert len(codes["a"]) <= len(codes["b"]) == len(codes["r"]) <= len(codes["c"]) == len(codes["d"])
    bits = encode("abracadabra", codes)
    assert len(bits) == 23
    assert bits.to_text() == "01101110100010101101110"
    assert "".join(decode(tree, bits, 11)) == "abracadabra"


def test_sample_text() -> None:
    text = "This is a sample text."
    _, tree, codes = _pipeline(text)
    assert set(text) <= set(codes)
    bits = encode(text, codes)
    assert len(bits) == sum(len(codes[ch]) for ch in text)
    assert "".join(decode(tree, bits, len(text))) == text


# -------------------
# properties over a fixed corpus
# -------------------


@pytest.mark.parametrize("text", CORPUS)
def test_roundtrip_and_invariants(text: str) -> None:
    freq, tree, codes = _pipeline(text)
    check_tree(tree, freq)
    assert is_prefix_free(codes)
    assert set(codes) == set(text)
    bits = encode(text, codes)
    assert len(bits) == sum(len(codes[ch]) for ch in text)
    assert "".join(decode(tree, bits, len(text))) == text


@pytest.mark.parametrize("k", [1, 2, 7, 100])
def test_degenerate_lengths(k: int) -> None:
    data = b"x" * k
    _, tree, codes = _pipeline(data)
    assert codes == {ord("x"): "1"}
    bits = encode(data, codes)
    assert len(bits) == k
    assert bytes(decode(tree, bits, k)) == data


def test_all_byte_values_roundtrip() -> None:
    data = bytes(range(256)) * 3 + b"\x00" * 50 + b"\xff" * 10
    _, tree, codes = _pipeline(data)
    assert len(codes) == 256
    assert bytes(decode(tree, encode(data, codes), len(data))) == data


def test_decode_accepts_text_bits() -> None:
    _, tree, codes = _pipeline("abracadabra")
    assert "".join(decode(tree, "01101110100010101101110", 11)) == "abracadabra"


def test_decode_zero_symbols_on_non_empty_tree() -> None:
    _, tree, _ = _pipeline("abc")
    assert decode(tree, BitSequence(), 0) == []
    _, leaf, _ = _pipeline("aaa")
    assert decode(leaf, "", 0) == []


def test_decode_negative_count() -> None:
    _, tree, _ = _pipeline("ab")
    with pytest.raises(ValueError):
        decode(tree, "", -1)


def test_encode_unknown_symbol() -> None:
    _, _, codes = _pipeline("ab")
    with pytest.raises(UnknownSymbol) as ei:
        encode("abz", codes)
    assert ei.value.symbol == "z"
    assert ei.value.position == 2
    with pytest.raises(UnknownSymbol):
        encode("a", {})


def test_encode_with_foreign_table() -> None:
    # any covering table works, the bits are the plain concatenation
    bits = encode("aba", {"a": "10", "b": "0"})
    assert bits.to_text() == "10010"


# -------------------
# CodecHuffman
# -------------------


def test_codec_chars_mode() -> None:
    codec = CodecHuffman(symbols="chars")
    res = codec.compress("abracadabra")
    assert res.n == 11
    assert len(res.bits) == 23
    assert codec.decompress(res.tree, res.bits, res.n) == "abracadabra"


def test_codec_chars_mode_decodes_bytes_input() -> None:
    codec = CodecHuffman(symbols="chars")
    res = codec.compress("Ωλ∂Ω".encode("utf-8"))
    assert res.n == 4
    assert set(res.codes) == {"Ω", "λ", "∂"}
    assert codec.decompress(res.tree, res.bits, res.n) == "Ωλ∂Ω"


def test_codec_bytes_mode() -> None:
    codec = CodecHuffman(symbols="bytes")
    res = codec.compress("Ωλ")
    assert res.n == len("Ωλ".encode("utf-8"))
    assert all(isinstance(sym, int) for sym in res.codes)
    assert codec.decompress(res.tree, res.bits, res.n) == "Ωλ".encode("utf-8")


def test_codec_roundtrip_empty() -> None:
    for mode in ("bytes", "chars"):
        codec = CodecHuffman(symbols=mode)  # type: ignore[arg-type]
        res = codec.roundtrip(b"")
        assert res.n == 0 and res.tree is None and len(res.bits) == 0
        assert codec.decompress(res.tree, res.bits, 0) == (b"" if mode == "bytes" else "")


def test_codec_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError):
        CodecHuffman(symbols="words")  # type: ignore[arg-type]


def test_codec_respects_encoding() -> None:
    codec = CodecHuffman(symbols="bytes", encoding="latin-1")
    res = codec.compress("é")
    assert res.n == 1
    assert codec.decompress(res.tree, res.bits, res.n) == b"\xe9"


def test_encode_rejects_malformed_code_table() -> None:
    with pytest.raises(InvalidBit):
        encode("ab", {"a": "2", "b": "x1"})
