from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Literal

from text_huffman.errors import (
    EmptyTree,
    ExtraBits,
    RoundTripMismatch,
    TruncatedStream,
    UnknownCode,
    UnknownSymbol,
)

from .bits import BitSequence, BitWriter
from .codes import build_code_table
from .tree import Leaf, Node, Symbol, build_tree, count_frequencies

SymbolKind = Literal["bytes", "chars"]


def encode(data: Sequence[Symbol], codes: Mapping[Symbol, str]) -> BitSequence:
    """data -> BitSequence, concatenazione dei codici in ordine di input."""
    w = BitWriter()
    for pos, sym in enumerate(data):
        code = codes.get(sym)
        if code is None:
            raise UnknownSymbol(sym, pos)
        w.write_code(code)
    return w.finish()


def decode(root: Node | None, bits: BitSequence | str, n: int) -> list[Symbol]:
    """
    Decodifica esattamente n simboli; il bitstream deve essere consumato per intero.

    ``bits`` può essere una BitSequence o una stringa testuale di '0'/'1'.
    """
    if isinstance(bits, str):
        bits = BitSequence.from_text(bits)
    if n < 0:
        raise ValueError(f"numero di simboli negativo: {n}")

    total = len(bits)

    if root is None:
        if n > 0:
            raise EmptyTree(f"richiesti {n} simboli da un albero vuoto")
        if total:
            raise ExtraBits(f"{total} bit in eccesso per un albero vuoto")
        return []

    if isinstance(root, Leaf):
        # caso degenere: un bit "1" per occorrenza, nessuna discesa nell'albero
        if total < n:
            raise TruncatedStream(f"attesi {n} bit per {n} simboli, trovati {total}")
        if total > n:
            raise ExtraBits(f"{total - n} bit in eccesso dopo {n} simboli")
        for i, bit in enumerate(bits):
            if bit != 1:
                raise UnknownCode(f"bit 0 all'indice {i}: nessuna foglia raggiungibile")
        return [root.symbol] * n

    out: list[Symbol] = []
    if n == 0:
        if total:
            raise ExtraBits(f"{total} bit in eccesso dopo 0 simboli")
        return out

    node: Node = root
    cursor = 0
    for bit in bits:
        cursor += 1
        node = node.left if bit == 0 else node.right  # type: ignore[union-attr]
        if isinstance(node, Leaf):
            out.append(node.symbol)
            node = root
            if len(out) == n:
                break

    if len(out) < n:
        where = "a metà codice" if node is not root else "a confine di simbolo"
        raise TruncatedStream(
            f"bitstream esaurito {where}: decodificati {len(out)} simboli su {n} ({total} bit)"
        )
    if cursor != total:
        raise ExtraBits(f"{total - cursor} bit in eccesso dopo {n} simboli")
    return out


# -------------------
# Pipeline completa
# -------------------


@dataclass(frozen=True)
class HuffmanResult:
    freq: dict[Symbol, int]
    tree: Node | None
    codes: dict[Symbol, str]
    bits: BitSequence
    n: int


class CodecHuffman:
    """
    Pipeline completa: frequenze -> albero -> codici -> bitstream.

    - symbols="bytes": simboli = byte 0..255, decompress -> bytes
    - symbols="chars": simboli = caratteri, decompress -> str
    """

    def __init__(self, symbols: SymbolKind = "chars", encoding: str = "utf-8") -> None:
        if symbols not in ("bytes", "chars"):
            raise ValueError(f"symbols deve essere 'bytes' o 'chars', trovato {symbols!r}")
        self.symbols: SymbolKind = symbols
        self.encoding = encoding

    def prepare(self, data: bytes | str) -> bytes | str:
        """Normalize input to the configured symbol kind."""
        if self.symbols == "bytes":
            if isinstance(data, str):
                return data.encode(self.encoding)
            return bytes(data)
        if isinstance(data, (bytes, bytearray)):
            return bytes(data).decode(self.encoding)
        return data

    def compress(self, data: bytes | str) -> HuffmanResult:
        seq = self.prepare(data)
        freq = count_frequencies(seq)
        tree = build_tree(freq)
        codes = build_code_table(tree)
        bits = encode(seq, codes)
        return HuffmanResult(freq=freq, tree=tree, codes=codes, bits=bits, n=len(seq))

    def decompress(self, tree: Node | None, bits: BitSequence | str, n: int) -> bytes | str:
        symbols = decode(tree, bits, n)
        if self.symbols == "bytes":
            return bytes(symbols)  # type: ignore[arg-type]
        return "".join(symbols)  # type: ignore[arg-type]

    def roundtrip(self, data: bytes | str) -> HuffmanResult:
        res = self.compress(data)
        back = self.decompress(res.tree, res.bits, res.n)
        if back != self.prepare(data):
            raise RoundTripMismatch(f"round trip fallito: {res.n} simboli, {len(res.bits)} bit")
        return res
