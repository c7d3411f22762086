from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from text_huffman.errors import InvalidBit


@dataclass(frozen=True)
class BitSequence:
    """
    Sequenza di bit impacchettata MSB-first.

    - data: byte impacchettati, padding a zero nell'ultimo byte
    - nbits: lunghezza in BIT (non in byte)
    """

    data: bytes = b""
    nbits: int = 0

    def __post_init__(self) -> None:
        if self.nbits < 0:
            raise ValueError(f"nbits negativo: {self.nbits}")
        if len(self.data) != (self.nbits + 7) // 8:
            raise ValueError(
                f"BitSequence incoerente: {len(self.data)} byte per {self.nbits} bit"
            )
        pad = (8 - self.nbits % 8) % 8
        if pad and self.data[-1] & ((1 << pad) - 1):
            raise ValueError("BitSequence: bit di padding non a zero")

    @classmethod
    def from_bits(cls, bits: Iterable[int]) -> "BitSequence":
        w = BitWriter()
        for b in bits:
            w.write_bit(b)
        return w.finish()

    @classmethod
    def from_text(cls, text: str) -> "BitSequence":
        """Parse a textual '0'/'1' string (no separators)."""
        w = BitWriter()
        w.write_code(text)
        return w.finish()

    @property
    def lastbits(self) -> int:
        """Valid bits in the last byte (1..8), 0 for an empty sequence."""
        if self.nbits == 0:
            return 0
        return self.nbits % 8 or 8

    def to_text(self) -> str:
        return "".join("1" if b else "0" for b in self)

    def __len__(self) -> int:
        return self.nbits

    def __iter__(self) -> Iterator[int]:
        remaining = self.nbits
        for byte in self.data:
            for bit_index in range(min(8, remaining)):
                yield (byte >> (7 - bit_index)) & 1
            remaining -= 8

    def __getitem__(self, index: int) -> int:
        if index < 0:
            index += self.nbits
        if not (0 <= index < self.nbits):
            raise IndexError("BitSequence index out of range")
        return (self.data[index >> 3] >> (7 - (index & 7))) & 1

    def __str__(self) -> str:
        return self.to_text()


class BitWriter:
    """Accumulatore di bit, stessa logica current_byte/bit_count dell'encoder storico."""

    def __init__(self) -> None:
        self._out = bytearray()
        self._current = 0
        self._count = 0
        self._nbits = 0

    def write_bit(self, bit: int) -> None:
        if bit not in (0, 1):
            raise ValueError(f"bit deve essere 0 o 1, trovato {bit!r}")
        self._current = (self._current << 1) | bit
        self._count += 1
        self._nbits += 1
        if self._count == 8:
            self._out.append(self._current)
            self._current = 0
            self._count = 0

    def write_code(self, code: str) -> None:
        """Append a textual '0'/'1' code; any other character raises InvalidBit."""
        for i, ch in enumerate(code):
            if ch == "0":
                self.write_bit(0)
            elif ch == "1":
                self.write_bit(1)
            else:
                raise InvalidBit(ch, i)

    @property
    def nbits(self) -> int:
        return self._nbits

    def finish(self) -> BitSequence:
        out = bytes(self._out)
        if self._count > 0:
            out += bytes([self._current << (8 - self._count)])
        return BitSequence(data=out, nbits=self._nbits)
