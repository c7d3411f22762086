"""Compression mini-report for a single input.

Determinism note:
the report MUST be deterministic given the same input content and codec setup.
We DO NOT embed timestamps or paths.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from text_huffman.core.baseline import compressed_size
from text_huffman.core.codec_huffman import CodecHuffman
from text_huffman.core.codes import weighted_length

REPORT_SCHEMA = "text-huffman.report.v1"


def _bytes_h(n: int) -> str:
    if n < 0:
        return str(n)
    units = ["B", "KiB", "MiB", "GiB"]
    f = float(n)
    u = 0
    while f >= 1024.0 and u < len(units) - 1:
        f /= 1024.0
        u += 1
    return f"{int(f)} {units[u]}" if u == 0 else f"{f:.2f} {units[u]}"


def shannon_entropy(freq: Mapping[Any, int]) -> float:
    """Bits per symbol of the empirical distribution."""
    total = sum(freq.values())
    if total == 0:
        return 0.0
    h = 0.0
    for f in freq.values():
        p = f / total
        h -= p * math.log2(p)
    return h


def build_report(
    data: bytes | str,
    codec: CodecHuffman,
    baselines: Iterable[str] = (),
) -> dict[str, Any]:
    res = codec.compress(data)
    raw = data if isinstance(data, (bytes, bytearray)) else data.encode(codec.encoding)
    raw = bytes(raw)

    encoded_bytes = len(res.bits.data)
    avg = weighted_length(res.codes, res.freq) / res.n if res.n else 0.0

    base: dict[str, int] = {}
    for name in sorted(set(baselines)):
        base[name] = compressed_size(name, raw)

    return {
        "schema": REPORT_SCHEMA,
        "symbols": codec.symbols,
        "n": res.n,
        "distinct": len(res.freq),
        "encoded_bits": len(res.bits),
        "encoded_bytes": encoded_bytes,
        "lastbits": res.bits.lastbits,
        "input_bytes": len(raw),
        "avg_code_length": round(avg, 6),
        "entropy_bits_per_symbol": round(shannon_entropy(res.freq), 6),
        "ratio": round(encoded_bytes / len(raw), 6) if raw else 0.0,
        "baselines": base,
    }


def render_report(report: Mapping[str, Any]) -> str:
    lines = [
        f"symbols:   {report['symbols']} (n={report['n']}, distinct={report['distinct']})",
        f"input:     {_bytes_h(int(report['input_bytes']))}",
        f"huffman:   {report['encoded_bits']} bits -> {_bytes_h(int(report['encoded_bytes']))}"
        f" (ratio {float(report['ratio']):.3f})",
        f"avg code:  {float(report['avg_code_length']):.3f} bits/symbol"
        f" (entropy {float(report['entropy_bits_per_symbol']):.3f})",
    ]
    for name, size in sorted(dict(report.get("baselines") or {}).items()):
        lines.append(f"{name + ':':<10} {_bytes_h(int(size))}")
    return "\n".join(lines) + "\n"
