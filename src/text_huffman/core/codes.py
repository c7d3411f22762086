from __future__ import annotations

from collections.abc import Mapping

from .tree import Leaf, Node, Symbol


def build_code_table(root: Node | None) -> dict[Symbol, str]:
    """Symbol -> '0'/'1' code string. Left edge = '0', right edge = '1'."""
    codes: dict[Symbol, str] = {}
    if root is None:
        return codes

    stack: list[tuple[Node, str]] = [(root, "")]
    while stack:
        node, path = stack.pop()
        if isinstance(node, Leaf):
            # radice foglia: codice a un bit "1"
            codes[node.symbol] = path or "1"
            continue
        stack.append((node.right, path + "1"))
        stack.append((node.left, path + "0"))
    return codes


def is_prefix_free(codes: Mapping[Symbol, str]) -> bool:
    # dopo l'ordinamento lessicografico un prefisso precede sempre le sue estensioni
    ordered = sorted(codes.values())
    for a, b in zip(ordered, ordered[1:]):
        if b.startswith(a):
            return False
    return True


def weighted_length(codes: Mapping[Symbol, str], freq: Mapping[Symbol, int]) -> int:
    return sum(len(codes[sym]) * f for sym, f in freq.items())


def _render_symbol(sym: Symbol) -> str:
    if isinstance(sym, str) and len(sym) == 1 and sym.isprintable() and not sym.isspace():
        return sym
    return repr(sym)


def render_code_table(codes: Mapping[Symbol, str]) -> str:
    """One '<symbol> <code>' line per entry, ordered by code length then code."""
    items = sorted(codes.items(), key=lambda kv: (len(kv[1]), kv[1]))
    return "".join(f"{_render_symbol(sym)} {code}\n" for sym, code in items)
