from __future__ import annotations

import heapq
import itertools
from collections.abc import Hashable, Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Union

Symbol = Hashable

# -------------------
# Strutture di base Huffman
# -------------------


@dataclass(frozen=True, slots=True)
class Leaf:
    symbol: Symbol
    weight: int


@dataclass(frozen=True, slots=True)
class Internal:
    weight: int
    left: "Node"
    right: "Node"


Node = Union[Leaf, Internal]


def count_frequencies(data: Iterable[Symbol]) -> dict[Symbol, int]:
    freq: dict[Symbol, int] = {}
    for sym in data:
        freq[sym] = freq.get(sym, 0) + 1
    return freq


def build_tree(freq: Mapping[Symbol, int]) -> Node | None:
    """
    Min-weight combining con tie-break deterministico.

    Chiave heap: (weight, seq). Le foglie entrano in ordine crescente di simbolo,
    ogni nodo interno prende il seq successivo. A parità di peso esce prima il
    nodo inserito prima (FIFO) e il primo estratto diventa il figlio sinistro.
    """
    heap: list[tuple[int, int, Node]] = []
    counter = itertools.count()

    for sym, f in sorted(freq.items(), key=lambda kv: kv[0]):
        if f <= 0:
            raise ValueError(f"peso non positivo per il simbolo {sym!r}: {f}")
        heapq.heappush(heap, (f, next(counter), Leaf(symbol=sym, weight=f)))

    if not heap:
        return None

    # Un solo simbolo: la radice resta una foglia (caso degenere)
    while len(heap) > 1:
        f1, _, n1 = heapq.heappop(heap)
        f2, _, n2 = heapq.heappop(heap)
        parent = Internal(weight=f1 + f2, left=n1, right=n2)
        heapq.heappush(heap, (parent.weight, next(counter), parent))

    return heap[0][2]


def iter_leaves(root: Node | None) -> Iterator[tuple[Leaf, int]]:
    """Yield (leaf, depth) left to right."""
    if root is None:
        return
    stack: list[tuple[Node, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, Leaf):
            yield node, depth
            continue
        stack.append((node.right, depth + 1))
        stack.append((node.left, depth + 1))


def check_tree(root: Node | None, freq: Mapping[Symbol, int] | None = None) -> None:
    """
    Validate structural invariants; raise ValueError on the first violation.

    - every Internal weight equals the sum of its children
    - with ``freq``: leaves are exactly the keys of ``freq`` with equal weights,
      and the root weight equals the total count
    """
    if root is None:
        if freq:
            raise ValueError("albero vuoto per una tabella di frequenze non vuota")
        return

    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            if node.weight <= 0:
                raise ValueError(f"foglia con peso non positivo: {node!r}")
            continue
        if node.weight != node.left.weight + node.right.weight:
            raise ValueError(
                f"peso interno {node.weight} != {node.left.weight} + {node.right.weight}"
            )
        stack.append(node.right)
        stack.append(node.left)

    if freq is None:
        return

    seen: dict[Symbol, int] = {}
    for leaf, _ in iter_leaves(root):
        if leaf.symbol in seen:
            raise ValueError(f"simbolo duplicato nell'albero: {leaf.symbol!r}")
        seen[leaf.symbol] = leaf.weight
    if seen != dict(freq):
        raise ValueError("le foglie non corrispondono alla tabella di frequenze")
    if root.weight != sum(freq.values()):
        raise ValueError(f"peso radice {root.weight} != {sum(freq.values())}")
