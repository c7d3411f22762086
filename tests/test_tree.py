from __future__ import annotations

import random

import pytest

from text_huffman.core.tree import (
    Internal,
    Leaf,
    build_tree,
    check_tree,
    count_frequencies,
    iter_leaves,
)


def test_count_frequencies_basic() -> None:
    assert count_frequencies("abracadabra") == {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1}
    assert count_frequencies(b"aab") == {97: 2, 98: 1}


def test_count_frequencies_empty() -> None:
    assert count_frequencies("") == {}
    assert count_frequencies(b"") == {}


def test_build_tree_empty_and_single() -> None:
    assert build_tree({}) is None
    assert build_tree({"a": 4}) == Leaf("a", 4)


def test_build_tree_two_symbols_fifo_left() -> None:
    # equal weights: earlier-inserted (smaller symbol) becomes the left child
    assert build_tree({"b": 1, "a": 1}) == Internal(2, Leaf("a", 1), Leaf("b", 1))


def test_build_tree_abracadabra_shape() -> None:
    root = build_tree(count_frequencies("abracadabra"))
    assert root is not None
    assert root.weight == 11
    leaves = [(leaf.symbol, leaf.weight, depth) for leaf, depth in iter_leaves(root)]
    assert leaves == [
        ("a", 5, 1),
        ("c", 1, 3),
        ("d", 1, 3),
        ("b", 2, 3),
        ("r", 2, 3),
    ]


def test_build_tree_ignores_mapping_order() -> None:
    freq = count_frequencies("this is an example of a huffman tree")
    items = list(freq.items())
    rng = random.Random(1234)
    expected = build_tree(freq)
    for _ in range(10):
        rng.shuffle(items)
        assert build_tree(dict(items)) == expected


def test_build_tree_rejects_non_positive_weight() -> None:
    with pytest.raises(ValueError):
        build_tree({"a": 3, "b": 0})
    with pytest.raises(ValueError):
        build_tree({"a": -1})


@pytest.mark.parametrize(
    "text",
    ["a", "ab", "abracadabra", "This is a sample text.", "mississippi river", "xyzzy" * 7],
)
def test_tree_invariants_hold(text: str) -> None:
    freq = count_frequencies(text)
    root = build_tree(freq)
    check_tree(root, freq)
    assert root is not None and root.weight == len(text)


def test_check_tree_detects_bad_internal_weight() -> None:
    bad = Internal(3, Leaf("a", 1), Leaf("b", 1))
    with pytest.raises(ValueError):
        check_tree(bad)


def test_check_tree_detects_leaf_mismatch() -> None:
    root = build_tree({"a": 1, "b": 2})
    with pytest.raises(ValueError):
        check_tree(root, {"a": 1, "b": 3})
    with pytest.raises(ValueError):
        check_tree(root, {"a": 1, "c": 2})
    with pytest.raises(ValueError):
        check_tree(None, {"a": 1})
    check_tree(None, {})


def test_deep_tree_does_not_recurse() -> None:
    # Fibonacci weights give a maximally skewed tree (depth = alphabet size - 1)
    fib = [1, 1]
    while len(fib) < 60:
        fib.append(fib[-1] + fib[-2])
    freq = {i: w for i, w in enumerate(fib)}
    root = build_tree(freq)
    check_tree(root, freq)
    depths = [d for _, d in iter_leaves(root)]
    assert max(depths) == len(fib) - 1
