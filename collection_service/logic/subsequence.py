"""Contiguous sub-range matching over id sequences."""

from __future__ import annotations

from typing import Any, Sequence


def find_subsequence(order: Sequence[Any], expected: Sequence[Any]) -> int:
    """Return the lowest index ``k`` where ``order[k:k+len(expected)] == expected``.

    Returns ``-1`` when ``expected`` is empty, longer than ``order`` or does
    not occur. The scan is naive (``O(len(order) * len(expected))``) and never
    wraps around the end of ``order``.
    """
    width = len(expected)
    if width == 0 or width > len(order):
        return -1
    first = expected[0]
    last_start = len(order) - width
    k = 0
    while k <= last_start:
        # list.index does the first-element scan in C
        try:
            k = order.index(first, k, last_start + 1)
        except ValueError:
            return -1
        if all(order[k + j] == expected[j] for j in range(1, width)):
            return k
        k += 1
    return -1


__all__ = ["find_subsequence"]
