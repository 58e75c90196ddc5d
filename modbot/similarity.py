"""Jaro and Jaro-Winkler string similarity."""

from __future__ import annotations

from itertools import takewhile


def jaro(a: str, b: str) -> float:
    """Return the Jaro similarity of two strings, between 0.0 and 1.0."""
    a_len, b_len = len(a), len(b)
    if not a_len and not b_len:
        return 1.0
    if not a_len or not b_len:
        return 0.0

    search_range = max(max(a_len, b_len) // 2 - 1, 0)
    a_flags = [False] * a_len
    b_flags = [False] * b_len
    matches = 0

    for i, ch in enumerate(a):
        low = max(i - search_range, 0)
        high = min(b_len, i + search_range + 1)
        for j in range(low, high):
            if not b_flags[j] and b[j] == ch:
                a_flags[i] = b_flags[j] = True
                matches += 1
                break

    if not matches:
        return 0.0

    matched_a = (ch for ch, hit in zip(a, a_flags) if hit)
    matched_b = (ch for ch, hit in zip(b, b_flags) if hit)
    transpositions = sum(x != y for x, y in zip(matched_a, matched_b)) // 2

    return (
        matches / a_len + matches / b_len + (matches - transpositions) / matches
    ) / 3.0


def jaro_winkler(a: str, b: str) -> float:
    """Return the Jaro-Winkler similarity, boosting a shared prefix of up to 4 chars."""
    sim = jaro(a, b)
    if sim <= 0.7:
        return sim
    prefix = sum(1 for _ in takewhile(lambda pair: pair[0] == pair[1], zip(a[:4], b)))
    return sim + 0.1 * prefix * (1.0 - sim)