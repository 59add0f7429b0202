"""Ratio weights and ratio-battle classification."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence


def weight_sum(trio: Iterable[str], weights: Mapping[str, int]) -> int:
    """Sum the weight of each protocol; unknown protocols weigh 0."""
    return sum(weights.get(protocol, 0) for protocol in trio)


def is_ratio_battle(
    trio_a: Iterable[str],
    trio_b: Iterable[str],
    weights: Mapping[str, int],
    max_ratio: int,
) -> bool:
    """Return True when both sides stay within the ratio threshold."""
    return weight_sum(trio_a, weights) <= max_ratio and weight_sum(trio_b, weights) <= max_ratio


def group_by_weight(
    protocols: Sequence[str],
    weights: Mapping[str, int],
) -> list[tuple[int, list[str]]]:
    """Group a roster by weight, heaviest first, keeping roster order inside a group."""
    groups: dict[int, list[str]] = {}
    for protocol in protocols:
        groups.setdefault(weights.get(protocol, 0), []).append(protocol)
    return sorted(groups.items(), key=lambda item: item[0], reverse=True)


__all__ = ["group_by_weight", "is_ratio_battle", "weight_sum"]
