"""Square grid layout for circuit parts."""

from __future__ import annotations

import math

from spintronics.config import LAYOUT_RULES, LayoutRules


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (n - 1).bit_length()


def grid_size(part_count: int) -> int:
    """Number of slots per grid row for ``part_count`` parts.

    The side of the smallest power-of-two square that holds every part,
    rounded down: 1 part -> 1, 2 -> 1, 3..4 -> 2, 5..8 -> 2, 9..16 -> 4.
    """
    return max(1, math.isqrt(next_power_of_two(part_count)))


def grid_position(
    index: int, part_count: int, rules: LayoutRules = LAYOUT_RULES,
) -> tuple[int, int]:
    """World (x, y) of part ``index`` in a circuit of ``part_count`` parts."""
    g = grid_size(part_count)
    x = (index % g) * rules.part_spacing
    y = (index // g) * rules.part_spacing
    if rules.invert_y:
        y = -y
    return (x, y)


def grid_positions(
    part_count: int, rules: LayoutRules = LAYOUT_RULES,
) -> list[tuple[int, int]]:
    """Positions for every part, in creation order."""
    return [grid_position(i, part_count, rules) for i in range(part_count)]
