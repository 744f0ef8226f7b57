"""Chain member ordering — make a chain loop as rectangular as possible.

A chain is a closed belt running around every member in order.  When
the member order zig-zags across the grid the belt crosses itself.
``arrange_members`` reorders members into a loop around their centroid
so the belt encloses them without crossings.  Member order is
otherwise significant, so this is only applied on request.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from shapely.geometry import LinearRing, MultiPoint

from .models import PartIndex


log = logging.getLogger(__name__)


def chain_is_simple(coords: Sequence[tuple[float, float]]) -> bool:
    """True if the closed belt through ``coords`` does not cross itself.

    Chains with fewer than three members cannot cross.
    """
    if len(coords) < 3:
        return True
    return LinearRing(coords).is_simple


def arrange_members(
    members: Sequence[PartIndex],
    positions: Sequence[tuple[int, int]],
) -> list[PartIndex]:
    """Return ``members`` ordered as a non-crossing loop.

    An order that is already non-crossing is returned unchanged.
    Otherwise members are sorted by angle around their centroid and the
    loop is rotated so that it still starts at ``members[0]``.
    """
    members = list(members)
    coords = [positions[m] for m in members]
    if chain_is_simple(coords):
        return members

    centroid = MultiPoint(coords).centroid
    cx, cy = centroid.x, centroid.y

    def _key(item: tuple[int, PartIndex]) -> tuple[float, float, int]:
        order, member = item
        x, y = positions[member]
        return (
            math.atan2(y - cy, x - cx),
            math.hypot(x - cx, y - cy),
            order,
        )

    ranked = [m for _, m in sorted(enumerate(members), key=_key)]
    start = ranked.index(members[0])
    arranged = ranked[start:] + ranked[:start]

    log.debug("Arranged chain %s -> %s", members, arranged)
    return arranged
