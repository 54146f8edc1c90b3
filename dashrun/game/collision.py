# dashrun/game/collision.py
from __future__ import annotations
from typing import Iterable, Optional
from .config import PLAYER_SIZE
from .level import Obstacle


def overlaps_x(ax: float, aw: float, bx: float, bw: float) -> bool:
    return ax < bx + bw and ax + aw > bx


def rects_overlap_strict(ax: float, ay: float, aw: float, ah: float,
                         bx: float, by: float, bw: float, bh: float) -> bool:
    """AABB overlap with strict inequalities: touching edges do not count."""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def first_lethal_hit(px: float, py: float, obstacles: Iterable[Obstacle],
                     size: float = PLAYER_SIZE) -> Optional[Obstacle]:
    """
    Return the first lethal obstacle the player box overlaps, or None.
    Landable variants are skipped entirely.
    """
    for o in obstacles:
        if not o.lethal:
            continue
        if rects_overlap_strict(px, py, size, size, o.x, o.y, o.width, o.height):
            return o
    return None
