# dashrun/env/observations.py
from __future__ import annotations
from typing import List
import numpy as np
from ..game.config import (
    WIDTH, HEIGHT, PLATFORM_WIDTH, GROUND_MOVE_RANGE, INITIAL_SPAN,
)
from ..game.run_state import Snapshot

N_AHEAD = 2                      # obstacles described per observation
VY_NORM = 20.0                   # |vy| mapped to 1.0
DX_NORM = WIDTH * INITIAL_SPAN   # furthest an obstacle can be generated
ABSENT = (1.0, 0.0, 1.0, 0.0)    # [dx, width, top, lethal] when nothing is ahead
OBS_SIZE = 5 + 4 * N_AHEAD

OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0] + [0.0, 0.0, 0.0, 0.0] * N_AHEAD, dtype=np.float32)
OBS_HIGH = np.array([1.0, 1.0, 1.0, 1.0, 1.0] + [1.0, 1.0, 1.0, 1.0] * N_AHEAD, dtype=np.float32)


def _clip01(v: float) -> float:
    return max(0.0, min(1.0, v))


def build_observation(snap: Snapshot) -> np.ndarray:
    """
    Returns float32 (OBS_SIZE,):
      [y_norm, vy_norm, airborne, double_jump, ground_offset_norm,
       dx, width, top, lethal  (nearest obstacle ahead),
       dx, width, top, lethal  (second nearest)]
    "Ahead" = right edge still in front of the player's left edge.
    """
    p = snap.player
    head: List[float] = [
        _clip01(p.y / HEIGHT),
        max(-1.0, min(1.0, p.vy / VY_NORM)),
        1.0 if p.is_jumping else 0.0,
        1.0 if p.can_double_jump else 0.0,
        _clip01(snap.ground_offset / GROUND_MOVE_RANGE),
    ]

    ahead = [o for o in snap.obstacles if o.x + o.width > p.x]
    ahead.sort(key=lambda o: o.x)

    tail: List[float] = []
    for i in range(N_AHEAD):
        if i < len(ahead):
            o = ahead[i]
            tail += [
                _clip01((o.x - p.x) / DX_NORM),
                _clip01(o.width / PLATFORM_WIDTH),
                _clip01(o.y / HEIGHT),
                1.0 if o.lethal else 0.0,
            ]
        else:
            tail += list(ABSENT)

    return np.asarray(head + tail, dtype=np.float32)
