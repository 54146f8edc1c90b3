# dashrun/game/player.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
from .collision import overlaps_x
from .config import (
    PLAYER_X, PLAYER_SIZE, GRAVITY, JUMP_FORCE, PLATFORM_JUMP_FORCE,
    DOUBLE_JUMP_FORCE, BOUNCE_FACTOR, ROTATION_SPEED, CONTACT_TOLERANCE,
    LANE_RETURN_SPEED, JUMP_PITCH, PLATFORM_JUMP_PITCH, DOUBLE_JUMP_PITCH,
)
from .level import GroundSegment, Obstacle

# Contact outcomes of resolve_contacts()
CONTACT_GROUND = "ground"
CONTACT_PLATFORM = "platform"
CONTACT_BOUNCE_LEFT = "bounce_left"
CONTACT_BOUNCE_RIGHT = "bounce_right"


@dataclass
class Player:
    """
    Square runner on a fixed lane.
    - is_jumping doubles as the "airborne" flag (set only by a jump)
    - can_double_jump is granted by the first jump and consumed mid-air
    - on_platform is refreshed by every contact pass
    """
    x: float
    y: float
    vy: float = 0.0
    is_jumping: bool = False
    can_double_jump: bool = False
    rotation: float = 0.0
    on_platform: bool = False

    @classmethod
    def at_start(cls, ground_top: float) -> "Player":
        return cls(x=float(PLAYER_X), y=ground_top - PLAYER_SIZE)

    @property
    def bottom(self) -> float:
        return self.y + PLAYER_SIZE

    def try_jump(self) -> Optional[float]:
        """Apply a jump intent. Returns the sound pitch hint, or None if nothing happened."""
        if not self.is_jumping:
            self.vy = PLATFORM_JUMP_FORCE if self.on_platform else JUMP_FORCE
            pitch = PLATFORM_JUMP_PITCH if self.on_platform else JUMP_PITCH
            self.is_jumping = True
            self.can_double_jump = True
            self.on_platform = False
            self.rotation = 0.0
            return pitch
        if self.can_double_jump:
            self.vy = DOUBLE_JUMP_FORCE
            self.can_double_jump = False
            return DOUBLE_JUMP_PITCH
        return None

    def update_physics(self):
        """Integrate one tick: gravity, position, airborne spin, lane recovery."""
        self.vy += GRAVITY
        self.y += self.vy
        if self.is_jumping:
            self.rotation += ROTATION_SPEED

        # drift back to the lane after a side bounce
        if self.x < PLAYER_X:
            self.x = min(float(PLAYER_X), self.x + LANE_RETURN_SPEED)
        elif self.x > PLAYER_X:
            self.x = max(float(PLAYER_X), self.x - LANE_RETURN_SPEED)

    def _in_landing_band(self, top: float, height: float) -> bool:
        return top <= self.bottom < top + height + CONTACT_TOLERANCE and self.vy > 0

    def _land_on(self, top: float):
        self.y = top - PLAYER_SIZE
        self.vy = 0.0
        self.is_jumping = False
        self.can_double_jump = False
        self.rotation = 0.0

    def resolve_contacts(self, ground: List[GroundSegment],
                         obstacles: List[Obstacle]) -> Optional[str]:
        """
        One contact outcome per tick, first match wins:
          1) ground segments (take precedence over everything)
          2) landable obstacles in insertion order: top, then left side, then right side
        Returns one of the CONTACT_* tags, or None when airborne.
        """
        self.on_platform = False

        for seg in ground:
            if overlaps_x(self.x, PLAYER_SIZE, seg.x, seg.width) and \
                    self._in_landing_band(seg.y, seg.height):
                self._land_on(seg.y)
                return CONTACT_GROUND

        for o in obstacles:
            if not o.landable:
                continue
            v_overlap = self.bottom > o.y and self.y < o.y + o.height

            if overlaps_x(self.x, PLAYER_SIZE, o.x, o.width) and \
                    self._in_landing_band(o.y, o.height):
                self._land_on(o.y)
                self.on_platform = True
                return CONTACT_PLATFORM

            right_edge = self.x + PLAYER_SIZE
            if o.x < right_edge < o.x + CONTACT_TOLERANCE and v_overlap:
                self.x = o.x - PLAYER_SIZE
                self._bounce()
                return CONTACT_BOUNCE_LEFT

            o_right = o.x + o.width
            if o_right - CONTACT_TOLERANCE < self.x < o_right and v_overlap:
                self.x = o_right
                self._bounce()
                return CONTACT_BOUNCE_RIGHT

        return None

    def _bounce(self):
        self.vy = JUMP_FORCE * BOUNCE_FACTOR
        self.is_jumping = False
        self.can_double_jump = False
