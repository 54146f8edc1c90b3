# dashrun/game/level.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import ClassVar, List, Tuple, Union
from .config import (
    WIDTH, OBSTACLE_HEIGHT, PLATFORM_MIN_HEIGHT, PLATFORM_WIDTH,
    PLATFORM_CHANCE, SPIKE_MIN_BASE, SPIKE_MIN_COUNT, SPIKE_MAX_COUNT,
    SPIKE_WIDTH, SPIKE_GAP, SPIKE_SCALE_MIN, SPIKE_SCALE_MAX,
    MIN_SPACING, MAX_SPACING, INITIAL_SPAN,
    GROUND_Y, GROUND_MOVE_SPEED, GROUND_MOVE_RANGE,
    GROUND_SEGMENT_WIDTH, GROUND_SEGMENT_HEIGHT,
    FLYING_CAT_COUNT, CAT_SIZE, CAT_MIN_Y, CAT_MAX_Y, CAT_MIN_SPEED, CAT_MAX_SPEED,
    CAT_ROTATION_SPEED,
)

logger = logging.getLogger(__name__)


@dataclass
class Platform:
    """Landable block. Passable from below and the sides, never lethal."""
    kind: ClassVar[str] = "platform"
    lethal: ClassVar[bool] = False
    landable: ClassVar[bool] = True

    x: float
    y: float
    width: float
    height: float


@dataclass
class SpikeGroup:
    """1-3 spikes side by side; any overlap with the player ends the run."""
    kind: ClassVar[str] = "spikes"
    lethal: ClassVar[bool] = True
    landable: ClassVar[bool] = False

    x: float
    y: float
    width: float
    height: float
    spike_heights: Tuple[float, ...]

    def spike_points(self) -> List[Tuple[Tuple[float, float], ...]]:
        """Triangles (base-left, base-right, apex) in world coords, left to right."""
        base_y = self.y + self.height
        tris = []
        for i, h in enumerate(self.spike_heights):
            left = self.x + i * (SPIKE_WIDTH + SPIKE_GAP)
            tris.append((
                (left, base_y),
                (left + SPIKE_WIDTH, base_y),
                (left + SPIKE_WIDTH / 2, base_y - h),
            ))
        return tris


Obstacle = Union[Platform, SpikeGroup]


@dataclass
class GroundSegment:
    x: float
    y: float
    width: float = GROUND_SEGMENT_WIDTH
    height: float = GROUND_SEGMENT_HEIGHT

    @property
    def right(self) -> float:
        return self.x + self.width


@dataclass
class FlyingCat:
    """Pure decoration: drifts left and spins, never collides."""
    x: float
    y: float
    rotation: float
    speed: float


class GroundOscillator:
    """
    Shared vertical offset of the terrain: a triangular (ping-pong) wave
    between 0 and `move_range`. Ground top = base_y - offset.
    """
    def __init__(self, base_y: float = GROUND_Y,
                 move_speed: float = GROUND_MOVE_SPEED,
                 move_range: float = GROUND_MOVE_RANGE):
        self.base_y = base_y
        self.move_speed = move_speed
        self.move_range = move_range
        self.offset = 0.0
        self.direction = 1

    @property
    def ground_top(self) -> float:
        return self.base_y - self.offset

    def step(self) -> float:
        self.offset += self.move_speed * self.direction
        if self.offset >= self.move_range:
            self.offset = self.move_range
            self.direction = -1
        elif self.offset <= 0.0:
            self.offset = 0.0
            self.direction = 1
        return self.offset


class LevelGen:
    """
    Endless terrain: obstacles, ground segments and decorative cats.

    The generator holds only the RNG and the view geometry; the entity lists
    belong to the caller and are edited in place (append on the right, evict
    on the left), so their order is always left to right.
    """
    def __init__(self, rng: random.Random, view_width: int = WIDTH):
        self.rng = rng
        self.view_width = view_width

    # ---------- Obstacles ----------

    def spawn_obstacle(self, x: float, ground_top: float) -> Obstacle:
        if self.rng.random() < PLATFORM_CHANCE:
            height = self._uniform(PLATFORM_MIN_HEIGHT, OBSTACLE_HEIGHT)
            return Platform(x=x, y=ground_top - height, width=PLATFORM_WIDTH, height=height)

        n = SPIKE_MIN_COUNT + int(self.rng.random() * (SPIKE_MAX_COUNT - SPIKE_MIN_COUNT + 1))
        base = self._uniform(SPIKE_MIN_BASE, OBSTACLE_HEIGHT)
        heights = tuple(base * self._uniform(SPIKE_SCALE_MIN, SPIKE_SCALE_MAX) for _ in range(n))
        height = max(heights)
        width = n * SPIKE_WIDTH + (n - 1) * SPIKE_GAP
        return SpikeGroup(x=x, y=ground_top - height, width=width, height=height,
                          spike_heights=heights)

    def next_spacing(self) -> float:
        return self._uniform(MIN_SPACING, MAX_SPACING)

    def generate_initial(self, ground_top: float) -> List[Obstacle]:
        """Spawn-and-advance from the right edge of the view out to INITIAL_SPAN views."""
        obstacles: List[Obstacle] = []
        x = float(self.view_width)
        while x < self.view_width * INITIAL_SPAN:
            obstacles.append(self.spawn_obstacle(x, ground_top))
            x += self.next_spacing()
        logger.debug("initial terrain: %d obstacles", len(obstacles))
        return obstacles

    def extend(self, obstacles: List[Obstacle], ground_top: float) -> bool:
        """Append exactly one obstacle once the furthest-right one is inside the view."""
        assert obstacles, "obstacle list must never be empty"
        last = obstacles[-1]
        if last.x >= self.view_width:
            return False
        spawned = self.spawn_obstacle(last.x + self.next_spacing(), ground_top)
        obstacles.append(spawned)
        logger.debug("spawned %s at x=%.1f", spawned.kind, spawned.x)
        return True

    def scroll_obstacles(self, obstacles: List[Obstacle], dx: float, ground_top: float):
        """Move left and re-anchor on the (oscillating) ground."""
        for o in obstacles:
            o.x -= dx
            o.y = ground_top - o.height

    def recycle_obstacles(self, obstacles: List[Obstacle], ground_top: float) -> int:
        """Evict obstacles whose right edge left the screen, then extend. Returns evictions."""
        # Widths differ per variant, so the head is not always the first to leave.
        kept = [o for o in obstacles if o.x + o.width >= 0]
        evicted = len(obstacles) - len(kept)
        obstacles[:] = kept
        if evicted:
            logger.debug("evicted %d obstacles", evicted)
        self.extend(obstacles, ground_top)
        return evicted

    # ---------- Ground ----------

    def initial_ground(self, ground_top: float) -> List[GroundSegment]:
        """Contiguous segments from one segment left of the view to one past its right edge."""
        segments: List[GroundSegment] = []
        x = -float(GROUND_SEGMENT_WIDTH)
        while x < self.view_width + GROUND_SEGMENT_WIDTH:
            segments.append(GroundSegment(x=x, y=ground_top))
            x += GROUND_SEGMENT_WIDTH
        return segments

    def scroll_ground(self, ground: List[GroundSegment], dx: float, ground_top: float):
        for seg in ground:
            seg.x -= dx
            seg.y = ground_top

    def recycle_ground(self, ground: List[GroundSegment], ground_top: float):
        assert ground, "ground must never be empty"
        while ground and ground[0].right < 0:
            ground.pop(0)
        last = ground[-1]
        if last.x < self.view_width:
            ground.append(GroundSegment(x=last.right, y=ground_top))

    # ---------- Decorations ----------

    def spawn_cats(self, count: int = FLYING_CAT_COUNT) -> List[FlyingCat]:
        return [self._new_cat() for _ in range(count)]

    def update_cats(self, cats: List[FlyingCat]):
        for i, cat in enumerate(cats):
            cat.x -= cat.speed
            cat.rotation += CAT_ROTATION_SPEED
            if cat.x + CAT_SIZE < 0:
                cats[i] = self._new_cat()

    def _new_cat(self) -> FlyingCat:
        return FlyingCat(
            x=self.view_width + self.rng.random() * self.view_width,
            y=self._uniform(CAT_MIN_Y, CAT_MAX_Y),
            rotation=0.0,
            speed=self._uniform(CAT_MIN_SPEED, CAT_MAX_SPEED),
        )

    def _uniform(self, lo: float, hi: float) -> float:
        # [lo, hi) like the rest of the generator, never rng.uniform's closed range
        return lo + self.rng.random() * (hi - lo)
