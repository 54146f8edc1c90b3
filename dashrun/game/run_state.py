# dashrun/game/run_state.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple
from .audio import AudioSignal, NullAudio
from .collision import first_lethal_hit
from .config import WIDTH, GAME_SPEED, BOUNCE_PITCH
from .level import (
    FlyingCat, GroundOscillator, GroundSegment, LevelGen, Obstacle,
)
from .player import Player, CONTACT_BOUNCE_LEFT, CONTACT_BOUNCE_RIGHT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerPose:
    x: float
    y: float
    vy: float
    rotation: float
    is_jumping: bool
    can_double_jump: bool
    on_platform: bool


@dataclass(frozen=True)
class Snapshot:
    """Detached copy of a run for renderers and observers; edits never reach the RunState."""
    player: PlayerPose
    obstacles: Tuple[Obstacle, ...]
    ground: Tuple[GroundSegment, ...]
    cats: Tuple[FlyingCat, ...]
    ground_offset: float
    ground_top: float
    score: int
    game_speed: float
    is_game_over: bool

    @property
    def display_score(self) -> int:
        return self.score // 10


class RunState:
    """
    Owns every entity of a run and advances it one tick at a time.

    Running -> GameOver happens once, on a lethal hit; only reset_run()
    goes back. While over, tick() and jump() do nothing.
    """

    def __init__(self, seed: Optional[int] = None, *, view_width: int = WIDTH,
                 audio: Optional[AudioSignal] = None):
        self.view_width = view_width
        self.audio: AudioSignal = audio if audio is not None else NullAudio()
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.terrain = LevelGen(self.rng, view_width)
        self._init_entities()

    def _init_entities(self):
        self.oscillator = GroundOscillator()
        top = self.oscillator.ground_top
        self.player = Player.at_start(top)
        self.ground: List[GroundSegment] = self.terrain.initial_ground(top)
        self.obstacles: List[Obstacle] = self.terrain.generate_initial(top)
        self.cats: List[FlyingCat] = self.terrain.spawn_cats()
        self.score = 0
        self.game_speed = GAME_SPEED
        self.is_game_over = False

    def reset_run(self, seed: Optional[int] = None):
        """
        Back to start-of-run values. With a seed the terrain is reproducible;
        without one it continues the current random stream (fresh layout).
        """
        if seed is not None:
            self.seed = seed
            self.rng.seed(seed)
        self._init_entities()
        logger.info("run reset (seed=%s)", self.seed)

    def is_over(self) -> bool:
        return self.is_game_over

    def jump(self) -> bool:
        """Jump intent from the input port. Returns True if it had an effect."""
        if self.is_game_over:
            return False
        pitch = self.player.try_jump()
        if pitch is None:
            return False
        self.audio.jumped(pitch)
        return True

    def tick(self) -> Snapshot:
        if self.is_game_over:
            return self.snapshot()

        p = self.player
        p.update_physics()

        self.oscillator.step()
        top = self.oscillator.ground_top
        self.terrain.scroll_ground(self.ground, self.game_speed, top)

        self.terrain.scroll_obstacles(self.obstacles, self.game_speed, top)
        self.terrain.update_cats(self.cats)

        contact = p.resolve_contacts(self.ground, self.obstacles)
        if contact in (CONTACT_BOUNCE_LEFT, CONTACT_BOUNCE_RIGHT):
            self.audio.jumped(BOUNCE_PITCH)

        self.terrain.recycle_ground(self.ground, top)
        self.terrain.recycle_obstacles(self.obstacles, top)

        self.score += 1

        hit = first_lethal_hit(p.x, p.y, self.obstacles)
        if hit is not None:
            self.is_game_over = True
            logger.info("game over: hit %s at x=%.1f, score=%d", hit.kind, hit.x, self.score)
            self.audio.collided()

        return self.snapshot()

    def snapshot(self) -> Snapshot:
        p = self.player
        return Snapshot(
            player=PlayerPose(
                x=p.x, y=p.y, vy=p.vy, rotation=p.rotation,
                is_jumping=p.is_jumping, can_double_jump=p.can_double_jump,
                on_platform=p.on_platform,
            ),
            obstacles=tuple(replace(o) for o in self.obstacles),
            ground=tuple(replace(s) for s in self.ground),
            cats=tuple(replace(c) for c in self.cats),
            ground_offset=self.oscillator.offset,
            ground_top=self.oscillator.ground_top,
            score=self.score,
            game_speed=self.game_speed,
            is_game_over=self.is_game_over,
        )
