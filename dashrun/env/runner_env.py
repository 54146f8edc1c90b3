# dashrun/env/runner_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from ..game.config import WIDTH, HEIGHT, FPS
from ..game.render import Renderer
from ..game.run_state import RunState
from .observations import build_observation, OBS_LOW, OBS_HIGH


class RunnerEnv(gym.Env):
    """
    Endless-runner Gymnasium environment (vector observations).
    - One simulation tick per frame, 60 frames per second of game time.
    - Agent acts every `frame_skip` ticks (default 4) -> 15 decisions/sec.
    - Actions: 0 = NOOP, 1 = JUMP (double jump when already airborne).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    NOOP = 0
    JUMP = 1

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        self.state: Optional[RunState] = None
        self.timestep: int = 0

        # Rendering
        self.renderer: Optional[Renderer] = None
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # An explicit seed goes straight to the terrain for strict reproducibility,
        # otherwise draw one from the env's generator.
        if seed is None:
            seed = int(self.np_random.integers(0, 2**32 - 1))
        if self.state is None:
            self.state = RunState(seed)
        else:
            self.state.reset_run(seed)
        self.timestep = 0

        obs = build_observation(self.state.snapshot())
        info = {"seed": self.state.seed, "score": self.state.score}
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "call reset() before step()"

        jumped = False
        if int(action) == self.JUMP:
            jumped = self.state.jump()

        died = False
        snap = None
        for _ in range(self.frame_skip):
            snap = self.state.tick()
            if snap.is_game_over:
                died = True
                break

        reward = -1.0 if died else 1.0

        self.timestep += 1
        terminated = died
        truncated = (self.time_limit_decisions is not None) and \
            (self.timestep >= self.time_limit_decisions) and not terminated

        info = {
            "score": snap.score,
            "display_score": snap.display_score,
            "timestep": self.timestep,
            "seed": self.state.seed,
            "jumped": jumped,
            "on_platform": snap.player.on_platform,
        }

        if self.render_mode == "human":
            self.render()

        return build_observation(snap), reward, terminated, bool(truncated), info

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("dashrun - env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.renderer = Renderer()

        self.renderer.draw(self.screen, self.state.snapshot())

        if self.render_mode == "human":
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
