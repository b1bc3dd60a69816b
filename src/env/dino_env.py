# src/env/dino_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any, List
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import GAME_WIDTH, GAME_HEIGHT
from src.game.player import DinoStatus
from src.game.render import draw_world
from src.game.world import Cue, GameState, InputEvent, Mode, new_game, start_episode, tick
from src.env.observations import OBS_LOW, OBS_HIGH, build_observation

NOOP, JUMP, DUCK = 0, 1, 2


class DinoEnv(gym.Env):
    """
    Dino runner Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), fixed dt.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Actions: 0 = NOOP, 1 = JUMP, 2 = DUCK (held for as long as it is chosen).
    - Observation: shape (8,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        self.sim_fps = 60
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        self.action_space = gym.spaces.Discrete(3)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.state: Optional[GameState] = None
        self.rng: Optional[random.Random] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.jumps: int = 0

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy:
        # - An explicit seed rebuilds the spawn rng for strict reproducibility.
        # - reset() without a seed keeps drawing from the current rng, so
        #   reset(seed=s) followed by plain resets is still deterministic.
        if seed is not None or self.rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            self.rng = random.Random(int(seed))
            self.current_seed = int(seed)

        self.state = start_episode(new_game(), self.rng)
        self.timestep = 0
        self.jumps = 0

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None and self.rng is not None, "Call reset() first"

        events: List[InputEvent] = self._events_for(int(action))

        for _ in range(self.frame_skip):
            self.state = tick(self.state, self.dt, events, self.rng)
            self.jumps += sum(1 for c in self.state.cues if c == Cue.JUMP)
            events = []  # edge-triggered: only the first sub-step sees the press
            if self.state.mode == Mode.GAME_OVER:
                break

        alive = self.state.mode == Mode.RUNNING
        reward = 1.0 if alive else -1.0

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": self.state.display_score,
            "speed": self.state.speed,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "grounded": self.state.dino.grounded,
            "jumps": self.jumps,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _events_for(self, action: int) -> List[InputEvent]:
        assert self.state is not None
        ducking = self.state.dino.status == DinoStatus.DUCKING
        events: List[InputEvent] = []
        if action == DUCK:
            if not ducking:
                events.append(InputEvent.DUCK_START)
            return events
        if ducking:
            events.append(InputEvent.DUCK_END)
        if action == JUMP:
            events.append(InputEvent.JUMP)
        return events

    def _get_obs(self) -> np.ndarray:
        assert self.state is not None
        return build_observation(self.state)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((GAME_WIDTH, GAME_HEIGHT))
                pygame.display.set_caption("Dino Game — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((GAME_WIDTH, GAME_HEIGHT))
            self.font = pygame.font.SysFont("jetbrainsmono", 16)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()

        draw_world(self.screen, self.state, self.font)

        if self.render_mode == "human":
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        # (H, W, 3) uint8 array
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
