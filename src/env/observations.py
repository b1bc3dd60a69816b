# src/env/observations.py
from __future__ import annotations
from typing import List, Tuple
import numpy as np

from src.game.config import (
    GAME_WIDTH, GROUND_Y, DINO_X, JUMP_FORCE, INITIAL_SPEED,
    DINO_RUNNING_DIMENSIONS, OBSTACLE_CONFIGS
)
from src.game.player import DinoStatus
from src.game.world import GameState

OBS_SIZE = 8
# Speed normalization ceiling: 3x the starting speed is reached after ~75 s.
SPEED_NORM_MAX = 3.0 * INITIAL_SPEED
_MAX_OBS_W = max(w for w, _ in OBSTACLE_CONFIGS.values())
_MAX_OBS_H = max(h for _, h in OBSTACLE_CONFIGS.values())

OBS_LOW = np.zeros(OBS_SIZE, dtype=np.float32)
OBS_LOW[1] = -1.0
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def _upcoming(state: GameState) -> List[Tuple[float, int, int]]:
    """(gap_px, w, h) for obstacles whose right edge is still ahead of the dino."""
    out = []
    for o in state.obstacles:
        if o.right > DINO_X:
            out.append((o.x - DINO_X, o.width, o.height))
    return out


def build_observation(state: GameState) -> np.ndarray:
    """
    Returns a fixed (8,) float32 vector:
      [ height_above_ground, vy_norm, ducking, speed_norm,
        gap1_norm, w1_norm, h1_norm, gap2_norm ]
    - height_above_ground in [0,1] (0 = standing, 1 = GROUND_Y px up)
    - vy_norm in [-1,1], scaled by JUMP_FORCE
    - gaps normalized by GAME_WIDTH; sentinel 1.0 when there is no obstacle
    """
    d = state.dino
    height = _clamp01((d.floor_y - d.y) / float(GROUND_Y - DINO_RUNNING_DIMENSIONS[1]))
    vy = max(-1.0, min(1.0, d.vy / JUMP_FORCE))
    ducking = 1.0 if d.status == DinoStatus.DUCKING else 0.0
    speed = _clamp01(state.speed / SPEED_NORM_MAX)

    ahead = _upcoming(state)
    gap1, w1, h1 = 1.0, 0.0, 0.0
    gap2 = 1.0
    if ahead:
        g, w, h = ahead[0]
        gap1 = _clamp01(g / GAME_WIDTH)
        w1 = _clamp01(w / _MAX_OBS_W)
        h1 = _clamp01(h / _MAX_OBS_H)
    if len(ahead) > 1:
        gap2 = _clamp01(ahead[1][0] / GAME_WIDTH)

    feats = [height, vy, ducking, speed, gap1, w1, h1, gap2]
    return np.asarray(feats, dtype=np.float32)
