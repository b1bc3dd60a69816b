# src/tests/observations_unit.py
import random
from dataclasses import replace

import numpy as np

from src.env.observations import OBS_HIGH, OBS_LOW, OBS_SIZE, build_observation
from src.game.level import Obstacle
from src.game.player import Dino, DinoStatus
from src.game.world import new_game, start_episode


def _state(**kw):
    return replace(start_episode(new_game(), random.Random(0)), **kw)


def _in_bounds(obs):
    return bool(np.all(obs >= OBS_LOW) and np.all(obs <= OBS_HIGH))


def test_empty_track_observation():
    obs = build_observation(_state())
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert _in_bounds(obs)
    height, vy, ducking, speed, gap1, w1, h1, gap2 = obs
    assert height == 0.0 and vy == 0.0 and ducking == 0.0
    assert 0.0 < speed < 1.0
    # "nothing ahead" sentinels
    assert gap1 == 1.0 and gap2 == 1.0 and w1 == 0.0 and h1 == 0.0


def test_nearest_obstacles_come_first():
    obs_list = (
        Obstacle.of_type("CACTUS_SMALL", x=0.0),     # already behind the dino
        Obstacle.of_type("CACTUS_LARGE", x=250.0),
        Obstacle.of_type("CACTUS_SMALL", x=650.0),
    )
    obs = build_observation(_state(obstacles=obs_list))
    assert _in_bounds(obs)
    assert obs[4] == np.float32(200.0 / 800.0)
    assert obs[5] == 1.0                              # widest type
    assert obs[7] == np.float32(600.0 / 800.0)


def test_airborne_and_ducking_features():
    up = build_observation(_state(dino=Dino(y=83.0, vy=-650.0, status=DinoStatus.JUMPING)))
    assert _in_bounds(up)
    assert up[0] > 0.5
    assert up[1] == -1.0

    low = build_observation(_state(dino=Dino(y=200.0, vy=0.0, status=DinoStatus.DUCKING)))
    assert low[0] == 0.0 and low[2] == 1.0


def test_values_stay_in_bounds_late_in_a_run():
    s = _state(speed=5000.0, dino=Dino(y=-400.0, vy=3000.0, status=DinoStatus.JUMPING))
    assert _in_bounds(build_observation(s))
