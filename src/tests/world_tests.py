from __future__ import annotations

import random
from dataclasses import replace

import pytest

from src.game.config import (
    INITIAL_SPEED, MAX_DT, OBSTACLE_INTERVAL_MIN, OBSTACLE_INTERVAL_MAX
)
from src.game.level import Obstacle
from src.game.player import Dino, DinoStatus
from src.game.world import (
    Cue, GameState, InputEvent, Mode, new_game, start_episode, tick
)

DT = 1.0 / 60.0


def running_state(**overrides) -> GameState:
    state = start_episode(new_game(), random.Random(0))
    return replace(state, **overrides)


# ------------------------ State machine ------------------------

def test_waiting_does_not_simulate():
    s = new_game(high_score=12)
    assert s.mode == Mode.WAITING
    for ev in ([], [InputEvent.JUMP], [InputEvent.DUCK_START]):
        assert tick(s, DT, ev, random.Random(1)) == s


def test_confirm_starts_a_fresh_episode():
    s = tick(new_game(high_score=12), DT, [InputEvent.CONFIRM], random.Random(1))
    assert s.mode == Mode.RUNNING
    assert s.dino == Dino.on_ground()
    assert s.obstacles == ()
    assert s.score == 0.0
    assert s.speed == INITIAL_SPEED
    assert s.high_score == 12
    assert s.elapsed_s == 0.0  # the reset tick itself does not simulate
    assert OBSTACLE_INTERVAL_MIN <= s.spawn_countdown_ms <= OBSTACLE_INTERVAL_MAX


def test_confirm_while_running_jumps_instead_of_resetting():
    s = running_state(score=40.0)
    s2 = tick(s, DT, [InputEvent.CONFIRM], random.Random(1))
    assert s2.mode == Mode.RUNNING
    assert s2.score > 40.0
    assert s2.dino.vy < 0.0
    assert s2.dino.status == DinoStatus.JUMPING
    assert Cue.JUMP in s2.cues


def test_jump_impulse_applied_before_gravity():
    s2 = tick(running_state(), DT, [InputEvent.JUMP], random.Random(1))
    assert s2.dino.vy == pytest.approx(-650.0 + 1800.0 * DT)


def test_duck_events_toggle_status():
    s = tick(running_state(), DT, [InputEvent.DUCK_START], random.Random(1))
    assert s.dino.status == DinoStatus.DUCKING
    assert Cue.DUCK in s.cues
    s = tick(s, DT, [InputEvent.DUCK_END], random.Random(1))
    assert s.dino.status == DinoStatus.RUNNING
    assert s.cues == ()


def test_unrecognized_events_are_ignored():
    s = running_state()
    a = tick(s, DT, ["mystery"], random.Random(5))
    b = tick(s, DT, [], random.Random(5))
    assert a == b


# ------------------------ Progression ------------------------

def test_score_and_speed_progress_with_time():
    s = tick(running_state(), 0.05, [], random.Random(1))
    assert s.score == pytest.approx(INITIAL_SPEED * 0.05 / 10.0)
    assert s.speed == pytest.approx(INITIAL_SPEED + 8.0 * 0.05)
    assert s.elapsed_s == pytest.approx(0.05)


def test_dt_is_clamped():
    s = tick(running_state(), 5.0, [], random.Random(1))
    assert s.elapsed_s == pytest.approx(MAX_DT)
    s = tick(running_state(), -1.0, [], random.Random(1))
    assert s.elapsed_s == 0.0
    assert s.score == 0.0


def test_milestone_cue_on_crossing_hundreds():
    s = tick(running_state(score=99.9), DT, [], random.Random(1))
    assert Cue.SCORE_MILESTONE in s.cues
    s = tick(s, DT, [], random.Random(1))
    assert Cue.SCORE_MILESTONE not in s.cues


def test_episode_invariants_hold_over_random_play():
    rng = random.Random(2024)
    inputs = random.Random(99)
    s = running_state()
    choices = [[], [], [], [InputEvent.JUMP], [InputEvent.DUCK_START], [InputEvent.DUCK_END]]
    for _ in range(3000):
        prev = s
        dt = inputs.choice([0.0, DT, DT, 0.03, 0.25])
        s = tick(prev, dt, inputs.choice(choices), rng)
        if s.mode != Mode.RUNNING:
            break
        assert s.score >= prev.score
        assert s.speed >= prev.speed
        assert s.dino.y <= s.dino.floor_y
        xs = [o.x for o in s.obstacles]
        assert xs == sorted(xs)                     # older obstacles are further left
        assert all(o.x > -o.width for o in s.obstacles)
        assert len(s.obstacles) <= len(prev.obstacles) + 1


def test_same_seed_same_trajectory():
    def run(seed):
        rng = random.Random(seed)
        s = tick(new_game(), DT, [InputEvent.CONFIRM], rng)
        for i in range(400):
            events = [InputEvent.JUMP] if i % 37 == 0 else []
            s = tick(s, DT, events, rng)
        return s

    assert run(7) == run(7)


# ------------------------ Collision / game over ------------------------

def test_collision_ends_the_episode_and_records_high_score():
    cactus = Obstacle.of_type("CACTUS_SMALL", x=60.0)
    s = running_state(obstacles=(cactus,), score=150.7, high_score=100, spawn_countdown_ms=5000.0)
    over = tick(s, 0.0, [], random.Random(1))
    assert over.mode == Mode.GAME_OVER
    assert over.high_score == 150
    assert over.new_record
    assert Cue.GAME_OVER in over.cues


def test_high_score_only_replaced_when_beaten():
    cactus = Obstacle.of_type("CACTUS_SMALL", x=60.0)
    s = running_state(obstacles=(cactus,), score=42.0, high_score=100, spawn_countdown_ms=5000.0)
    over = tick(s, 0.0, [], random.Random(1))
    assert over.mode == Mode.GAME_OVER
    assert over.high_score == 100
    assert not over.new_record


def test_jumping_clears_a_low_cactus():
    cactus = Obstacle.of_type("CACTUS_SMALL", x=60.0)
    airborne = Dino(y=100.0, vy=0.0, status=DinoStatus.JUMPING)
    s = running_state(dino=airborne, obstacles=(cactus,), spawn_countdown_ms=5000.0)
    assert tick(s, 0.0, [], random.Random(1)).mode == Mode.RUNNING


def test_game_over_freezes_until_confirm():
    cactus = Obstacle.of_type("CACTUS_LARGE", x=70.0)
    over = tick(running_state(obstacles=(cactus,), score=10.0, high_score=3,
                              spawn_countdown_ms=5000.0), 0.0, [], random.Random(1))
    frozen = tick(over, DT, [InputEvent.JUMP, InputEvent.DUCK_START], random.Random(1))
    assert frozen.mode == Mode.GAME_OVER
    assert frozen.obstacles == over.obstacles
    assert frozen.score == over.score
    assert frozen.cues == ()

    again = tick(frozen, DT, [InputEvent.CONFIRM], random.Random(1))
    assert again.mode == Mode.RUNNING
    assert again.high_score == 10
    assert again.obstacles == ()
    assert again.score == 0.0
    assert not again.new_record
