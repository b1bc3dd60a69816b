# src/game/world.py
"""
Game state machine and the per-frame simulation step.

    state = new_game(high_score)                 # waiting
    state = tick(state, dt, events, rng)         # once per frame

`tick` never mutates its input; every counter the loop needs (spawn
countdown, elapsed time) lives on GameState so any driver (pygame loop,
gym env, tests) can run it headless and deterministically given a seeded rng.
"""
from __future__ import annotations
import math
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Tuple
from .config import (
    MAX_DT, INITIAL_SPEED, SPEED_INCREASE_RATE, SCORE_MILESTONE,
    OBSTACLE_INTERVAL_MIN, OBSTACLE_INTERVAL_MAX
)
from .level import Box, Obstacle, boxes_overlap, update_and_generate
from .player import Dino, DinoStatus


class Mode(str, Enum):
    WAITING = "waiting"
    RUNNING = "running"
    GAME_OVER = "gameOver"


class InputEvent(str, Enum):
    JUMP = "jump"
    DUCK_START = "duckStart"
    DUCK_END = "duckEnd"
    CONFIRM = "confirm"


class Cue(str, Enum):
    JUMP = "jump"
    DUCK = "duck"
    SCORE_MILESTONE = "score-milestone"
    GAME_OVER = "gameOver"


@dataclass(frozen=True)
class GameState:
    mode: Mode
    dino: Dino
    obstacles: Tuple[Obstacle, ...]
    score: float
    speed: float
    high_score: int
    spawn_countdown_ms: float
    elapsed_s: float = 0.0
    cues: Tuple[Cue, ...] = ()     # emitted by the tick that produced this state
    new_record: bool = False       # game over with a beaten high_score (kept until reset)

    @property
    def display_score(self) -> int:
        return int(math.floor(self.score))


def clamp_dt(dt: float) -> float:
    if dt < 0.0:
        return 0.0
    return min(dt, MAX_DT)


def new_game(high_score: int = 0) -> GameState:
    """Initial waiting screen. Nothing moves until a confirm input."""
    return GameState(
        mode=Mode.WAITING,
        dino=Dino.on_ground(),
        obstacles=(),
        score=0.0,
        speed=INITIAL_SPEED,
        high_score=int(high_score),
        spawn_countdown_ms=float(OBSTACLE_INTERVAL_MAX),
    )


def start_episode(state: GameState, rng: random.Random) -> GameState:
    """Full reset into RUNNING; only the high score carries over."""
    return GameState(
        mode=Mode.RUNNING,
        dino=Dino.on_ground(),
        obstacles=(),
        score=0.0,
        speed=INITIAL_SPEED,
        high_score=state.high_score,
        spawn_countdown_ms=rng.uniform(OBSTACLE_INTERVAL_MIN, OBSTACLE_INTERVAL_MAX),
    )


def dino_hits_any(dino: Dino, obstacles: Iterable[Obstacle]) -> bool:
    me = Box(*dino.hitbox())
    return any(boxes_overlap(me, o.box) for o in obstacles)


def _apply_inputs(dino: Dino, events: Iterable[InputEvent]) -> Tuple[Dino, Tuple[Cue, ...]]:
    cues = []
    for ev in events:
        if ev in (InputEvent.CONFIRM, InputEvent.JUMP):
            dino, jumped = dino.try_jump()
            if jumped:
                cues.append(Cue.JUMP)
        elif ev == InputEvent.DUCK_START:
            was_ducking = dino.status == DinoStatus.DUCKING
            dino = dino.start_duck()
            if not was_ducking:
                cues.append(Cue.DUCK)
        elif ev == InputEvent.DUCK_END:
            dino = dino.end_duck()
    return dino, tuple(cues)


def tick(state: GameState,
         dt: float,
         events: Iterable[InputEvent] = (),
         rng: random.Random | None = None) -> GameState:
    """
    Advance the game by dt seconds.

    Outside RUNNING only CONFIRM does anything (starts a fresh episode; that
    tick does not simulate). While RUNNING the order is fixed:
    inputs -> kinematics -> scroll/spawn -> score/speed -> collision.
    """
    if rng is None:
        rng = random.Random()
    events = tuple(events)

    if state.mode != Mode.RUNNING:
        if InputEvent.CONFIRM in events:
            return start_episode(state, rng)
        if state.cues:
            return replace(state, cues=())
        return state

    dt = clamp_dt(dt)

    # Inputs first so a jump impulse is integrated this very frame
    dino, cues = _apply_inputs(state.dino, events)
    cues = list(cues)

    dino = dino.update_physics(dt)

    obstacles, countdown, _ = update_and_generate(
        state.obstacles, state.spawn_countdown_ms, state.speed, dt, rng
    )

    score = state.score + state.speed * dt / 10.0
    speed = state.speed + SPEED_INCREASE_RATE * dt
    if int(score // SCORE_MILESTONE) > int(state.score // SCORE_MILESTONE):
        cues.append(Cue.SCORE_MILESTONE)

    nxt = GameState(
        mode=Mode.RUNNING,
        dino=dino,
        obstacles=obstacles,
        score=score,
        speed=speed,
        high_score=state.high_score,
        spawn_countdown_ms=countdown,
        elapsed_s=state.elapsed_s + dt,
        cues=tuple(cues),
    )

    if dino_hits_any(dino, obstacles):
        return game_over(nxt)
    return nxt


def game_over(state: GameState) -> GameState:
    final = state.display_score
    beaten = final > state.high_score
    return replace(
        state,
        mode=Mode.GAME_OVER,
        high_score=max(state.high_score, final),
        new_record=beaten,
        cues=state.cues + (Cue.GAME_OVER,),
    )
