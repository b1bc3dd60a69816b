# src/game/level.py
from __future__ import annotations
import random
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple
from .config import (
    GAME_WIDTH, GROUND_Y, INITIAL_SPEED,
    OBSTACLE_INTERVAL_MIN, OBSTACLE_INTERVAL_MAX, OBSTACLE_CONFIGS
)

# Catalog order is fixed so a seeded rng always picks the same types.
OBSTACLE_TYPES: Tuple[str, ...] = tuple(OBSTACLE_CONFIGS)


@dataclass(frozen=True)
class Box:
    """Axis-aligned hitbox, top-left anchored."""
    x: float
    y: float
    w: float
    h: float


def boxes_overlap(a: Box, b: Box) -> bool:
    """Open-interval AABB test: touching edges do not count as a hit."""
    return (a.x < b.x + b.w and a.x + a.w > b.x and
            a.y < b.y + b.h and a.y + a.h > b.y)


@dataclass(frozen=True)
class Obstacle:
    """A ground obstacle scrolling left. Its base sits on GROUND_Y."""
    x: float
    width: int
    height: int
    type: str

    @classmethod
    def of_type(cls, type_name: str, x: float = float(GAME_WIDTH)) -> "Obstacle":
        w, h = OBSTACLE_CONFIGS[type_name]
        return cls(x=float(x), width=w, height=h, type=type_name)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def box(self) -> Box:
        return Box(self.x, float(GROUND_Y - self.height), float(self.width), float(self.height))


def scroll_obstacles(obstacles: Sequence[Obstacle], dx: float) -> Tuple[Obstacle, ...]:
    """
    Move every obstacle left by dx and drop the ones fully off-screen.
    Order (spawn order) is preserved.
    """
    moved = (replace(o, x=o.x - dx) for o in obstacles)
    return tuple(o for o in moved if o.x > -o.width)


def spawn_interval_ms(rng: random.Random, speed: float) -> float:
    """
    Next spawn delay. Scaled by the speed ratio so obstacles keep roughly
    the same spacing in pixels as the game speeds up.
    """
    interval = rng.uniform(OBSTACLE_INTERVAL_MIN, OBSTACLE_INTERVAL_MAX)
    return interval / (speed / INITIAL_SPEED)


def spawn_obstacle(rng: random.Random) -> Obstacle:
    return Obstacle.of_type(rng.choice(OBSTACLE_TYPES))


def update_and_generate(
    obstacles: Sequence[Obstacle],
    countdown_ms: float,
    speed: float,
    dt: float,
    rng: random.Random,
) -> Tuple[Tuple[Obstacle, ...], float, Optional[Obstacle]]:
    """
    Scroll, despawn and (maybe) spawn for one tick.
    Returns (obstacles, countdown_ms, spawned). At most one obstacle spawns per
    call however far the countdown overshoots.
    """
    kept = scroll_obstacles(obstacles, speed * dt)

    countdown_ms -= dt * 1000.0
    spawned: Optional[Obstacle] = None
    if countdown_ms <= 0.0:
        spawned = spawn_obstacle(rng)
        kept = kept + (spawned,)
        countdown_ms = spawn_interval_ms(rng, speed)

    return kept, countdown_ms, spawned
