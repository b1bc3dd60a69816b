# src/game/player.py
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple
from .config import (
    GROUND_Y, GRAVITY, JUMP_FORCE, DINO_X,
    DINO_RUNNING_DIMENSIONS, DINO_DUCKING_DIMENSIONS
)


class DinoStatus(str, Enum):
    RUNNING = "running"
    JUMPING = "jumping"
    DUCKING = "ducking"


def dimensions(status: DinoStatus) -> Tuple[int, int]:
    """Hitbox (w, h) for a status. Only ducking changes the shape."""
    if status == DinoStatus.DUCKING:
        return DINO_DUCKING_DIMENSIONS
    return DINO_RUNNING_DIMENSIONS


def ground_y(status: DinoStatus) -> float:
    """Top-based y at which the dino stands on the ground."""
    return float(GROUND_Y - dimensions(status)[1])


def integrate(y: float, vy: float, dt: float, floor_y: float) -> Tuple[float, float]:
    """
    Semi-implicit Euler step under gravity, clamped to the ground.
    Returns (y, vy); vy is zeroed on the frame the dino lands.
    """
    vy = vy + GRAVITY * dt
    y = y + vy * dt
    if y >= floor_y:
        y = floor_y
        vy = 0.0
    return y, vy


@dataclass(frozen=True)
class Dino:
    """
    Player entity. x is fixed (DINO_X); only the vertical axis moves.
    - y grows downward (screen coords), top of the hitbox
    - vy < 0 means moving up
    """
    y: float
    vy: float
    status: DinoStatus = DinoStatus.RUNNING

    @classmethod
    def on_ground(cls) -> "Dino":
        return cls(y=ground_y(DinoStatus.RUNNING), vy=0.0, status=DinoStatus.RUNNING)

    @property
    def width(self) -> int:
        return dimensions(self.status)[0]

    @property
    def height(self) -> int:
        return dimensions(self.status)[1]

    @property
    def floor_y(self) -> float:
        return ground_y(self.status)

    @property
    def grounded(self) -> bool:
        return self.y >= self.floor_y

    def hitbox(self) -> Tuple[float, float, float, float]:
        return (float(DINO_X), self.y, float(self.width), float(self.height))

    def try_jump(self) -> Tuple["Dino", bool]:
        """Single upward impulse, only from the ground. Returns (dino, jumped)."""
        if not self.grounded:
            return self, False
        status = self.status if self.status == DinoStatus.DUCKING else DinoStatus.JUMPING
        return replace(self, vy=-JUMP_FORCE, status=status), True

    def start_duck(self) -> "Dino":
        # Only the hitbox changes; an airborne dino keeps its vy.
        return replace(self, status=DinoStatus.DUCKING)

    def end_duck(self) -> "Dino":
        if self.status != DinoStatus.DUCKING:
            return self
        # Check grounded against the running box, which stands higher than the ducking one.
        standing = ground_y(DinoStatus.RUNNING)
        status = DinoStatus.RUNNING if self.y >= standing else DinoStatus.JUMPING
        return replace(self, status=status)

    def update_physics(self, dt: float) -> "Dino":
        """Integrate vertical motion; landing from a jump reverts to running."""
        y, vy = integrate(self.y, self.vy, dt, self.floor_y)
        status = self.status
        if status == DinoStatus.JUMPING and y >= self.floor_y:
            status = DinoStatus.RUNNING
        return Dino(y=y, vy=vy, status=status)
