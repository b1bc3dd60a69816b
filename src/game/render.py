# src/game/render.py
from __future__ import annotations
from typing import Optional

import pygame

from .config import (
    GAME_WIDTH, GAME_HEIGHT, GROUND_Y, DINO_X,
    COLOR_BG, COLOR_FG, COLOR_GROUND, COLOR_DINO, COLOR_OBSTACLE,
    COLOR_DANGER, COLOR_OVERLAY
)
from .world import GameState, Mode


def dino_rect(state: GameState) -> pygame.Rect:
    d = state.dino
    return pygame.Rect(DINO_X, int(d.y), d.width, d.height)


def draw_world(surf: pygame.Surface, state: GameState,
               font: Optional[pygame.font.Font] = None) -> None:
    """Draw one frame. Read-only with respect to the game state."""
    surf.fill(COLOR_BG)

    pygame.draw.line(surf, COLOR_GROUND, (0, GROUND_Y), (GAME_WIDTH, GROUND_Y), 2)

    for o in state.obstacles:
        b = o.box
        pygame.draw.rect(surf, COLOR_OBSTACLE, pygame.Rect(int(b.x), int(b.y), int(b.w), int(b.h)))

    color = COLOR_DANGER if state.mode == Mode.GAME_OVER else COLOR_DINO
    pygame.draw.rect(surf, color, dino_rect(state))

    if font is None:
        return

    hud = f"HI {state.high_score:05d}   {state.display_score:05d}"
    txt = font.render(hud, True, COLOR_FG)
    surf.blit(txt, (GAME_WIDTH - txt.get_width() - 12, 8))

    if state.mode == Mode.RUNNING:
        return

    panel = pygame.Surface((GAME_WIDTH, GAME_HEIGHT), pygame.SRCALPHA)
    panel.fill(COLOR_OVERLAY)
    surf.blit(panel, (0, 0))

    title = "Game Over" if state.mode == Mode.GAME_OVER else "Dino Game"
    if state.mode == Mode.GAME_OVER and state.new_record:
        title = f"New record: {state.high_score}"
    t1 = font.render(title, True, COLOR_FG)
    t2 = font.render("Press Space or Up Arrow to start", True, COLOR_FG)
    surf.blit(t1, ((GAME_WIDTH - t1.get_width()) // 2, GAME_HEIGHT // 2 - t1.get_height() - 4))
    surf.blit(t2, ((GAME_WIDTH - t2.get_width()) // 2, GAME_HEIGHT // 2 + 4))
