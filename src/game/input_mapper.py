# src/game/input_mapper.py
from __future__ import annotations
from typing import Iterable, List

import pygame

from .world import InputEvent

CONFIRM_KEYS = (pygame.K_SPACE, pygame.K_UP)
DUCK_KEYS = (pygame.K_DOWN,)


class InputMapper:
    """
    Turns raw pygame events into a queue of game InputEvents.
    The queue is drained once per tick so inputs land at a fixed point of the step.
    Key repeat is never enabled, so KEYDOWN is already edge-triggered.
    """

    def __init__(self) -> None:
        self._queue: List[InputEvent] = []
        self._duck_down = False

    def feed(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in CONFIRM_KEYS:
                self._queue.append(InputEvent.CONFIRM)
            elif event.key in DUCK_KEYS and not self._duck_down:
                self._duck_down = True
                self._queue.append(InputEvent.DUCK_START)
        elif event.type == pygame.KEYUP:
            if event.key in DUCK_KEYS and self._duck_down:
                self._duck_down = False
                self._queue.append(InputEvent.DUCK_END)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # SDL mirrors taps as mouse clicks; FINGERDOWN already covers those
            if not getattr(event, "touch", False):
                self._queue.append(InputEvent.CONFIRM)
        elif event.type == pygame.FINGERDOWN:
            self._queue.append(InputEvent.CONFIRM)

    def feed_all(self, events: Iterable[pygame.event.Event]) -> None:
        for event in events:
            self.feed(event)

    def drain(self) -> List[InputEvent]:
        # "Pressed since last tick" semantics.
        out, self._queue = self._queue, []
        return out
