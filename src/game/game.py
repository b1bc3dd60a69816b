# src/game/game.py
import sys, argparse, random, logging
from pathlib import Path
from typing import List
import pygame
from pygame import K_ESCAPE, K_m
from .config import GAME_WIDTH, GAME_HEIGHT, FPS, MAX_DT
from .audio import SoundBoard
from .input_mapper import InputMapper
from .render import draw_world
from .storage import JsonFileStore, load_high_score, save_high_score
from .world import GameState, InputEvent, Mode, new_game, tick

logger = logging.getLogger(__name__)

DUCK_EVENTS = (InputEvent.DUCK_START, InputEvent.DUCK_END)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Dino runner")
    p.add_argument("--seed", type=int, default=None,
                   help="Seed for obstacle spawning. Omit for a random run.")
    p.add_argument("--fps", type=int, default=FPS)
    p.add_argument("--high-score-file", type=Path, default=None,
                   help="JSON file holding the high score (default: ~/.dino_runner/highscore.json)")
    p.add_argument("--mute", action="store_true", help="Start with sound off (M toggles)")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


class Session:
    """
    Glue between the pure tick and the outside world: persists the high score
    and plays cues. Ticks are suspended while the window is unfocused; duck
    presses and releases that arrive meanwhile are replayed on resume.
    """

    def __init__(self, store, sounds: SoundBoard, rng: random.Random):
        self.store = store
        self.sounds = sounds
        self.rng = rng
        self.paused = False
        self._held: List[InputEvent] = []
        self.state: GameState = new_game(load_high_score(store))

    def step(self, dt: float, events) -> GameState:
        if self.paused:
            self._held.extend(ev for ev in events if ev in DUCK_EVENTS)
            return self.state
        if self._held:
            events = self._held + list(events)
            self._held = []
        prev = self.state
        self.state = tick(prev, dt, events, self.rng)
        self.sounds.play_all(self.state.cues)

        entered_game_over = prev.mode != Mode.GAME_OVER and self.state.mode == Mode.GAME_OVER
        if entered_game_over:
            logger.info("Game over: score=%d high=%d", self.state.display_score, self.state.high_score)
            if self.state.new_record:
                save_high_score(self.store, self.state.high_score)
        return self.state


def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.display.set_caption("Dino Game")
    screen = pygame.display.set_mode((GAME_WIDTH, GAME_HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 18)

    rng = random.Random(args.seed)
    session = Session(JsonFileStore(args.high_score_file), SoundBoard(muted=args.mute), rng)
    inputs = InputMapper()

    while True:
        dt = clock.tick(args.fps) / 1000.0
        if dt > MAX_DT:  # clamp stalls (tick clamps too)
            dt = MAX_DT

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN and event.key == K_ESCAPE:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN and event.key == K_m:
                session.sounds.toggle_mute()
                continue
            if event.type == pygame.WINDOWFOCUSLOST:
                session.paused = True
                continue
            if event.type == pygame.WINDOWFOCUSGAINED:
                session.paused = False
                clock.tick()  # discard time spent in the background
                continue
            inputs.feed(event)

        state = session.step(dt, inputs.drain())

        draw_world(screen, state, font)
        pygame.display.flip()


if __name__ == "__main__":
    run()
