# experiments/sanity_rollout.py
"""
Baseline rollouts for DinoEnv: a random policy and a one-rule "jump when
the next cactus is close" policy, over fixed seeds.

Writes <out-dir>/episodes.csv and, with --save-traces, the action sequence of
every episode (traces/<policy>/<seed>_actions.npy + _meta.txt) so that
experiments.replay can reproduce it exactly.

  python -m experiments.sanity_rollout --policies both --save-traces
  python -m experiments.sanity_rollout --policies heuristic --seeds 7,8,9 --save-obs --save-traces
"""

from __future__ import annotations
import argparse
import csv
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np

from src.env.dino_env import DinoEnv, JUMP, NOOP
from src.env.observations import SPEED_NORM_MAX
from src.game.config import FPS, GAME_WIDTH

Policy = Callable[[np.ndarray], int]


def random_policy_init(action_seed: int) -> Policy:
    rng = np.random.RandomState(action_seed)
    return lambda _obs: int(rng.randint(0, 3))


def tiny_heuristic_policy_init(lead_s: float = 0.22) -> Policy:
    """Jump from the ground once the next obstacle is `lead_s` seconds away."""
    def act(obs: np.ndarray) -> int:
        height, speed_n, gap_n, width_n = obs[0], obs[3], obs[4], obs[5]
        if height > 0.0 or width_n == 0.0:
            return NOOP
        return JUMP if gap_n * GAME_WIDTH <= speed_n * SPEED_NORM_MAX * lead_s else NOOP
    return act


POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": lambda seed: random_policy_init(10_000 + seed),
    "heuristic": lambda seed: tiny_heuristic_policy_init(),
}


@dataclass
class Episode:
    policy_name: str
    seed: int
    frame_skip: int
    decisions: int = 0
    return_sum: float = 0.0
    score: int = 0
    jumps: int = 0
    terminated: bool = False
    truncated: bool = False


def run_one_episode(policy_name: str, seed: int, frame_skip: int, steps_limit: int,
                    trace_dir: Path | None = None, save_obs: bool = False) -> Episode:
    env = DinoEnv(frame_skip=frame_skip)
    policy = POLICIES[policy_name](seed)
    ep = Episode(policy_name, seed, frame_skip)
    actions: List[int] = []

    try:
        obs, _ = env.reset(seed=seed)
        observations = [obs]
        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(a)
            obs, r, ep.terminated, ep.truncated, info = env.step(a)
            observations.append(obs)
            ep.decisions += 1
            ep.return_sum += float(r)
            ep.score, ep.jumps = info["score"], info["jumps"]
            if ep.terminated or ep.truncated:
                break
    finally:
        env.close()

    if trace_dir is not None:
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        if save_obs:
            np.save(trace_dir / f"{seed}_obs.npy", np.stack(observations).astype(np.float32))
        (trace_dir / f"{seed}_meta.txt").write_text(
            f"seed={seed}\nframe_skip={frame_skip}\npolicy={policy_name}\nsteps_limit={steps_limit}",
            encoding="utf-8",
        )
    return ep


def main(argv=None):
    ap = argparse.ArgumentParser(description="Random / heuristic baselines for DinoEnv")
    ap.add_argument("--policies", default="both", choices=["random", "heuristic", "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated seeds (default 101..120)")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--steps", type=int, default=10_000, help="Cap on decisions per episode")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    ap.add_argument("--save-obs", action="store_true", help="With --save-traces, also keep observations")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    names = list(POLICIES) if args.policies == "both" else [args.policies]

    csv_path = out_dir / "episodes.csv"
    fields = list(Episode.__dataclass_fields__) + ["decision_hz"]
    new_file = not csv_path.exists()
    print(f"{names} x {len(seeds)} seeds, frame_skip={args.frame_skip} -> {csv_path}")

    with csv_path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fields)
        if new_file:
            writer.writeheader()
        for name in names:
            trace_dir = out_dir / "traces" / name if args.save_traces else None
            for seed in seeds:
                ep = run_one_episode(name, seed, args.frame_skip, args.steps, trace_dir, args.save_obs)
                writer.writerow({**asdict(ep), "decision_hz": FPS / args.frame_skip})
                print(f"[{name}] seed={seed} decisions={ep.decisions} score={ep.score} "
                      f"jumps={ep.jumps} {'crash' if ep.terminated else 'timeout' if ep.truncated else 'cap'}")


if __name__ == "__main__":
    main()
