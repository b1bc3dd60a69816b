from __future__ import annotations

import csv
from pathlib import Path

import numpy as np

from experiments.sanity_rollout import main, tiny_heuristic_policy_init
from src.env.dino_env import JUMP, NOOP


def test_heuristic_jumps_only_when_close_and_grounded():
    act = tiny_heuristic_policy_init(lead_s=0.25)
    speed_n = 300.0 / 900.0
    far = np.array([0, 0, 0, speed_n, 0.5, 0.5, 1.0, 1.0], dtype=np.float32)
    near = far.copy(); near[4] = 50.0 / 800.0
    airborne = near.copy(); airborne[0] = 0.3
    assert act(far) == NOOP
    assert act(near) == JUMP
    assert act(airborne) == NOOP


def test_rollouts_write_csv_and_traces(tmp_path: Path):
    main(["--policies", "both", "--seeds", "3,4", "--steps", "40",
          "--out-dir", str(tmp_path), "--save-traces"])

    with (tmp_path / "episodes.csv").open(newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    assert {r["policy_name"] for r in rows} == {"random", "heuristic"}

    actions = np.load(tmp_path / "traces" / "heuristic" / "3_actions.npy")
    assert actions.ndim == 1 and 0 < len(actions) <= 40
    meta = (tmp_path / "traces" / "heuristic" / "3_meta.txt").read_text(encoding="utf-8")
    assert "frame_skip=4" in meta
