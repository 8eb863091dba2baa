from __future__ import annotations

import argparse
from pathlib import Path

from wandering_trades.main import simulate


def test_simulate_prints_offers_for_each_trader(tmp_path: Path, capsys) -> None:
    args = argparse.Namespace(config=str(tmp_path / "config.yml"), spawns=2, seed=3, ticks=5)

    simulate(args)

    out = capsys.readouterr().out
    assert "Trader #1" in out
    assert "Trader #2" in out
    assert "<- " in out
    assert (tmp_path / "config.yml").exists()
