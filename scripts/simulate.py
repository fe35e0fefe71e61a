#!/usr/bin/env python3
"""
Headless session simulation.

Plays many seeded sessions of launch flows and reports how often the reels
spin, how often rush is entered and how long rush streaks last.

Usage:
    python -m scripts.simulate --sessions 1000 --launches 2000 --seed SIM_2025
    python -m scripts.simulate --sessions 1000 --launches 2000 --seed SIM_2025 --out out/sim.csv
"""
import argparse
import csv
import hashlib
import sys
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pachislo.config import build_config, settings
from pachislo.config_hash import get_config_hash
from pachislo.interface import ScriptedInput
from pachislo.logic.commands import LaunchBallFlowProducer, StartGame
from pachislo.logic.game import Game
from pachislo.logic.models import (
    GameState,
    LotteryResult,
    Normal,
    Rush,
    SlotOutput,
    Transition,
    Uninitialized,
)
from pachislo.logic.rng import SeededRNG


@dataclass
class SimulationStats:
    """Statistics accumulated during simulation."""
    sessions: int = 0
    launches: int = 0
    lotteries: int = 0
    lottery_wins: int = 0
    rush_lotteries: int = 0
    rush_entries: int = 0
    rush_continues: int = 0
    busted_sessions: int = 0
    final_balls_total: int = 0
    max_streak: int = 0
    streaks: Counter = field(default_factory=Counter)


class StatsOutput:
    """Game output that folds notifications into SimulationStats."""

    def __init__(self, stats: SimulationStats):
        self.stats = stats

    def transition(self, transition: Transition) -> None:
        before, after = transition.before, transition.after
        if isinstance(after, Rush) and not isinstance(before, Rush):
            self.stats.rush_entries += 1
        if isinstance(before, Rush) and not isinstance(after, Rush):
            self._close_streak(before.n)

    def start_game(self, state: GameState) -> None:
        pass

    def finish_game(self, state: GameState) -> None:
        # A streak cut short by finishing is closed by the finish transition
        pass

    def lottery_normal(self, result: LotteryResult, slot: SlotOutput) -> None:
        self.stats.lotteries += 1
        if result.is_win:
            self.stats.lottery_wins += 1

    def lottery_into_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        pass

    def lottery_rush(self, result: LotteryResult, slot: SlotOutput) -> None:
        self.stats.lotteries += 1
        self.stats.rush_lotteries += 1
        if result.is_win:
            self.stats.lottery_wins += 1

    def lottery_rush_continue(self, result: LotteryResult, slot: SlotOutput) -> None:
        if result.is_win:
            self.stats.rush_continues += 1

    def _close_streak(self, n: int) -> None:
        self.stats.streaks[n] += 1
        self.stats.max_streak = max(self.stats.max_streak, n)


def seed_to_int(seed_str: str) -> int:
    """Convert string seed to integer deterministically."""
    return int(hashlib.sha256(seed_str.encode()).hexdigest(), 16) % (2**31)


def balls_of(state: GameState) -> int:
    if isinstance(state, (Normal, Rush)):
        return state.balls
    return 0


def run_simulation(
    sessions: int,
    launches: int,
    seed_str: str,
    start_hole_probability: float | None = None,
    verbose: bool = False,
) -> SimulationStats:
    """
    Run headless simulation.

    Each session starts a game and launches up to `launches` balls, stopping
    early if the balls run out. The reels are treated as stopping instantly,
    so the spinning flag is cleared after every launch.
    """
    rng = SeededRNG(seed=seed_to_int(seed_str))
    stats = SimulationStats()
    output = StatsOutput(stats)
    game = Game(build_config(), ScriptedInput(), output, rng=rng)
    producer = LaunchBallFlowProducer(
        settings.start_hole_probability
        if start_hole_probability is None
        else start_hole_probability,
        rng,
    )

    progress_interval = max(1, sessions // 100)
    for session_index in range(sessions):
        if verbose and session_index % progress_interval == 0:
            pct = (session_index / sessions) * 100
            print(f"\rProgress: {pct:.1f}%", end="", flush=True)

        game.run_step_with_command(StartGame())
        for _ in range(launches):
            game.run_step_with_command(producer.produce())
            game.set_slot_spinning(False)
            stats.launches += 1
            if isinstance(game.state, Uninitialized):
                stats.busted_sessions += 1
                break
        else:
            stats.final_balls_total += balls_of(game.state)
            game.run_step_with_command("FinishGame")
        stats.sessions += 1

    if verbose:
        print("\rProgress: 100.0%")
    return stats


def generate_csv(seed_str: str, stats: SimulationStats, output_path: str) -> None:
    """Write a one-row summary CSV."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    row = {
        "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
        "config_hash": get_config_hash(),
        "seed": seed_str,
        "sessions": stats.sessions,
        "launches": stats.launches,
        "lotteries": stats.lotteries,
        "lottery_wins": stats.lottery_wins,
        "rush_entries": stats.rush_entries,
        "rush_continues": stats.rush_continues,
        "busted_sessions": stats.busted_sessions,
        "avg_final_balls": (
            stats.final_balls_total / (stats.sessions - stats.busted_sessions)
            if stats.sessions > stats.busted_sessions
            else 0
        ),
        "max_streak": stats.max_streak,
    }
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(row))
        writer.writeheader()
        writer.writerow(row)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run headless pachislo simulation")
    parser.add_argument(
        "--sessions",
        type=int,
        required=True,
        help="Number of sessions to simulate",
    )
    parser.add_argument(
        "--launches",
        type=int,
        required=True,
        help="Maximum balls launched per session",
    )
    parser.add_argument(
        "--seed",
        type=str,
        required=True,
        help="Seed string for reproducibility",
    )
    parser.add_argument(
        "--start-hole-probability",
        type=float,
        default=None,
        help="Override the configured start-hole probability",
    )
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output CSV path",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show progress",
    )
    args = parser.parse_args(argv)

    print(f"Running simulation: sessions={args.sessions}, launches={args.launches}, seed={args.seed}")
    print(f"Config hash: {get_config_hash()}")

    stats = run_simulation(
        sessions=args.sessions,
        launches=args.launches,
        seed_str=args.seed,
        start_hole_probability=args.start_hole_probability,
        verbose=args.verbose,
    )

    if args.out:
        generate_csv(args.seed, stats, args.out)
        print(f"Wrote {args.out}")

    print("\nSummary:")
    print(f"  Sessions: {stats.sessions} (busted: {stats.busted_sessions})")
    print(f"  Launches: {stats.launches}")
    if stats.launches:
        print(f"  Lotteries: {stats.lotteries} ({stats.lotteries / stats.launches * 100:.2f}% of launches)")
    if stats.lotteries:
        print(f"  Lottery wins: {stats.lottery_wins} ({stats.lottery_wins / stats.lotteries * 100:.2f}%)")
    print(f"  Rush entries: {stats.rush_entries}")
    print(f"  Rush continuations won: {stats.rush_continues}")
    print(f"  Max streak: {stats.max_streak}")
    for n in sorted(stats.streaks):
        print(f"    streak {n}: {stats.streaks[n]}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
