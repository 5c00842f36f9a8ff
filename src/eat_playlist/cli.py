"""CLI launcher for headless EatPlaylist sessions."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eat-playlist",
        description="EatPlaylist headless simulation and benchmark tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Run a headless session with random headings.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file; explicit flags override its values.",
    )
    sim_p.add_argument("--ticks", type=int, default=100)
    sim_p.add_argument("--rows", type=int, default=None)
    sim_p.add_argument("--columns", type=int, default=None)
    sim_p.add_argument("--cell-size", type=float, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--track", action="append", dest="tracks", default=None,
        help="Content token for one playlist track (repeatable).",
    )
    sim_p.add_argument(
        "--turn-probability", type=float, default=0.2,
        help="Chance per tick of requesting a random heading.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure engine tick throughput.",
    )
    bench_p.add_argument("--ticks", type=int, default=10_000)
    bench_p.add_argument("--rows", type=int, default=20)
    bench_p.add_argument("--columns", type=int, default=12)
    bench_p.add_argument("--playlist-size", type=int, default=50)
    bench_p.add_argument("--seed", type=int, default=42)

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    import numpy as np

    from eat_playlist.config import SessionConfig
    from eat_playlist.session import GameSession
    from eat_playlist.snake import Direction

    config = (
        SessionConfig.load(args.config)
        if args.config else SessionConfig()
    )

    overrides: dict = {}
    flag_map = {
        "rows": "rows",
        "columns": "columns",
        "cell_size": "cell_size",
        "seed": "seed",
        "tracks": "playlist",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        d["playlist"] = tuple(d["playlist"])
        config = SessionConfig(**d)

    session = GameSession(config)
    rng = np.random.default_rng(config.seed)
    directions = list(Direction)
    state = session.get_state()
    for _ in range(args.ticks):
        if rng.random() < args.turn_probability:
            session.set_heading(directions[int(rng.integers(len(directions)))])
        state = session.step()

    logger.info(
        "Simulated %d ticks; snake length %d.",
        args.ticks, len(state["snake"]),
    )
    print(json.dumps(state, indent=2))  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from eat_playlist.benchmark import benchmark_ticks

    result = benchmark_ticks(
        num_ticks=args.ticks,
        rows=args.rows,
        columns=args.columns,
        playlist_size=args.playlist_size,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``eat-playlist`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
