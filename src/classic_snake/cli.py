"""Command-line tools for Classic Snake."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classic-snake",
        description="Classic Snake headless simulation and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Autoplay games on virtual time and report scores.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--games", type=int, default=10)
    sim_p.add_argument(
        "--policy", type=str, default="greedy", choices=["greedy", "random"],
    )
    sim_p.add_argument("--max-ticks", type=int, default=5_000)
    sim_p.add_argument("--grid-size", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=0)

    # --- config ---
    cfg_p = sub.add_parser(
        "config", help="Write the default game config to a JSON file.",
    )
    cfg_p.add_argument("output", help="Destination path.")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from classic_snake.config import GameConfig
    from classic_snake.simulate import run_simulation

    try:
        config = GameConfig.load(args.config) if args.config else GameConfig()
        if args.grid_size is not None:
            d = config.to_dict()
            d["grid_size"] = args.grid_size
            center = max(1, args.grid_size // 2)
            d["start"] = [center, center]
            config = GameConfig.from_dict(d)
    except (ValueError, TypeError) as exc:
        print(f"classic-snake: invalid config: {exc}", file=sys.stderr)  # noqa: T201
        return 2

    result = run_simulation(
        games=args.games,
        policy=args.policy,
        max_ticks=args.max_ticks,
        config=config,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from classic_snake.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``classic-snake`` CLI."""
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
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
