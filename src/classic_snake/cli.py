"""Command-line launcher for the Classic Snake server."""

from __future__ import annotations

import argparse
import logging
import sys

from classic_snake.config import GameConfig
from classic_snake.render import result_labels
from classic_snake.results import JsonFileStorage, MemoryStorage, ResultStore

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classic-snake",
        description="Classic Snake game server and result tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the game server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    serve_p.add_argument(
        "--results-file", type=str, default=None,
        help="JSON file holding recent results (in-memory if omitted).",
    )
    serve_p.add_argument("--grid-size", type=int, default=None)
    serve_p.add_argument("--initial-interval-ms", type=int, default=None)
    serve_p.add_argument(
        "--stop-on-collision", action="store_true",
        help="Return to the start screen after a collision.",
    )

    # --- results ---
    results_p = sub.add_parser("results", help="Show the last game scores.")
    results_p.add_argument(
        "--results-file", type=str, default=None,
        help="JSON file holding recent results (empty if omitted).",
    )
    results_p.add_argument("--config", type=str, default=None)

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()

    overrides: dict = {}
    flag_map = {
        "grid_size": "grid_size",
        "initial_interval_ms": "initial_interval_ms",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val
    if getattr(args, "stop_on_collision", False):
        overrides["restart_on_collision"] = False

    if overrides:
        d = config.to_dict()
        d.update(overrides)
        config = GameConfig(**d)
    return config


def _build_store(config: GameConfig, results_file: str | None) -> ResultStore:
    storage = (
        JsonFileStorage(results_file) if results_file else MemoryStorage()
    )
    return ResultStore(
        storage, key=config.results_key, limit=config.results_limit,
    )


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from classic_snake.server.app import create_app

    config = _load_config(args)
    store = _build_store(config, args.results_file)
    app = create_app(config=config, store=store)
    logger.info("Serving on %s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def _run_results(args: argparse.Namespace) -> int:
    config = _load_config(args)
    store = _build_store(config, args.results_file)
    for label in result_labels(store.load_recent()):
        print(label)  # noqa: T201
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
        "serve": _run_serve,
        "results": _run_results,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
