"""Entry point: ``python -m hexarena``.

Supports two modes:
  - ``python -m hexarena``            → Launch the FastAPI viewer server
  - ``python -m hexarena cli``        → Headless run, logs a summary
"""

from __future__ import annotations

import argparse
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hexarena.config import SimulationConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Deterministic hex-grid auto-battler")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI viewer server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    _add_world_args(srv)

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation")
    cli.add_argument("--ticks", type=int, default=2000)
    _add_world_args(cli)

    return parser


def _add_world_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--seed", type=int, default=42)
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=10)
    p.add_argument("--entities", type=int, default=10)
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])


def _config_from_args(args: argparse.Namespace, **extra) -> SimulationConfig:
    from hexarena.config import SimulationConfig

    return SimulationConfig(
        seed=args.seed,
        map_width=args.width,
        map_height=args.height,
        entity_count=args.entities,
        log_level=args.log_level,
        **extra,
    )


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from hexarena.api.app import create_app

    app = create_app(_config_from_args(args))
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from hexarena.engine.simulator import Simulator
    from hexarena.engine.world_loop import WorldLoop
    from hexarena.utils.logging import setup_logging

    config = _config_from_args(args, max_ticks=args.ticks)
    setup_logging(config.log_level)

    sim = Simulator(config)
    loop = WorldLoop(config, sim)
    loop.run()

    survivors = [e for e in sim.entities if e.alive]
    for e in survivors:
        logger.info(
            "Survivor: entity %d at %s with %d/%d hp",
            e.id, sim.to_point(e.current_cell), e.health, e.max_health,
        )
    logger.info("Final step %d, state hash %s", sim.step_index, sim.state_hash())


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])

    if args.command == "serve":
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
