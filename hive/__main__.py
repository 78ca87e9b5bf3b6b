"""Entry point: ``python -m hive``.

Supports two modes:
  - ``python -m hive``            → Launch the FastAPI inspection server
  - ``python -m hive cli``        → Headless run, memory written as JSON
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hive colony simulation")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--rooms", type=int, default=1)
    srv.add_argument("--max-units", type=int, default=5)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=300)
    cli.add_argument("--rooms", type=int, default=1)
    cli.add_argument("--max-units", type=int, default=5)
    cli.add_argument("--memory", type=str, default="memory.json", help="Where to write the final memory")
    cli.add_argument("--resume", action="store_true", help="Start from the memory file if it exists")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from hive.api.app import create_app
    from hive.config import SimulationConfig

    config = SimulationConfig(
        world_seed=args.seed,
        num_rooms=args.rooms,
        max_units=args.max_units,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from hive.config import SimulationConfig
    from hive.core.goals import describe
    from hive.engine.world_loop import WorldLoop
    from hive.memory.codec import decode_unit
    from hive.memory.store import MemoryStore
    from hive.utils.logging import setup_logging

    config = SimulationConfig(
        world_seed=args.seed,
        max_ticks=args.ticks,
        num_rooms=args.rooms,
        max_units=args.max_units,
        log_level=args.log_level,
        memory_file=args.memory,
    )
    setup_logging(config.log_level)

    store = MemoryStore.load(config.memory_file) if args.resume else MemoryStore()
    loop = WorldLoop.build(config, store)
    loop.run()

    store.save(config.memory_file)
    logger.info("Done. %d units alive at tick %d.", len(loop.world.units), loop.world.tick)
    for room in loop.world.rooms:
        controller = loop.world.controller(room)
        logger.info(
            "Room %s: controller progress %d, %d units",
            room, controller.progress if controller else 0, len(loop.world.units_in(room)),
        )
    for unit in loop.world.my_units():
        memory = decode_unit(store.get_unit(unit.name), unit.name)
        role = memory.role.value if memory.role else "-"
        logger.info("  %-8s %-9s %-22s energy=%d", unit.name, role, describe(memory.goal), unit.store.energy)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
