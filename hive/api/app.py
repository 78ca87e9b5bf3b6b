"""FastAPI application factory.

The lifespan builds one EngineManager per app, attaches it to
``app.state`` and stops its thread on shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hive.api.dependencies import attach_engine
from hive.api.engine_manager import EngineManager
from hive.api.routes import api_router
from hive.config import SimulationConfig
from hive.utils.logging import setup_logging

logger = logging.getLogger(__name__)

_DESCRIPTION = """\
Inspection and control of a running colony simulation.

Every owned unit keeps a small memory record (role, goal, working flag,
home room) and advances its goal one tick at a time. These endpoints read
the snapshot published after the last tick; only `/control` and `/speed`
change anything.
"""

_TAGS = [
    {"name": "State", "description": "Units, room objects and the event feed from the latest snapshot."},
    {"name": "Memory", "description": "Unit and room records as the last tick left them."},
    {"name": "Control", "description": "Start, pause, resume, single-step, reset and speed."},
    {"name": "Config", "description": "The simulation configuration in use."},
]


def create_app(config: SimulationConfig | None = None, autostart: bool = True) -> FastAPI:
    """Build the app around a fresh simulation.

    With ``autostart=False`` the world is generated but no tick runs until
    ``POST /api/v1/control/start`` (or ``/step``).
    """
    cfg = config or SimulationConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(cfg.log_level)
        manager = EngineManager(cfg)
        attach_engine(app, manager)
        if autostart:
            manager.start()
        logger.info("API ready (seed=%d, rooms=%d, autostart=%s)", cfg.world_seed, cfg.num_rooms, autostart)
        try:
            yield
        finally:
            manager.stop()
            attach_engine(app, None)
            logger.info("API shut down.")

    app = FastAPI(
        title="Hive Colony Simulation",
        description=_DESCRIPTION,
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=_TAGS,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.include_router(api_router)
    return app
