"""Route dependencies: the EngineManager lives on ``app.state.engine``."""

from __future__ import annotations

from fastapi import FastAPI, Request

from hive.api.engine_manager import EngineManager


def attach_engine(app: FastAPI, manager: EngineManager | None) -> None:
    app.state.engine = manager


def engine_of(app: FastAPI) -> EngineManager:
    manager = getattr(app.state, "engine", None)
    if manager is None:
        raise RuntimeError("EngineManager not attached, the app lifespan has not run.")
    return manager


def get_engine_manager(request: Request) -> EngineManager:
    return engine_of(request.app)
