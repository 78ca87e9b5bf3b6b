"""POST /api/v1/control/{action} and /api/v1/speed - drive the engine."""

from __future__ import annotations

from enum import Enum

from fastapi import APIRouter, Depends, Query

from hive.api.dependencies import get_engine_manager
from hive.api.engine_manager import EngineManager, EngineState
from hive.api.schemas import ControlResponse

router = APIRouter()


class ControlAction(str, Enum):
    start = "start"
    pause = "pause"
    resume = "resume"
    step = "step"
    reset = "reset"


# Engine states each action is valid from; anything else is a no-op or an error.
_VALID_FROM: dict[ControlAction, frozenset[EngineState]] = {
    ControlAction.start: frozenset({EngineState.STOPPED}),
    ControlAction.pause: frozenset({EngineState.RUNNING}),
    ControlAction.resume: frozenset({EngineState.PAUSED}),
    ControlAction.step: frozenset(EngineState),
    ControlAction.reset: frozenset(EngineState),
}


def _reply(manager: EngineManager, status: str, message: str) -> ControlResponse:
    snapshot = manager.get_snapshot()
    return ControlResponse(
        status=status,
        message=message,
        tick=snapshot.tick if snapshot else 0,
        state=manager.state.value,
    )


@router.post("/control/{action}", response_model=ControlResponse)
def control(
    action: ControlAction,
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    current = manager.state
    if current not in _VALID_FROM[action]:
        if action is ControlAction.start:
            return _reply(manager, "noop", "Already running.")
        return _reply(manager, "error", f"Cannot {action.value} while {current.value}.")

    match action:
        case ControlAction.start:
            manager.start()
        case ControlAction.pause:
            manager.pause()
        case ControlAction.resume:
            manager.resume()
        case ControlAction.step:
            manager.step()
        case ControlAction.reset:
            manager.reset()
    return _reply(manager, "ok", f"{action.value.capitalize()} done.")


@router.post("/speed", response_model=ControlResponse)
def set_speed(
    tps: float = Query(20.0, gt=0.5, le=100.0, description="Ticks per second"),
    manager: EngineManager = Depends(get_engine_manager),
) -> ControlResponse:
    manager.tick_rate = 1.0 / tps
    return _reply(manager, "ok", f"Speed set to {tps:.1f} tps.")
