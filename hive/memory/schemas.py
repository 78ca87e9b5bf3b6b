"""Pydantic models for the persisted per-unit and per-room memory blobs.

These describe the exact key/value layout stored in the host's memory.
Field aliases keep the keys the host already uses (``type``, ``homeroom``).
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hive.core.enums import Role

# Role names written by older code that map onto a current role.
LEGACY_ROLE_NAMES: dict[str, str] = {
    "builder": Role.GATHERER.value,
}


# --- Goal ---

class UpgradeRecord(BaseModel):
    kind: Literal["upgrade"] = "upgrade"
    id: str


class HarvestRecord(BaseModel):
    kind: Literal["harvest"] = "harvest"
    id: str


class DeliverRecord(BaseModel):
    kind: Literal["deliver"] = "deliver"
    id: str


class BuildRecord(BaseModel):
    kind: Literal["build"] = "build"
    id: str


GoalRecord = Annotated[
    Union[UpgradeRecord, HarvestRecord, DeliverRecord, BuildRecord],
    Field(discriminator="kind"),
]


# --- Unit ---

class UnitRecord(BaseModel):
    """Memory of one unit, keyed by unit name."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    role: Role | None = Field(None, alias="type")
    target: GoalRecord | None = None
    working: bool | None = None
    home_room: str | None = Field(None, alias="homeroom")
    # node id -> first tick the node may be picked again
    excluded: dict[str, int] = Field(default_factory=dict)

    @field_validator("role", mode="before")
    @classmethod
    def _legacy_role(cls, value: object) -> object:
        if isinstance(value, str):
            return LEGACY_ROLE_NAMES.get(value, value)
        return value


# --- Room ---

class MineralRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    mineral_type: str | None = Field(None, alias="type")
    density: int | None = None


class RoomRecord(BaseModel):
    """Cached room layout, keyed by room name.  Never authoritative."""

    model_config = ConfigDict(extra="ignore")

    sources: list[str] = Field(default_factory=list)
    controller: str | None = None
    mineral: MineralRecord | None = None
    built_at: int = 0
