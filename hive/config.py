"""Simulation configuration with sensible defaults."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable configuration for the simulation run."""

    # World
    world_seed: int = 42
    room_size: int = 50
    num_rooms: int = 1

    # Timing
    max_ticks: int = 1500
    tick_budget_ms: float = 50.0

    # Units
    unit_capacity: int = 50
    harvest_power: int = 2          # energy extracted per harvest intent
    build_power: int = 5            # progress added per build intent
    upgrade_power: int = 1          # energy spent per upgrade intent

    # Sources
    source_energy: int = 3000
    source_regen_ticks: int = 300

    # Spawning
    spawn_capacity: int = 300
    spawn_regen: int = 1            # energy regained per tick while below capacity
    spawn_time: int = 12            # ticks a new unit spends materializing
    max_units: int = 5
    unit_cost: int = 200

    # Pathing
    path_max_ops: int = 2000
    plain_cost: int = 1
    swamp_cost: int = 5
    occupied_cost: int = 255        # cost-matrix value that blocks a tile for one search

    # Memory
    snapshot_ttl: int = 100         # ticks before a cached room record is rebuilt
    node_exclusion_ticks: int = 5   # 0 disables the unreachable-node exclusion list

    # Room generation
    wall_density: float = 0.12
    swamp_density: float = 0.08
    sources_per_room: int = 2
    sites_per_room: int = 2
    site_progress_total: int = 100

    # Logging
    log_level: str = "INFO"
    memory_file: str = "memory.json"
