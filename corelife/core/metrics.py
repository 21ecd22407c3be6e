from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from corelife.core.genome import GenomeRecord


class DeathReason(str, Enum):
    INVALID_ADDRESS = "invalid_address"  # pointer walked into empty memory
    MALFORMED_INSTRUCTION = "malformed_instruction"
    LIFETIME_EXCEEDED = "lifetime_exceeded"


class TickReport(BaseModel):
    """What happened during a single tick."""

    tick: int = Field(description="1-based index of the tick")
    executed: int = Field(default=0, description="Instructions dispatched")
    births: int = Field(default=0, description="New processes created")
    parasitic_spawns: int = Field(default=0, description="Copies written into NOP sleds")
    dropped_spawns: int = Field(default=0, description="Spawns with no room found")
    deaths: dict[DeathReason, int] = Field(default_factory=dict)
    bombs: int = Field(default=0, description="Cells overwritten by CPN")
    malformed_jumps: int = Field(default=0, description="JMPs skipped for a bad operand")
    mutations: int = Field(default=0, description="Individual copy mutations applied")
    swapped: bool = Field(default=False, description="Whether the perturbation swapped cells")

    def record_death(self, reason: DeathReason) -> None:
        self.deaths[reason] = self.deaths.get(reason, 0) + 1

    @property
    def total_deaths(self) -> int:
        return sum(self.deaths.values())


class SimulationMetrics(BaseModel):
    """Running totals plus a between-ticks snapshot of the population."""

    ticks: int = Field(default=0, description="Total number of ticks run")
    live_processes: int = Field(default=0, description="Processes currently alive")
    occupied_cells: int = Field(default=0, description="Non-empty core cells")
    births: int = Field(default=0, description="Total processes created by SPW")
    parasitic_spawns: int = Field(default=0, description="Total NOP-sled infections")
    dropped_spawns: int = Field(default=0, description="Total spawns with no room found")
    deaths: dict[DeathReason, int] = Field(default_factory=dict)
    bombs: int = Field(default=0, description="Total cells overwritten by CPN")
    swaps: int = Field(default=0, description="Total perturbation swaps")
    mutations: int = Field(default=0, description="Total copy mutations applied")
    genomes: list[GenomeRecord] = Field(default_factory=list)

    def record_tick(self, report: TickReport) -> None:
        """Fold a tick report into the running totals."""
        self.ticks += 1
        self.births += report.births
        self.parasitic_spawns += report.parasitic_spawns
        self.dropped_spawns += report.dropped_spawns
        self.bombs += report.bombs
        self.mutations += report.mutations
        self.swaps += int(report.swapped)
        for reason, count in report.deaths.items():
            self.deaths[reason] = self.deaths.get(reason, 0) + count

    @property
    def total_deaths(self) -> int:
        return sum(self.deaths.values())
