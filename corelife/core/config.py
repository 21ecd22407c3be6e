from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from corelife.exceptions import ConfigurationError


class SimulationConfig(BaseModel):
    """Configuration options controlling the CPU and its core."""

    core_size: int = Field(default=100_000, gt=0, description="Number of core addresses")
    mutation_probability: int = Field(
        default=1,
        ge=0,
        le=100,
        description="Per-instruction chance (percent) of a copy mutation",
    )
    swap_probability: int = Field(
        default=0,
        ge=0,
        le=100,
        description="Per-tick chance (percent) of swapping two nearby cells",
    )
    lifetime: int = Field(
        default=1000, gt=0, description="Instructions a process may execute before it dies"
    )
    bomb_range: int = Field(default=100, gt=0, description="Reach of a CPN NOP bomb")
    bomb_before_bias: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Probability that a NOP bomb lands before the attacker",
    )
    swap_range: int = Field(
        default=100, gt=0, description="Maximum distance between swapped cells"
    )
    placement_attempts: int = Field(
        default=10, gt=0, description="Random tries per spawn-site search and per NOP bomb"
    )
    seed: int | None = Field(default=None, description="Seed for the CPU's random source")

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    @classmethod
    def build(cls, **values: Any) -> "SimulationConfig":
        """Validate *values*, reporting failures as :class:`ConfigurationError`."""
        try:
            return cls(**values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid simulation configuration: {exc}") from exc
