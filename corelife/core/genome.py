from __future__ import annotations

import hashlib
from typing import Sequence

from loguru import logger
from pydantic import BaseModel, Field

from corelife.core.instructions import Instruction, format_instructions

__all__ = ["GenomeRecord", "GenomeRegistry", "genome_hash"]


def genome_hash(instructions: Sequence[Instruction]) -> str:
    """SHA-256 over the ordered instruction sequence.

    Each instruction is encoded with its operand and terminated, so both
    order and length change the digest.
    """
    digest = hashlib.sha256()
    for instruction in instructions:
        digest.update(str(instruction).encode("utf-8"))
        digest.update(b"\x00")
    return digest.hexdigest()


class GenomeRecord(BaseModel):
    """Read-only view of one registered genome."""

    key: str = Field(description="SHA-256 digest of the instruction sequence")
    instructions: list[str] = Field(description="Instruction sequence, textual form")
    population: int = Field(ge=0, description="Live processes running this genome")

    def __str__(self) -> str:
        return f"{self.key[:12]}: {self.population}, [{';'.join(self.instructions)}]"


class GenomeRegistry:
    """Distinct instruction sequences ever observed, with live population counts.

    Entries are never removed; a genome whose last carrier dies stays in the
    registry with a population of zero.
    """

    def __init__(self) -> None:
        self._genomes: dict[str, tuple[Instruction, ...]] = {}
        self._population: dict[str, int] = {}

    def register(self, instructions: Sequence[Instruction]) -> str:
        key = genome_hash(instructions)
        if key not in self._genomes:
            self._genomes[key] = tuple(instructions)
            self._population[key] = 0
            logger.debug(
                "[GenomeRegistry] New genome {} {}",
                key[:12],
                format_instructions(instructions),
            )
        return key

    def increment(self, key: str) -> int:
        self._population[key] = self._population.get(key, 0) + 1
        return self._population[key]

    def decrement(self, key: str) -> int:
        """Decrease the population of *key*; unknown keys and zero counts are left alone."""
        count = self._population.get(key)
        if count is None:
            return 0
        if count == 0:
            logger.warning("[GenomeRegistry] Population of {} already zero", key[:12])
            return 0
        self._population[key] = count - 1
        return count - 1

    def population(self, key: str) -> int:
        return self._population.get(key, 0)

    def sequence(self, key: str) -> tuple[Instruction, ...] | None:
        return self._genomes.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._genomes

    def __len__(self) -> int:
        return len(self._genomes)

    def total_population(self) -> int:
        return sum(self._population.values())

    def snapshot(self) -> list[GenomeRecord]:
        """Every genome ever seen, most populous first."""
        records = [
            GenomeRecord(
                key=key,
                instructions=[str(i) for i in instructions],
                population=self._population.get(key, 0),
            )
            for key, instructions in self._genomes.items()
        ]
        records.sort(key=lambda r: r.population, reverse=True)
        return records

    def living(self) -> list[GenomeRecord]:
        return [record for record in self.snapshot() if record.population > 0]
