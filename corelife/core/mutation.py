from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import random
from typing import Sequence

from corelife.core.instructions import Instruction, Opcode
from corelife.exceptions import ConfigurationError

__all__ = ["MutationKind", "MutationResult", "Mutator"]


class MutationKind(str, Enum):
    SUBSTITUTE = "substitute"
    DELETE = "delete"
    INSERT = "insert"


@dataclass
class MutationResult:
    """Outcome of mutating one copy."""

    instructions: list[Instruction] = field(default_factory=list)
    substitutions: int = 0
    deletions: int = 0
    insertions: int = 0

    @property
    def mutated(self) -> bool:
        return bool(self.substitutions or self.deletions or self.insertions)


class Mutator:
    """Copy-time mutation of instruction sequences.

    Each instruction of a copy is mutated independently with probability
    ``probability`` percent. A mutation is a substitution, a deletion or an
    insertion (the instruction is duplicated), chosen uniformly. The source
    sequence is never modified.
    """

    def __init__(self, probability: int, rng: random.Random) -> None:
        if isinstance(probability, bool) or not isinstance(probability, int):
            raise ConfigurationError(
                f"Mutation probability must be an integer percentage, got {probability!r}"
            )
        if not 0 <= probability <= 100:
            raise ConfigurationError(
                f"Mutation probability must be within [0, 100], got {probability}"
            )
        self.probability = probability
        self._rng = rng

    def _hit(self) -> bool:
        return self._rng.randrange(100) < self.probability

    def mutate(self, source: Sequence[Instruction]) -> MutationResult:
        if self.probability == 0:
            return MutationResult(instructions=list(source))

        result = MutationResult()
        copy = result.instructions
        # indices of substituted JMPs; operands depend on the final copy length
        pending_jumps: list[int] = []

        for instruction in source:
            if not self._hit():
                copy.append(instruction)
                continue

            kind = self._rng.choice(list(MutationKind))
            if kind is MutationKind.SUBSTITUTE:
                opcode = self._rng.choice(
                    [op for op in Opcode if op is not instruction.opcode]
                )
                if opcode is Opcode.JMP:
                    pending_jumps.append(len(copy))
                copy.append(Instruction(opcode))
                result.substitutions += 1
            elif kind is MutationKind.DELETE:
                result.deletions += 1
            else:
                copy.extend((instruction, instruction))
                result.insertions += 1

        for index in pending_jumps:
            copy[index] = Instruction.jmp(self.jump_offset(index, len(copy)))
        return result

    def jump_offset(self, index: int, length: int) -> int:
        """Random JMP operand that keeps the target inside ``[0, length)``.

        Direction is uniform; the magnitude is uniform over the instructions
        available in that direction. The other direction is used when the
        chosen one has no room.
        """
        forward = length - 1 - index
        backward = index
        if forward <= 0 and backward <= 0:
            return 0

        go_forward = self._rng.random() < 0.5
        if go_forward and forward <= 0:
            go_forward = False
        elif not go_forward and backward <= 0:
            go_forward = True

        if go_forward:
            return self._rng.randint(1, forward)
        return -self._rng.randint(1, backward)
