from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from corelife.exceptions import InstructionDecodeError

__all__ = [
    "Opcode",
    "Instruction",
    "Cell",
    "NOP",
    "SPW",
    "CPN",
    "format_instructions",
]


class Opcode(str, Enum):
    NOP = "NOP"  # no operation
    JMP = "JMP"  # relative jump within the process
    SPW = "SPW"  # spawn a copy of the process
    CPN = "CPN"  # copy a NOP onto a neighbour ("NOP bomb")


@dataclass(frozen=True)
class Instruction:
    """A single core cell value: an opcode and, for JMP only, a signed operand.

    A JMP whose operand is ``None`` is malformed. It still occupies a cell
    and executes as a no-op.
    """

    opcode: Opcode
    operand: Optional[int] = None

    @classmethod
    def nop(cls) -> "Instruction":
        return NOP

    @classmethod
    def jmp(cls, offset: int) -> "Instruction":
        return cls(Opcode.JMP, int(offset))

    @classmethod
    def spw(cls) -> "Instruction":
        return SPW

    @classmethod
    def cpn(cls) -> "Instruction":
        return CPN

    @classmethod
    def parse(cls, text: str) -> "Instruction":
        """Decode the textual form (``"NOP"``, ``"JMP -3"``).

        Raises:
            InstructionDecodeError: if the mnemonic is not a known opcode.
        """
        tokens = text.split()
        if not tokens:
            raise InstructionDecodeError("Empty instruction text")

        try:
            opcode = Opcode(tokens[0].upper())
        except ValueError:
            raise InstructionDecodeError(f"Unknown opcode: {tokens[0]!r}") from None

        if opcode is not Opcode.JMP:
            return cls(opcode)

        if len(tokens) < 2:
            return cls(Opcode.JMP, None)
        try:
            return cls(Opcode.JMP, int(tokens[1]))
        except ValueError:
            return cls(Opcode.JMP, None)

    @property
    def is_nop(self) -> bool:
        return self.opcode is Opcode.NOP

    @property
    def is_malformed(self) -> bool:
        return self.opcode is Opcode.JMP and self.operand is None

    def __str__(self) -> str:
        if self.opcode is Opcode.JMP:
            return f"JMP {self.operand if self.operand is not None else '?'}"
        return self.opcode.value


NOP = Instruction(Opcode.NOP)
SPW = Instruction(Opcode.SPW)
CPN = Instruction(Opcode.CPN)

# A core cell holds an instruction or ``None`` for an empty address.
Cell = Optional[Instruction]


def format_instructions(cells: Iterable[Cell]) -> str:
    """Render a sequence of cells as ``[NOP;JMP -2;SPW]``; empty cells print as ``_``."""
    return "[" + ";".join("_" if c is None else str(c) for c in cells) + "]"
