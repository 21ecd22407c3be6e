from __future__ import annotations

from typing import Sequence

from corelife.core.instructions import Cell, Instruction
from corelife.exceptions import ConfigurationError, OutOfRangeError

__all__ = ["Core"]


class Core:
    """Fixed-size circular memory shared by every process.

    Each address holds an :class:`Instruction` or ``None`` (empty). Raw
    addressing through :meth:`get_instruction` / :meth:`set_instruction` is
    strict; only the bulk operations wrap around the end of the core.
    """

    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise ConfigurationError(f"Core size must be a positive integer, got {size!r}")
        self._cells: list[Cell] = [None] * size

    def size(self) -> int:
        return len(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def _check(self, address: int) -> None:
        if not 0 <= address < len(self._cells):
            raise OutOfRangeError(
                f"Invalid core address {address} (core size {len(self._cells)})"
            )

    def get_instruction(self, address: int) -> Cell:
        self._check(address)
        return self._cells[address]

    def set_instruction(self, address: int, value: Cell) -> None:
        self._check(address)
        self._cells[address] = value

    def is_empty(self, address: int) -> bool:
        return self.get_instruction(address) is None

    def occupied(self) -> int:
        """Number of non-empty cells."""
        return sum(1 for cell in self._cells if cell is not None)

    def _span(self, start_address: int, length: int) -> list[Cell]:
        size = len(self._cells)
        return [self._cells[(start_address + offset) % size] for offset in range(length)]

    def is_free(self, start_address: int, length: int) -> bool:
        """True if every cell of the circular span is empty."""
        return all(cell is None for cell in self._span(start_address, length))

    def is_nop_sled(self, start_address: int, length: int) -> bool:
        """True if every cell of the circular span holds a NOP."""
        return all(
            cell is not None and cell.is_nop
            for cell in self._span(start_address, length)
        )

    def place(self, instructions: Sequence[Instruction], start_address: int) -> bool:
        """Write *instructions* from *start_address*, wrapping around the core.

        All-or-nothing: succeeds only if every target cell is empty or a NOP,
        otherwise leaves the core untouched and returns False.

        Raises:
            OutOfRangeError: if *start_address* is not a valid address.
        """
        self._check(start_address)
        size = len(self._cells)
        if len(instructions) > size:
            return False

        for offset in range(len(instructions)):
            cell = self._cells[(start_address + offset) % size]
            if cell is not None and not cell.is_nop:
                return False

        for offset, instruction in enumerate(instructions):
            self._cells[(start_address + offset) % size] = instruction
        return True

    def remove(self, start_address: int, length: int) -> None:
        """Clear a circular span. Stale or invalid spans are ignored."""
        size = len(self._cells)
        if not 0 <= start_address < size or not 0 <= length <= size:
            return
        for offset in range(length):
            self._cells[(start_address + offset) % size] = None

    def read_range(self, start_address: int, length: int) -> list[Cell]:
        """Circular read of *length* cells; ``[]`` for an invalid span."""
        size = len(self._cells)
        if not 0 <= start_address < size or not 0 <= length <= size:
            return []
        return [self._cells[(start_address + offset) % size] for offset in range(length)]

    def swap(self, first: int, second: int) -> None:
        self._check(first)
        self._check(second)
        self._cells[first], self._cells[second] = self._cells[second], self._cells[first]

    def snapshot(self) -> tuple[Cell, ...]:
        return tuple(self._cells)
