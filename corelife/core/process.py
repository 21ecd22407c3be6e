from __future__ import annotations

__all__ = ["Process"]


class Process:
    """Execution context of one living organism.

    A process is a view over a contiguous (circularly wrapped) span of the
    core: ``start_address`` and ``length`` locate its instructions, ``ptr`` is
    the offset of the next one to execute. Instruction contents live in the
    core only. Two processes are equal when they share a start address.
    """

    __slots__ = ("_start_address", "_length", "_ptr", "_exec_count", "genome")

    def __init__(self, start_address: int, length: int, genome: str | None = None):
        if start_address < 0:
            raise ValueError(f"Invalid start address {start_address}")
        if length < 1:
            raise ValueError(f"Invalid process length {length}")

        self._start_address = start_address
        self._length = length
        self._ptr = 0
        self._exec_count = 0
        # registry key this process is counted under
        self.genome = genome

    @property
    def start_address(self) -> int:
        return self._start_address

    @property
    def length(self) -> int:
        return self._length

    @property
    def ptr(self) -> int:
        return self._ptr

    @property
    def exec_count(self) -> int:
        return self._exec_count

    def increment_ptr(self) -> None:
        """Advance past the executed instruction and count the execution."""
        self._ptr = (self._ptr + 1) % self._length
        self._exec_count += 1

    def step_forward(self) -> None:
        self._ptr = (self._ptr + 1) % self._length

    def step_backward(self) -> None:
        self._ptr = (self._ptr - 1) % self._length

    def current_address(self, core_size: int) -> int:
        return (self._start_address + self._ptr) % core_size

    def resize(self, length: int) -> None:
        """Change the instruction count, clamping ``ptr`` into the new span."""
        if length < 1:
            raise ValueError(f"Invalid process length {length}")
        self._length = length
        if self._ptr >= length:
            self._ptr = length - 1

    def span(self, core_size: int) -> set[int]:
        """Absolute core addresses occupied by this process."""
        return {(self._start_address + i) % core_size for i in range(self._length)}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Process):
            return NotImplemented
        return self._start_address == other._start_address

    def __hash__(self) -> int:
        return hash(self._start_address)

    def __repr__(self) -> str:
        return (
            f"Process(start={self._start_address}, length={self._length}, "
            f"ptr={self._ptr}, executed={self._exec_count})"
        )
