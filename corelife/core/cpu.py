from __future__ import annotations

import random
from typing import Sequence

from loguru import logger

from corelife.core.config import SimulationConfig
from corelife.core.genome import GenomeRegistry
from corelife.core.instructions import NOP, SPW, Instruction, Opcode, format_instructions
from corelife.core.memory import Core
from corelife.core.metrics import DeathReason, SimulationMetrics, TickReport
from corelife.core.mutation import Mutator
from corelife.core.operations import copy_nop, find_spawn_site, jump
from corelife.core.process import Process
from corelife.exceptions import OutOfRangeError

__all__ = ["CPU", "ANCESTOR"]

# Default organism used to inoculate an empty core
ANCESTOR: tuple[Instruction, ...] = (NOP, NOP, SPW, NOP, NOP)


class CPU:
    """
    Round-robin scheduler over the processes living in a core.

    One tick runs in four phases:
    - dispatch: every live process executes one instruction, in list order;
      deaths and spawn requests are only recorded.
    - kill: recorded deaths are applied.
    - spawn: surviving spawners place a mutated copy of themselves.
    - perturbation: with ``swap_probability`` two nearby cells trade places.

    The CPU owns the core, the live process list and the genome registry,
    and is the only thing that mutates them.
    """

    def __init__(self, config: SimulationConfig, rng: random.Random | None = None):
        self.config = config
        self._rng = rng if rng is not None else random.Random(config.seed)

        self.core = Core(config.core_size)
        self.genomes = GenomeRegistry()
        self.mutator = Mutator(config.mutation_probability, self._rng)

        self._processes: list[Process] = []
        self._metrics = SimulationMetrics()

        logger.info(
            "[CPU] Init | core_size={}, mutation={}%, swap={}%, lifetime={}",
            config.core_size,
            config.mutation_probability,
            config.swap_probability,
            config.lifetime,
        )

    @classmethod
    def new(
        cls,
        core_size: int,
        mutation_probability: int,
        rng: random.Random | None = None,
        **overrides,
    ) -> "CPU":
        """Build a CPU from the two primary knobs.

        Raises:
            ConfigurationError: if any value is out of range.
        """
        config = SimulationConfig.build(
            core_size=core_size, mutation_probability=mutation_probability, **overrides
        )
        return cls(config, rng=rng)

    # ------------------------------------------------------------------
    # Read-only surface
    # ------------------------------------------------------------------

    @property
    def processes(self) -> tuple[Process, ...]:
        return tuple(self._processes)

    @property
    def process_count(self) -> int:
        return len(self._processes)

    @property
    def rng(self) -> random.Random:
        return self._rng

    def metrics(self) -> SimulationMetrics:
        """Snapshot of totals and genome populations; call between ticks."""
        snapshot = self._metrics.model_copy(deep=True)
        snapshot.live_processes = len(self._processes)
        snapshot.occupied_cells = self.core.occupied()
        snapshot.genomes = self.genomes.snapshot()
        return snapshot

    # ------------------------------------------------------------------
    # Population management
    # ------------------------------------------------------------------

    def add_process(
        self, instructions: Sequence[Instruction], address: int
    ) -> Process | None:
        """Inoculate the core with *instructions* at *address*.

        The copy is mutated on placement like any other. The target span must
        be entirely empty; a NOP sled never hosts a new process. Returns the
        new process, or None if there is no room.

        Raises:
            OutOfRangeError: if *address* is outside the core.
        """
        if not 0 <= address < self.core.size():
            raise OutOfRangeError(
                f"Invalid core address {address} (core size {self.core.size()})"
            )
        process = Process(address, max(len(instructions), 1))
        placed = self._place_copy(instructions, address, process)
        if placed is None:
            logger.warning("[CPU] Could not inoculate at {}: no room for the copy", address)
            return None

        self._processes.append(process)
        logger.info(
            "[CPU] Inoculated {} at {}", format_instructions(placed), address
        )
        return process

    def inoculate(
        self, instructions: Sequence[Instruction] = ANCESTOR, address: int | None = None
    ) -> Process | None:
        """Add *instructions* (the ancestor by default) at *address* or a random one."""
        if address is None:
            address = self._rng.randrange(self.core.size())
        return self.add_process(instructions, address)

    def kill(self, process: Process, reason: DeathReason | None = None) -> bool:
        """Remove *process* from the core and the live list.

        Killing a process that is no longer alive is a no-op; returns whether
        anything was removed.
        """
        try:
            index = self._processes.index(process)
        except ValueError:
            return False

        victim = self._processes.pop(index)
        if victim.genome is not None:
            self.genomes.decrement(victim.genome)
        self.core.remove(victim.start_address, victim.length)
        logger.debug(
            "[CPU] Killed {} ({})", victim, reason.value if reason else "removed"
        )
        return True

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def tick(self) -> TickReport:
        """Advance the simulation by one round of dispatch."""
        report = TickReport(tick=self._metrics.ticks + 1)

        dead, spawners = self._dispatch(report)

        for process, reason in dead.items():
            if self.kill(process, reason):
                report.record_death(reason)

        for parent in spawners:
            if parent in dead:
                continue
            self._spawn(parent, report)

        self._perturb(report)

        self._metrics.record_tick(report)
        return report

    execute = tick

    def _dispatch(
        self, report: TickReport
    ) -> tuple[dict[Process, DeathReason], list[Process]]:
        """Run one instruction of every live process; collect deaths and spawns."""
        dead: dict[Process, DeathReason] = {}
        spawners: list[Process] = []
        size = self.core.size()

        for process in list(self._processes):
            cell = self.core.get_instruction(process.current_address(size))
            reason: DeathReason | None = None

            if cell is None:
                reason = DeathReason.INVALID_ADDRESS
            elif not isinstance(cell, Instruction):
                reason = DeathReason.MALFORMED_INSTRUCTION
            elif cell.opcode is Opcode.NOP:
                pass
            elif cell.opcode is Opcode.JMP:
                if not jump(process, cell):
                    report.malformed_jumps += 1
            elif cell.opcode is Opcode.SPW:
                spawners.append(process)
            elif cell.opcode is Opcode.CPN:
                bombed = copy_nop(
                    self.core,
                    process,
                    rng=self._rng,
                    bomb_range=self.config.bomb_range,
                    before_bias=self.config.bomb_before_bias,
                    attempts=self.config.placement_attempts,
                )
                if bombed is not None:
                    report.bombs += 1
            else:
                reason = DeathReason.MALFORMED_INSTRUCTION

            process.increment_ptr()
            report.executed += 1

            if reason is None and process.exec_count > self.config.lifetime:
                reason = DeathReason.LIFETIME_EXCEEDED
            if reason is not None:
                dead.setdefault(process, reason)

        return dead, spawners

    def _spawn(self, parent: Process, report: TickReport) -> None:
        source = self.core.read_range(parent.start_address, parent.length)
        if not source or any(cell is None for cell in source):
            report.dropped_spawns += 1
            return

        result = self.mutator.mutate(source)
        report.mutations += result.substitutions + result.deletions + result.insertions
        copy = result.instructions

        site = find_spawn_site(
            self.core, len(copy), rng=self._rng, attempts=self.config.placement_attempts
        )
        if site is None:
            report.dropped_spawns += 1
            logger.debug("[CPU] Spawn of {} dropped: no room", parent)
            return

        if not self.core.place(copy, site.address):
            report.dropped_spawns += 1
            return

        if site.parasitic:
            report.parasitic_spawns += 1
            logger.debug(
                "[CPU] {} parasitised NOP sled at {}", parent, site.address
            )
            return

        child = Process(site.address, len(copy))
        child.genome = self.genomes.register(copy)
        self.genomes.increment(child.genome)
        self._processes.append(child)
        report.births += 1

    def _place_copy(
        self,
        instructions: Sequence[Instruction],
        address: int,
        process: Process,
    ) -> list[Instruction] | None:
        """Mutate, place and register a copy for an already built *process*.

        The process is resized to the mutated copy. Returns the placed
        instructions, or None if nothing was placed.
        """
        result = self.mutator.mutate(instructions)
        self._metrics.mutations += (
            result.substitutions + result.deletions + result.insertions
        )
        copy = result.instructions
        if not copy or not self.core.is_free(address, len(copy)):
            return None
        if not self.core.place(copy, address):
            return None

        process.resize(len(copy))
        process.genome = self.genomes.register(copy)
        self.genomes.increment(process.genome)
        return copy

    def _perturb(self, report: TickReport) -> None:
        """Swap two nearby non-empty cells with ``swap_probability`` percent."""
        if self._rng.randrange(100) >= self.config.swap_probability:
            return

        size = self.core.size()
        first = self._rng.randrange(size)
        second = (first + self._rng.randint(1, self.config.swap_range)) % size

        if self.core.get_instruction(first) is None or self.core.get_instruction(second) is None:
            return
        self.core.swap(first, second)
        report.swapped = True
        logger.debug("[CPU] Swapped cells {} and {}", first, second)
