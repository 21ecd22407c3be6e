"""Execution semantics of JMP, CPN and the spawn-site search used by SPW.

NOP needs no handler; SPW is resolved by the CPU after the dispatch pass.
"""

from __future__ import annotations

from dataclasses import dataclass
import random

from loguru import logger

from corelife.core.instructions import NOP, Instruction
from corelife.core.memory import Core
from corelife.core.process import Process

__all__ = ["SpawnSite", "jump", "copy_nop", "find_spawn_site", "DEFAULT_ATTEMPTS"]

# Random tries per CPN bomb and per spawn-site search
DEFAULT_ATTEMPTS = 10


@dataclass(frozen=True)
class SpawnSite:
    address: int
    parasitic: bool  # True when the site is a NOP sled inside another process


def jump(process: Process, instruction: Instruction) -> bool:
    """Apply a JMP to *process*.

    The operand is the distance from the JMP to the next instruction to run.
    The pointer is walked one wrapped step at a time for ``operand - 1``
    steps; the scheduler's post-dispatch increment makes the final step.
    Returns False, leaving the pointer alone, when the operand is malformed.
    """
    offset = instruction.operand
    if offset is None:
        logger.debug("[JMP] Malformed operand at {}", process)
        return False

    steps = offset - 1
    # whole laps around the process leave the pointer where it was
    step = process.step_forward if steps >= 0 else process.step_backward
    for _ in range(abs(steps) % process.length):
        step()
    return True


def copy_nop(
    core: Core,
    process: Process,
    *,
    rng: random.Random,
    bomb_range: int,
    before_bias: float = 0.5,
    attempts: int = DEFAULT_ATTEMPTS,
) -> int | None:
    """Drop a NOP bomb on a non-empty cell near *process*.

    Targets lie up to *bomb_range* cells before the start or after the end
    of the process. Empty targets and targets inside the attacker's own span
    waste the attempt. Returns the bombed address, or None after *attempts*
    misses.
    """
    size = core.size()
    if bomb_range < 1:
        return None
    own = process.span(size)
    last = process.start_address + process.length - 1

    for _ in range(attempts):
        distance = rng.randint(1, bomb_range)
        if rng.random() < before_bias:
            target = (process.start_address - distance) % size
        else:
            target = (last + distance) % size

        if target in own:
            continue
        if core.get_instruction(target) is not None:
            core.set_instruction(target, NOP)
            return target
    return None


def find_spawn_site(
    core: Core,
    length: int,
    *,
    rng: random.Random,
    attempts: int = DEFAULT_ATTEMPTS,
) -> SpawnSite | None:
    """Look for room for *length* instructions at random addresses.

    A site is either entirely empty (a new process may start there) or an
    entire NOP sled (the copy parasitises its host). Returns None when every
    attempt fails.
    """
    size = core.size()
    if length < 1 or length > size:
        return None

    for _ in range(attempts):
        address = rng.randrange(size)
        if core.is_free(address, length):
            return SpawnSite(address, parasitic=False)
        if core.is_nop_sled(address, length):
            return SpawnSite(address, parasitic=True)
    return None
