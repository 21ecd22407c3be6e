"""
tests/test_operations.py - Tests for JMP, CPN and spawn-site search
"""

import random

from corelife.core.instructions import CPN, NOP, SPW, Instruction, Opcode
from corelife.core.memory import Core
from corelife.core.operations import copy_nop, find_spawn_site, jump
from corelife.core.process import Process

ANCESTOR = [NOP, NOP, SPW, NOP, NOP]


class TestJump:
    def test_forward_and_backward_with_wraparound(self):
        process = Process(0, 5)

        # the scheduler's increment supplies the last step
        assert jump(process, Instruction.jmp(4))
        assert process.ptr == 3

        assert jump(process, Instruction.jmp(4))
        assert process.ptr == 1

        assert jump(process, Instruction.jmp(-1))
        assert process.ptr == 4

        assert jump(process, Instruction.jmp(-4))
        assert process.ptr == 4

    def test_net_displacement_after_increment(self):
        """JMP k followed by the post-dispatch increment lands k cells away."""
        for offset in range(-12, 13):
            process = Process(0, 5)
            for _ in range(2):
                process.step_forward()
            jump(process, Instruction.jmp(offset))
            process.increment_ptr()
            assert process.ptr == (2 + offset) % 5, f"offset {offset}"

    def test_large_operand_wraps(self):
        process = Process(0, 5)
        jump(process, Instruction.jmp(1_000_001))
        assert process.ptr == 0

    def test_jump_does_not_count_executions(self):
        process = Process(0, 5)
        jump(process, Instruction.jmp(3))
        assert process.exec_count == 0

    def test_malformed_operand_is_noop(self):
        process = Process(0, 5)
        process.step_forward()
        assert jump(process, Instruction(Opcode.JMP, None)) is False
        assert process.ptr == 1


class TestCopyNop:
    def _setup(self):
        core = Core(10)
        process = Process(0, len(ANCESTOR))
        core.place(ANCESTOR, 0)
        return core, process

    def test_bomb_lands_after_process(self):
        core, process = self._setup()
        for address in range(5, 10):
            core.set_instruction(address, CPN)

        target = copy_nop(
            core, process, rng=random.Random(0), bomb_range=4, before_bias=0.0
        )
        assert target is not None and 5 <= target <= 8
        assert core.get_instruction(target) == NOP
        assert sum(1 for a in range(5, 10) if core.get_instruction(a) == NOP) == 1

    def test_bomb_lands_before_process(self):
        core, process = self._setup()
        for address in range(5, 10):
            core.set_instruction(address, CPN)

        target = copy_nop(
            core, process, rng=random.Random(0), bomb_range=4, before_bias=1.0
        )
        assert target is not None and 6 <= target <= 9
        assert core.get_instruction(target) == NOP

    def test_empty_neighbourhood_wastes_the_attempt(self):
        core, process = self._setup()
        before = core.snapshot()
        assert copy_nop(core, process, rng=random.Random(0), bomb_range=4) is None
        assert core.snapshot() == before

    def test_never_bombs_itself(self):
        core = Core(6)
        process = Process(0, 5)
        core.place([CPN] * 5, 0)
        for seed in range(20):
            assert copy_nop(
                core, process, rng=random.Random(seed), bomb_range=5, before_bias=0.0
            ) is None
        assert core.read_range(0, 5) == [CPN] * 5


class TestFindSpawnSite:
    def test_empty_core(self):
        site = find_spawn_site(Core(50), 5, rng=random.Random(0))
        assert site is not None
        assert site.parasitic is False

    def test_nop_sled(self):
        core = Core(20)
        core.place([NOP] * 20, 0)
        site = find_spawn_site(core, 5, rng=random.Random(0))
        assert site is not None
        assert site.parasitic is True

    def test_full_core(self):
        core = Core(20)
        core.place([CPN] * 20, 0)
        assert find_spawn_site(core, 5, rng=random.Random(0)) is None

    def test_too_long(self):
        assert find_spawn_site(Core(4), 5, rng=random.Random(0)) is None
        assert find_spawn_site(Core(4), 0, rng=random.Random(0)) is None
