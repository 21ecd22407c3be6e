"""
tests/test_mutation.py - Tests for copy-time mutation
"""

import random

import pytest

from corelife.core.instructions import NOP, SPW, Instruction, Opcode
from corelife.core.mutation import Mutator
from corelife.exceptions import ConfigurationError

ANCESTOR = [NOP, NOP, SPW, NOP, NOP]


class TestConfiguration:
    @pytest.mark.parametrize("probability", [-1, 101, 1.5, True, "5"])
    def test_invalid_probability(self, probability):
        with pytest.raises(ConfigurationError):
            Mutator(probability, random.Random(0))

    def test_bounds_accepted(self):
        Mutator(0, random.Random(0))
        Mutator(100, random.Random(0))


class TestMutate:
    def test_disabled_mutation_copies_exactly(self, rng):
        source = list(ANCESTOR)
        result = Mutator(0, rng).mutate(source)
        assert result.instructions == ANCESTOR
        assert result.instructions is not source
        assert not result.mutated

    def test_every_instruction_mutated(self):
        for seed in range(50):
            source = list(ANCESTOR)
            result = Mutator(100, random.Random(seed)).mutate(source)
            assert source == ANCESTOR, "source must never change"
            total = result.substitutions + result.deletions + result.insertions
            assert total == len(ANCESTOR)
            expected_length = len(ANCESTOR) - result.deletions + result.insertions
            assert len(result.instructions) == expected_length

    def test_substitution_changes_opcode(self):
        """With only substitutions possible, each opcode differs from its source."""
        for seed in range(50):
            mutator = Mutator(100, random.Random(seed))
            result = mutator.mutate([NOP])
            if result.substitutions:
                assert result.instructions[0].opcode is not Opcode.NOP

    def test_new_jumps_stay_inside_the_copy(self):
        for seed in range(200):
            result = Mutator(100, random.Random(seed)).mutate(ANCESTOR * 2)
            copy = result.instructions
            for index, instruction in enumerate(copy):
                if instruction.opcode is Opcode.JMP:
                    assert instruction.operand is not None
                    assert 0 <= index + instruction.operand < len(copy)


class TestJumpOffset:
    def test_forward_only_at_start(self):
        mutator = Mutator(100, random.Random(3))
        offsets = {mutator.jump_offset(0, 5) for _ in range(200)}
        assert offsets == {1, 2, 3, 4}

    def test_backward_only_at_end(self):
        mutator = Mutator(100, random.Random(3))
        offsets = {mutator.jump_offset(4, 5) for _ in range(200)}
        assert offsets == {-1, -2, -3, -4}

    def test_both_directions_in_middle(self):
        mutator = Mutator(100, random.Random(3))
        offsets = {mutator.jump_offset(2, 5) for _ in range(200)}
        assert offsets == {-2, -1, 1, 2}

    def test_single_instruction(self):
        assert Mutator(100, random.Random(3)).jump_offset(0, 1) == 0

    def test_operand_round_trips(self):
        instruction = Instruction.jmp(Mutator(100, random.Random(1)).jump_offset(1, 3))
        assert instruction.operand in (-1, 1)
