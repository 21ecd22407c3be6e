from __future__ import annotations

from corelife.core.config import SimulationConfig
from corelife.core.cpu import ANCESTOR, CPU
from corelife.core.genome import GenomeRecord, GenomeRegistry, genome_hash
from corelife.core.instructions import Cell, Instruction, Opcode, format_instructions
from corelife.core.memory import Core
from corelife.core.metrics import DeathReason, SimulationMetrics, TickReport
from corelife.core.mutation import MutationResult, Mutator
from corelife.core.process import Process
