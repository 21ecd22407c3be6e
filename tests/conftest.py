import random

import pytest
from loguru import logger

from corelife.core import CPU, Core, SimulationConfig


@pytest.fixture(autouse=True)
def _quiet_logger():
    logger.disable("corelife")
    yield
    logger.enable("corelife")


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def core():
    return Core(10)


@pytest.fixture
def make_cpu(rng):
    def _make(**overrides) -> CPU:
        values = {"core_size": 10, "mutation_probability": 0}
        values.update(overrides)
        return CPU(SimulationConfig.build(**values), rng=rng)

    return _make
