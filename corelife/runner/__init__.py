from corelife.runner.simulation_runner import RunnerConfig, SimulationRunner
