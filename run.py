from datetime import datetime, timezone
import time

import hydra
from loguru import logger
from omegaconf import DictConfig, OmegaConf

from corelife.core import CPU, Instruction, SimulationConfig
from corelife.exceptions import ConfigurationError
from corelife.runner import RunnerConfig, SimulationRunner
from corelife.utils.logger_setup import setup_logger
from corelife.utils.report import format_metrics


def run_simulation(cfg: DictConfig) -> None:
    start_time = time.time()

    logger.info("=" * 80)
    logger.info("corelife simulation")
    logger.info("=" * 80)
    logger.info(f"Start time: {datetime.now(timezone.utc).isoformat()}")

    try:
        logger.info("Step 1/3: Building CPU...")
        sim_config = SimulationConfig.build(
            **OmegaConf.to_container(cfg.simulation, resolve=True)
        )
        runner_config = RunnerConfig(**OmegaConf.to_container(cfg.runner, resolve=True))
        cpu = CPU(sim_config)

        logger.info("Step 2/3: Inoculating core...")
        ancestor = [Instruction.parse(text) for text in cfg.ancestor]
        if cpu.inoculate(ancestor, cfg.get("ancestor_address")) is None:
            raise ConfigurationError("Ancestor could not be placed in the core")

        logger.info("Step 3/3: Running...")
        metrics = SimulationRunner(cpu, runner_config).run()
        print(format_metrics(metrics, living_only=cfg.report.living_only))

    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        raise
    finally:
        duration = time.time() - start_time
        logger.info(f"Total simulation duration: {duration:.2f} seconds")
        logger.info(f"End time: {datetime.now(timezone.utc).isoformat()}")
        logger.info("=" * 80)


@hydra.main(version_base=None, config_path="config", config_name="config")
def main(cfg: DictConfig) -> None:
    """Main entrypoint with Hydra configuration management."""
    log_file_path = setup_logger(
        log_dir=cfg.logging.log_dir,
        level=cfg.logging.level,
        rotation=cfg.logging.rotation,
        retention=cfg.logging.retention,
    )
    logger.info(
        "Working directory: {}.",
        hydra.core.hydra_config.HydraConfig.get().runtime.output_dir,
    )
    logger.info(f"Log file: {log_file_path}")
    run_simulation(cfg)


if __name__ == "__main__":
    main()
