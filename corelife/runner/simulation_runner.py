from __future__ import annotations

from loguru import logger
from pydantic import BaseModel, Field

from corelife.core.cpu import CPU
from corelife.core.metrics import SimulationMetrics
from corelife.utils.report import format_metrics, format_summary


class RunnerConfig(BaseModel):
    """Options for driving a CPU over many ticks."""

    ticks: int = Field(default=10_000, gt=0, description="Ticks to run")
    report_interval: int = Field(
        default=1000, gt=0, description="Ticks between progress reports"
    )
    stop_on_extinction: bool = Field(
        default=True, description="Stop early once no process is alive"
    )
    print_genomes: bool = Field(
        default=False, description="Log the full genome table at every report"
    )


class SimulationRunner:
    def __init__(self, cpu: CPU, config: RunnerConfig | None = None) -> None:
        self._cpu = cpu
        self.config = config or RunnerConfig()
        self._running = False

    def run(self) -> SimulationMetrics:
        """Tick until the configured count, extinction, or :meth:`stop`."""
        logger.info(
            "[SimulationRunner] Start | ticks={}, processes={}",
            self.config.ticks,
            self._cpu.process_count,
        )
        self._running = True
        try:
            for index in range(1, self.config.ticks + 1):
                if not self._running:
                    logger.info("[SimulationRunner] Stop requested")
                    break

                self._cpu.tick()

                if index % self.config.report_interval == 0:
                    self._report()

                if self.config.stop_on_extinction and self._cpu.process_count == 0:
                    logger.info("[SimulationRunner] Stop: extinction at tick {}", index)
                    break
        except KeyboardInterrupt:
            logger.info("[SimulationRunner] Interrupted")
        finally:
            self._running = False

        metrics = self._cpu.metrics()
        logger.info("[SimulationRunner] Done | {}", format_summary(metrics))
        return metrics

    def stop(self) -> None:
        self._running = False

    def is_running(self) -> bool:
        return self._running

    def _report(self) -> None:
        metrics = self._cpu.metrics()
        logger.info("[SimulationRunner] {}", format_summary(metrics))
        if self.config.print_genomes:
            logger.info("\n{}", format_metrics(metrics, living_only=True))
