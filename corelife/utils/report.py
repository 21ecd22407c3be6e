"""Plain-text rendering of the CPU's metrics surface."""

from __future__ import annotations

from corelife.core.metrics import SimulationMetrics


def format_metrics(metrics: SimulationMetrics, *, living_only: bool = False) -> str:
    """Process count followed by one ``hash: population, [instructions]`` line per genome."""
    lines = [
        f"Tick: {metrics.ticks}",
        f"Number of processes: {metrics.live_processes}",
        f"Occupied cells: {metrics.occupied_cells}",
        "",
    ]
    for record in metrics.genomes:
        if living_only and record.population == 0:
            continue
        lines.append(str(record))
    return "\n".join(lines)


def format_summary(metrics: SimulationMetrics) -> str:
    """One-line totals, suitable for periodic log output."""
    deaths = ", ".join(
        f"{reason.value}={count}" for reason, count in sorted(
            metrics.deaths.items(), key=lambda item: item[0].value
        )
    )
    living = sum(1 for record in metrics.genomes if record.population > 0)
    return (
        f"tick={metrics.ticks} processes={metrics.live_processes} "
        f"genomes={living}/{len(metrics.genomes)} births={metrics.births} "
        f"parasitic={metrics.parasitic_spawns} dropped={metrics.dropped_spawns} "
        f"bombs={metrics.bombs} swaps={metrics.swaps} mutations={metrics.mutations} "
        f"deaths=[{deaths}]"
    )
