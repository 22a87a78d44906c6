"""
Batch simulation metrics for the CRA engine.

Aggregates a batch of CRA outputs into a BatchSummary (band and override
distribution, mean final score) and displays it as a Rich dashboard.
"""

from collections import Counter
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from models import BatchSummary, CRAOutput, SimulationReport

console = Console(force_terminal=True, legacy_windows=True)

# Final score -> colour used in tables
SCORE_COLORS = {
    1: "green",
    2: "green",
    3: "yellow",
    4: "red",
    5: "bold red",
}


def build_batch_summary(results: list[CRAOutput], total_records: int, error_count: int = 0) -> BatchSummary:
    """Aggregate scored records. Counts keep first-seen order."""
    band_counts = Counter(r.risk_band for r in results)
    override_counts = Counter(r.override_applied for r in results if r.override_applied)
    average = round(sum(r.final_score for r in results) / len(results), 2) if results else 0.0
    return BatchSummary(
        total_records=total_records,
        scored=len(results),
        errors=error_count,
        average_final_score=average,
        band_counts=dict(band_counts),
        override_counts=dict(override_counts),
    )


def display_simulation_dashboard(report: SimulationReport, out: Optional[Console] = None):
    """Print summary panel, results table and any per-record errors."""
    out = out or console
    summary = report.summary

    lines = [
        f"Records: [bold]{summary.total_records}[/bold]  "
        f"Scored: [green]{summary.scored}[/green]  "
        f"Errors: [{'red' if summary.errors else 'dim'}]{summary.errors}[/]",
        f"Average final score: [bold]{summary.average_final_score:.2f}[/bold]",
    ]
    if summary.band_counts:
        lines.append("Bands: " + ", ".join(f"{name} {count}" for name, count in summary.band_counts.items()))
    if summary.override_counts:
        lines.append("Overrides: " + ", ".join(f"{name} {count}" for name, count in summary.override_counts.items()))

    out.print(Panel("\n".join(lines), title="Simulation Summary", border_style="blue"))

    if report.results:
        table = Table(title="Simulation Results")
        table.add_column("Record", style="cyan")
        table.add_column("Entity")
        table.add_column("Pre", justify="right")
        table.add_column("Final", justify="right")
        table.add_column("Band")
        table.add_column("Findings", style="dim")

        for result in report.results:
            color = SCORE_COLORS.get(result.final_score, "white")
            table.add_row(
                result.record_id,
                result.entity_name,
                str(result.pre_override_score),
                f"[{color}]{result.final_score}[/{color}]",
                result.risk_band,
                "; ".join(result.findings) or "-",
            )
        out.print(table)

    for err in report.errors:
        out.print(f"[bold red]Record {err.index}:[/bold red] {err.message}")
