#!/usr/bin/env python3
"""
Compliance Risk Assessment (CRA) engine

Scores entity records 1-5 from five weighted pillars, prioritized override
rules and configurable risk bands.

Usage:
    python main.py --input test_cases/record_domestic_low.json
    python main.py --records test_cases/batch_mixed.json --config my_config.json
    python main.py --sample
    python main.py --summary
    python main.py --serve --port 3233
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Load .env file before other imports
from config import get_config

from models import CRAEngineConfig, CRAInput, CRAOutput, SimulationReport, PILLAR_KEYS
from config_store import CRAConfigStore
from engine import calculate_cra, merge_with_defaults, score_components, get_scorecards
from simulation import run_simulation
from simulation_metrics import display_simulation_dashboard, SCORE_COLORS
from utilities.reference_data import PILLAR_LABELS
from utilities.rule_set_summary import get_rule_set_summary, get_rule_set_summary_concise
from utilities.sample_records import sample_records
from tools.cra_api_client import CRAApiClient


# Use legacy_windows mode for better Windows compatibility
console = Console(force_terminal=True, legacy_windows=True)


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="cra-engine",
        description="Compliance Risk Assessment engine - weighted pillar scoring with prioritized overrides.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --input record.json                 # Score one record (an array runs a batch)
    %(prog)s --records batch.json --json         # Batch simulation, raw JSON out
    %(prog)s --sample                            # Batch over built-in demo records
    %(prog)s --config cfg.json --save-config     # Merge cfg.json with defaults and store it
    %(prog)s --summary                           # Describe the active rule set
    %(prog)s --summary --concise                 # One-line rule set overview
    %(prog)s --serve                             # Run the HTTP service
    %(prog)s --input record.json --remote        # Score through a running service

Scoring:
  1. Each pillar (Geography, Industry, Entity, Product, Delivery) resolves 1-5
  2. Weighted mean, rounded half-up -> pre-override score
  3. Prohibited geography forces 5; otherwise first matching override rule wins
  4. Final score mapped to a risk band
        """
    )

    parser.add_argument("--input", metavar="FILE", help="Path to a CRA input JSON file (object or array)")
    parser.add_argument("--records", metavar="FILE", help="Path to a JSON array of records for batch simulation")
    parser.add_argument("--sample", action="store_true", help="Run a batch simulation over built-in sample records")
    parser.add_argument(
        "--config",
        metavar="FILE",
        help="Engine config JSON (partial configs are merged with defaults). Default: the config store",
    )
    parser.add_argument("--save-config", action="store_true", help="Persist the --config file to the config store")
    parser.add_argument("--summary", action="store_true", help="Print a plain-language summary of the rule set")
    parser.add_argument("--concise", action="store_true", help="With --summary, print the one-line variant")
    parser.add_argument("--serve", action="store_true", help="Run the CRA HTTP service")
    parser.add_argument("--host", help="Service host (default: CRA_API_HOST)")
    parser.add_argument("--port", type=int, help="Service port (default: CRA_API_PORT)")
    parser.add_argument("--remote", action="store_true", help="Score through a running CRA service instead of locally")
    parser.add_argument("--api-url", help="CRA service base URL for --remote (default: CRA_API_URL)")
    parser.add_argument("--json", action="store_true", help="Print raw JSON instead of tables")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--version", action="version", version="%(prog)s 1.0.0")

    return parser


def _read_json_file(path: str) -> Any:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return json.loads(file_path.read_text(encoding="utf-8"))


def _load_config(args: argparse.Namespace) -> CRAEngineConfig:
    store = CRAConfigStore()
    if not args.config:
        return store.load()
    config = merge_with_defaults(_read_json_file(args.config))
    if args.save_config:
        store.save(config)
        console.print(f"[green]Saved engine config to {store.path}[/green]")
    return config


def display_result(output: CRAOutput, record: Optional[CRAInput] = None, config: Optional[CRAEngineConfig] = None):
    """Display a single CRA result, with the pillar breakdown when scored locally."""
    color = SCORE_COLORS.get(output.final_score, "white")

    info_lines = [
        f"[bold]{output.entity_name}[/bold]",
        f"Record ID: {output.record_id}",
        f"Pre-override score: {output.pre_override_score}",
        f"Final score: [{color}]{output.final_score}[/{color}] ({output.risk_band})",
    ]
    if output.override_applied:
        info_lines.append(f"Override applied: [bold]{output.override_applied}[/bold]")

    console.print(Panel("\n".join(info_lines), title="CRA Result", border_style="blue"))

    if record is not None and config is not None:
        components = score_components(record, config.component_defaults, get_scorecards())
        table = Table(title="Pillar Scores")
        table.add_column("Pillar", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Weight", justify="right", style="dim")
        for key in PILLAR_KEYS:
            table.add_row(PILLAR_LABELS[key], f"{getattr(components, key):g}", f"{getattr(config.weights, key):g}")
        console.print(table)

    if output.findings:
        console.print("\n[bold]Findings:[/bold]")
        for finding in output.findings:
            console.print(f"  - {finding}")


def display_rule_set_summary(config: CRAEngineConfig):
    summary = get_rule_set_summary(config)
    console.print(Panel(
        "\n\n".join([summary.intro, summary.weights, summary.geography_first]),
        title="Rule Set",
        border_style="blue",
    ))

    table = Table(title="Override Rules")
    table.add_column("Priority", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Condition")
    table.add_column("Score", justify="right")
    for rule in summary.overrides:
        table.add_row(str(rule.priority), rule.name, rule.condition_label, str(rule.result_score))
    console.print(table)

    console.print(f"[bold]Risk bands:[/bold] {summary.risk_bands}")
    console.print(f"[bold]Prohibited countries:[/bold] {summary.prohibited_countries}")


def _print_json(data: Any):
    console.print_json(json.dumps(data))


async def _score_remote(args: argparse.Namespace, payload: Any, config: Optional[CRAEngineConfig]):
    client = CRAApiClient(base_url=args.api_url)
    if not await client.check_health():
        raise RuntimeError(f"CRA service not reachable at {client.base_url}")
    if isinstance(payload, list):
        return await client.simulate(payload, config)
    return await client.calculate(payload, config)


async def main_async(args: argparse.Namespace) -> int:
    """Async main function."""
    verbose = not args.quiet

    try:
        config = _load_config(args)

        if args.summary:
            if args.concise:
                concise = get_rule_set_summary_concise(config)
                if args.json:
                    _print_json(concise.model_dump())
                else:
                    console.print(f"{concise.weights} | {concise.overrides} | Prohibited: {concise.prohibited}")
            elif args.json:
                _print_json(get_rule_set_summary(config).model_dump())
            else:
                display_rule_set_summary(config)
            return 0

        if args.sample:
            payload = sample_records()
        elif args.records:
            payload = _read_json_file(args.records)
            if not isinstance(payload, list):
                raise ValueError("--records file must contain a JSON array")
        elif args.input:
            payload = _read_json_file(args.input)
        else:
            if args.config:
                return 0
            console.print("[bold red]Error:[/bold red] Provide --input, --records, --sample, --summary or --serve.")
            return 1

        if verbose and not args.json:
            count = len(payload) if isinstance(payload, list) else 1
            console.print(f"\nScoring [bold]{count}[/bold] record{'s' if count != 1 else ''}\n")

        if args.remote:
            result = await _score_remote(args, payload, config if args.config else None)
        elif isinstance(payload, list):
            result = run_simulation(payload, config)
        else:
            result = calculate_cra(payload, config)

        if isinstance(result, SimulationReport):
            if args.json:
                _print_json(result.to_dict())
            else:
                display_simulation_dashboard(result, console)
            return 1 if result.errors and not result.results else 0

        if args.json:
            _print_json(result.to_dict())
        else:
            record = None if args.remote else CRAInput.from_payload(payload)
            display_result(result, record, None if args.remote else config)
        return 0

    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        return 130

    except (FileNotFoundError, ValidationError, ValueError, RuntimeError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        if get_config().verbose:
            console.print_exception()
        return 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.serve:
        # uvicorn runs its own event loop
        from server import serve
        serve(host=args.host, port=args.port)
        return 0

    return asyncio.run(main_async(args))


if __name__ == "__main__":
    sys.exit(main())
