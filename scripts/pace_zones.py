#!/usr/bin/env python3
"""
Print training pace zones for a personal best.
Same numbers the app shows, without starting Streamlit.
"""

import sys
import json
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import typer
from rich.console import Console
from rich.table import Table

from utils.pace_zones import compute_training_paces, PaceInputError
import config

app = typer.Typer()
console = Console()


@app.command()
def zones(
        event: str = typer.Argument(..., help="Race distance: mile, 5k, 10k, half, marathon"),
        finish_time: str = typer.Argument(..., help="Finish time, e.g. 6:07 or 1:32:10"),
        exponent: float = typer.Option(config.DEFAULT_RIEGEL_K, "--exponent", "-k",
                                       help="Riegel exponent used to project to 10K"),
        as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
):
    """
    Show threshold pace and every training zone for a personal best.

    Example:
        python scripts/pace_zones.py mile 6:07
    """
    try:
        result = compute_training_paces(event, finish_time, exponent=exponent)
    except PaceInputError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    console.print(f"\n[bold]⏱️ Threshold pace: {result.threshold.per_km} ({result.threshold.per_mile})[/bold]")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Zone", style="cyan")
    table.add_column("Per km", style="green")
    table.add_column("Per mile", style="yellow")
    table.add_column("Purpose", style="white")

    for z in result.zones:
        table.add_row(
            z.name.capitalize(),
            f"{z.min} – {z.max}",
            f"{z.min_mi} – {z.max_mi}",
            config.ZONE_DESCRIPTIONS.get(z.name, ""),
        )

    console.print(table)
    console.print(f"[dim]{result.notes}[/dim]")


if __name__ == "__main__":
    app()
