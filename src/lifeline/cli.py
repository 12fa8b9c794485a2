# src/lifeline/cli.py
"""
Lifeline Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`. Every
command reads a JSON file (a list of media assets or timeline events), runs
one stage of the engine on it and renders the result as a table. `--output`
additionally writes the result as JSON.

Usage
-----
    # Group a photo roll into moments
    $ lifeline moments roll.json --owner alice --context pet -o moments.json

    # Zoom-tier nodes and overview bubbles
    $ lifeline nodes moments.json --tier month
    $ lifeline bubbles moments.json --tier year

    # Positioned cards along a vertical axis
    $ lifeline layout moments.json --tier week --mode maximal
"""

from __future__ import annotations

import json
import traceback
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Annotated, Any, TypeVar

import typer
from dotenv import load_dotenv
from pydantic import BaseModel, TypeAdapter, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from lifeline.core.contracts.clustering import ClusteringConfiguration, ContextType
from lifeline.core.contracts.layout import DisplayMode, Orientation, Viewport
from lifeline.core.contracts.media import MediaAsset
from lifeline.core.contracts.nodes import ClusterNode, EventNode, ZoomTier
from lifeline.core.contracts.timeline import TimelineEvent
from lifeline.core.result import never
from lifeline.core.settings import get_logger, load_settings
from lifeline.engine.aggregation import build_nodes
from lifeline.engine.bubbles import aggregate_bubbles
from lifeline.engine.clustering import MediaClusteringEngine
from lifeline.engine.layout import layout_nodes

# Ensure .env overrides (LOG_LEVEL, LIFELINE_DEFAULT_CONTEXT) are visible to settings
load_dotenv()

app = typer.Typer(
    help="Lifeline: group media into moments and lay out life timelines.",
    rich_markup_mode="markdown",
)
console = Console()

M = TypeVar("M", bound=BaseModel)

_DATE_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"]

InputFile = Annotated[
    Path,
    typer.Argument(
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="JSON file holding a list of records.",
    ),
]
OutputOption = Annotated[
    Path | None,
    typer.Option("--output", "-o", help="Also write the result as JSON to this path."),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
]
TierOption = Annotated[ZoomTier, typer.Option("--tier", "-t", help="Zoom tier.")]


# --------------------------------------------------------------------------- #
# Helpers: I/O & Errors
# --------------------------------------------------------------------------- #


def _load(path: Path, model: type[M]) -> list[M]:
    """Parse ``path`` as a JSON list of ``model`` records."""
    adapter = TypeAdapter(list[model])  # type: ignore[valid-type]
    return adapter.validate_json(path.read_text(encoding="utf-8"))


def _write(path: Path | None, payload: Sequence[BaseModel]) -> None:
    if path is None:
        return
    data: list[Any] = [item.model_dump(mode="json") for item in payload]
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    console.print(Panel(f"Saved to: {path}", title="Output", border_style="green"))


def _abort(exc: Exception, verbose: bool) -> typer.Exit:
    console.print(f"\n[bold red]❌ Error:[/bold red] {exc}")
    if verbose:
        traceback.print_exc()
    return typer.Exit(code=1)


def _window(
    events: Sequence[TimelineEvent], start: datetime | None, end: datetime | None
) -> tuple[datetime, datetime]:
    first = min(e.timestamp for e in events)
    last = max(e.timestamp for e in events)
    return start or first, end or last


def _fmt(ts: datetime) -> str:
    return ts.strftime("%Y-%m-%d %H:%M")


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.callback()  # type: ignore[misc]
def main() -> None:
    """Lifeline: group media into moments and lay out life timelines."""
    get_logger()


@app.command()  # type: ignore[misc]
def moments(
    file: InputFile,
    owner: Annotated[str, typer.Option("--owner", "-u", help="Owner id of the moments.")],
    context: Annotated[
        ContextType | None,
        typer.Option("--context", "-c", help="Clustering preset (defaults to settings)."),
    ] = None,
    context_id: Annotated[
        str | None, typer.Option("--context-id", help="Context id stamped on events.")
    ] = None,
    output: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Group a list of media assets into moments (timeline events)."""
    preset = context or load_settings().default_context
    console.print(
        Panel.fit(
            f"[bold cyan]Lifeline Moments[/bold cyan]\n"
            f"Input: [u]{file.name}[/u] · preset: {preset.value}",
            border_style="cyan",
        )
    )

    try:
        assets = _load(file, MediaAsset)
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"[cyan]Clustering {len(assets)} assets...", total=None)
            engine = MediaClusteringEngine(ClusteringConfiguration.for_context(preset))
            clusters = engine.cluster(assets)
            events = engine.to_events(clusters, owner_id=owner, context_id=context_id)
    except (OSError, ValidationError, ValueError) as e:
        raise _abort(e, verbose) from e

    table = Table(title=f"{len(events)} moments")
    table.add_column("Time")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("Assets", justify="right")
    for event in events:
        table.add_row(
            _fmt(event.timestamp), event.event_type, event.title or "-", str(len(event.assets))
        )
    console.print(table)

    bursts = sum(1 for c in clusters if c.is_burst)
    console.print(
        f"[bold green]✅ Complete![/bold green] {len(clusters)} clusters, {bursts} bursts"
    )
    _write(output, events)


@app.command()  # type: ignore[misc]
def nodes(
    file: InputFile,
    tier: TierOption = ZoomTier.MONTH,
    start: Annotated[
        datetime | None, typer.Option("--start", formats=_DATE_FORMATS, help="Window start.")
    ] = None,
    end: Annotated[
        datetime | None, typer.Option("--end", formats=_DATE_FORMATS, help="Window end.")
    ] = None,
    expand: Annotated[
        list[str] | None, typer.Option("--expand", "-e", help="Cluster id to drill into.")
    ] = None,
    output: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Aggregate events into render nodes for a zoom tier."""
    try:
        events = _load(file, TimelineEvent)
    except (OSError, ValidationError, ValueError) as e:
        raise _abort(e, verbose) from e
    if not events:
        console.print("[yellow]No events.[/yellow]")
        return

    lo, hi = _window(events, start, end)
    result = build_nodes(events, tier, lo, hi, expanded_ids=expand or ())

    table = Table(title=f"{len(result)} nodes at {tier.value} tier")
    table.add_column("Kind")
    table.add_column("Id")
    table.add_column("Start")
    table.add_column("Label")
    for node in result:
        if isinstance(node, ClusterNode):
            summary = f"{node.label} ({node.dominant_type})"
            table.add_row("cluster", node.id, _fmt(node.start), summary)
        elif isinstance(node, EventNode):
            table.add_row("event", node.id, _fmt(node.start), node.label)
        else:
            never(f"Unsupported render node: {node!r}")
    console.print(table)
    _write(output, result)


@app.command()  # type: ignore[misc]
def bubbles(
    file: InputFile,
    tier: TierOption = ZoomTier.MONTH,
    output: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Summarize events into overview bubbles."""
    try:
        events = _load(file, TimelineEvent)
    except (OSError, ValidationError, ValueError) as e:
        raise _abort(e, verbose) from e

    result = aggregate_bubbles(events, tier)
    table = Table(title=f"{len(result)} bubbles")
    table.add_column("Period")
    table.add_column("Events", justify="right")
    table.add_column("Category")
    table.add_column("Size", justify="right")
    for bubble in result:
        table.add_row(
            bubble.label,
            str(bubble.event_count),
            f"[{bubble.color.hex}]{bubble.dominant_category}[/]",
            f"{bubble.size_multiplier:.1f}",
        )
    console.print(table)
    _write(output, result)


@app.command()  # type: ignore[misc]
def layout(
    file: InputFile,
    tier: TierOption = ZoomTier.MONTH,
    mode: Annotated[DisplayMode, typer.Option("--mode", "-m")] = DisplayMode.MAXIMAL,
    orientation: Annotated[Orientation, typer.Option("--orientation")] = Orientation.VERTICAL,
    width: Annotated[float, typer.Option("--width", min=1)] = 1200.0,
    height: Annotated[float, typer.Option("--height", min=1)] = 800.0,
    pixels_per_day: Annotated[float, typer.Option("--ppd", min=0.01)] = 4.0,
    output: OutputOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Place tier nodes along the time axis without overlaps."""
    try:
        events = _load(file, TimelineEvent)
    except (OSError, ValidationError, ValueError) as e:
        raise _abort(e, verbose) from e
    if not events:
        console.print("[yellow]No events.[/yellow]")
        return

    lo, hi = _window(events, None, None)
    placed = layout_nodes(
        build_nodes(events, tier, lo, hi),
        mode,
        orientation,
        Viewport(width=width, height=height),
        pixels_per_day,
        lo,
    )

    table = Table(title=f"{len(placed)} nodes ({mode.value}, {orientation.value})")
    table.add_column("Node")
    table.add_column("Axis px", justify="right")
    table.add_column("Card")
    table.add_column("Label")
    for item in placed:
        card = item.card
        box = f"{card.x:.0f},{card.y:.0f} {card.w:.0f}×{card.h:.0f}" if card else "-"
        label = "shown" if item.label_visible else "hidden"
        table.add_row(item.node.id, f"{item.primary_px:.0f}", box, label)
    console.print(table)
    _write(output, placed)


if __name__ == "__main__":
    app()
