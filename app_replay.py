#!/usr/bin/env python3
"""
Sketch Replay - demo app

Lists, deletes and replays saved drawings in an OpenCV window.
"""

import logging
import math
import time
from typing import Optional

import cv2
import typer
from rich.console import Console
from rich.table import Table

from sketchreplay.animator import ReplayAnimator
from sketchreplay.errors import CorruptData, InvalidGeometry
from sketchreplay.logging_config import setup_logging
from sketchreplay.model import Drawing, Ink, InkTool, Point, Stroke
from sketchreplay.render import SketchRenderer
from sketchreplay.settings import ReplaySettings
from sketchreplay.storage import DrawingStore
from sketchreplay.timer import FrameTimer
from sketchreplay.transform import BoundsFitter

WINDOW_NAME = "Sketch Replay"
QUIT_KEYS = (ord("q"), 27)

app = typer.Typer(
    name="sketch-replay",
    help="Replay saved freehand drawings at their recorded pace",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


@app.callback()
def configure(ctx: typer.Context):
    """Read SKETCHREPLAY_* settings and set up logging."""
    try:
        settings = ReplaySettings.from_env()
        settings.background_bgr()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(code=1)
    setup_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


def _store(ctx: typer.Context) -> DrawingStore:
    return DrawingStore(ctx.obj.storage_dir)


def sample_drawing(created_at: float = 0.0) -> Drawing:
    """A spiral followed by two straight strokes, sampled at 120 Hz."""
    rate = 1.0 / 120

    spiral = []
    for i in range(240):
        angle = i * 0.05
        radius = 10 + i * 0.8
        spiral.append(Point(320 + radius * math.cos(angle), 240 + radius * math.sin(angle),
                            time_offset=i * rate))
    underline = [Point(120 + i * 4, 470, time_offset=i * rate) for i in range(100)]
    tick = [Point(560 + i * 2, 440 - i * 3, time_offset=i * rate) for i in range(30)]

    pen = Ink(InkTool.PEN, (0.0, 0.478, 1.0, 1.0), 10.0)
    marker = Ink(InkTool.MARKER, (1.0, 0.231, 0.188, 1.0), 6.0)
    return Drawing((
        Stroke(pen, tuple(spiral), created_at),
        Stroke(marker, tuple(underline), created_at + 3.0),
        Stroke(marker, tuple(tick), created_at + 4.5),
    ))


@app.command("list")
def list_command(ctx: typer.Context):
    """Show saved drawings."""
    store = _store(ctx)
    table = Table(title=f"Saved drawings in {store.directory}")
    table.add_column("Name")
    table.add_column("Strokes", justify="right")
    table.add_column("Points", justify="right")

    for name in store.names():
        try:
            drawing = store.load(name)
        except CorruptData:
            table.add_row(name, "[red]corrupt[/red]", "")
            continue
        table.add_row(name, str(len(drawing)), str(sum(len(s) for s in drawing.strokes)))

    console.print(table)


@app.command("delete")
def delete_command(ctx: typer.Context, name: str = typer.Argument(..., help="Drawing name")):
    """Delete a saved drawing."""
    try:
        _store(ctx).delete(name)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    console.print(f"[green]Deleted[/green] {name}")


@app.command("sample")
def sample_command(ctx: typer.Context, name: str = typer.Argument("sample", help="Name to save under")):
    """Save a synthetic drawing to replay."""
    try:
        path = _store(ctx).save(name, sample_drawing(time.time()))
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    console.print(f"[green]Saved[/green] {path}")


@app.command("replay")
def replay_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Drawing name"),
    fit_x: Optional[float] = typer.Option(None, "--fit-x", help="Target region left edge"),
    fit_y: Optional[float] = typer.Option(None, "--fit-y", help="Target region top edge"),
    fit_height: Optional[float] = typer.Option(None, "--fit-height", help="Target region height"),
    fit_width: Optional[float] = typer.Option(None, "--fit-width", help="Target region width (default keeps aspect)"),
):
    """
    Replay a saved drawing in a window. Press q or Esc to stop.

    Examples:
        sketch-replay replay sample
        sketch-replay replay sample --fit-x 100 --fit-y 300 --fit-height 100
    """
    if fit_height is None and (fit_x, fit_y, fit_width) != (None, None, None):
        console.print("[red]Error:[/red] --fit-x, --fit-y and --fit-width need --fit-height")
        raise typer.Exit(code=1)

    settings = ctx.obj
    try:
        drawing = _store(ctx).load(name)
        if fit_height is not None:
            transform = BoundsFitter.fit_drawing(
                drawing, (fit_x or 0.0, fit_y or 0.0), fit_height, fit_width)
            drawing = BoundsFitter.apply(transform, drawing)
    except (FileNotFoundError, ValueError, CorruptData, InvalidGeometry) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    if not drawing.strokes:
        console.print("[yellow]Drawing is empty, nothing to replay[/yellow]")
        return

    renderer = SketchRenderer(settings.width, settings.height, settings.background_bgr())
    animator = ReplayAnimator(sink=lambda d: cv2.imshow(WINDOW_NAME, renderer.render(d)))
    timer = FrameTimer(animator, fps=settings.fps)

    def wait(delay: float):
        key = cv2.waitKey(max(1, int(delay * 1000))) & 0xFF
        if key in QUIT_KEYS:
            timer.cancel()

    timer.sleep = wait
    cv2.namedWindow(WINDOW_NAME)
    try:
        visible = timer.run(drawing)
        console.print(f"Replayed {len(visible)} of {len(drawing)} strokes, press any key to close")
        cv2.waitKey(0)
    finally:
        cv2.destroyAllWindows()


def main():
    app()


if __name__ == "__main__":
    main()
