"""wavemap - generate tile maps from example maps with Wave Function Collapse."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from tqdm import tqdm

from wavemap import __version__
from wavemap.config import Settings, load_settings
from wavemap.core.tiles import TileType
from wavemap.generation import build_model, get_sample, parse_sample
from wavemap.generation.wfc import Collapser, SelectionStrategy
from wavemap.logging_config import get_logger, setup_logging
from wavemap.observe import render_text, tile_rects
from wavemap.storage import MapConfiguration, MapConfigStore, MapConfigStoreError

logger = get_logger(__name__)

console = Console()


def generate(config: MapConfiguration) -> MapConfiguration | None:
    """Run the solver for a configuration.

    Returns:
        The configuration with its generated tiles, or None on failure
    """
    model = build_model(config.sample)
    total = config.width * config.height

    with tqdm(total=total, desc="Collapsing", unit="cells", leave=False) as pbar:
        def update_progress(current: int, total_cells: int) -> None:
            # Backtracking can lower the count; only move forward
            if current > pbar.n:
                pbar.update(current - pbar.n)

        collapser = Collapser(model, config=config.solver, progress_callback=update_progress)
        result = collapser.run(config.width, config.height, config.seed)

    if not result.solved:
        console.print(f"[red]Generation failed:[/red] {result.reason}")
        console.print("Try again with a different --seed.")
        return None

    console.print(
        f"Solved {config.width}x{config.height} in {result.steps} steps "
        f"({result.attempts} attempt(s), {result.backtracks} backtrack(s))"
    )
    return config.with_tiles(result.tiles)


def load_sample(args: argparse.Namespace, settings: Settings) -> list[list[TileType]]:
    if args.sample_file is not None:
        return parse_sample(args.sample_file.read_text(encoding="utf-8"))
    return get_sample(args.sample or settings.sample)


def write_rects(path: Path, tiles, tile_size: int) -> None:
    """Write the visible tiles of a map as pixel rectangles to a JSON file."""
    rects = [rect._asdict() for rect in tile_rects(tiles, tile_size)]
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"tile_size": tile_size, "rects": rects}, f, indent=2)
    logger.debug(f"Wrote {len(rects)} rectangles to {path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for wavemap."""
    try:
        settings = load_settings()
    except ValidationError as e:
        console.print(f"[red]Invalid WAVEMAP_* setting:[/red] {e}")
        return 1

    parser = argparse.ArgumentParser(
        description="wavemap - tile maps generated from example maps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wavemap --sample island --width 40 --height 20
  wavemap --sample checkerboard --seed 3 --save board
  wavemap --load board      # Show a saved map
  wavemap --list            # List saved maps
  wavemap --load board --rects board.json --tile-size 8
        """,
    )
    parser.add_argument(
        "--data",
        type=Path,
        default=settings.data_dir,
        help=f"Data directory (default: {settings.data_dir}/)",
    )
    parser.add_argument("--sample", help=f"Built-in sample name (default: {settings.sample})")
    parser.add_argument("--sample-file", type=Path, help="Read the sample from a file of symbol rows")
    parser.add_argument("--width", type=int, default=32, help="Output width in cells (default: 32)")
    parser.add_argument("--height", type=int, default=16, help="Output height in cells (default: 16)")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible maps")
    parser.add_argument(
        "--uniform",
        action="store_true",
        help="Choose tiles uniformly instead of by sample frequency",
    )
    parser.add_argument("--save", metavar="NAME", help="Save the configuration and map under NAME")
    parser.add_argument("--load", metavar="NAME", help="Show (or regenerate) a saved map")
    parser.add_argument(
        "--tile-size",
        type=int,
        default=settings.tile_size,
        help=f"Pixel size of one tile for --rects (default: {settings.tile_size})",
    )
    parser.add_argument("--rects", type=Path, metavar="PATH", help="Also write the map as pixel rectangles (JSON)")
    parser.add_argument("--list", action="store_true", help="List saved maps and exit")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging to console")

    args = parser.parse_args(argv)

    console_level = logging.DEBUG if args.debug else logging.WARNING
    log_path = setup_logging(args.data, console_level=console_level)
    store = MapConfigStore(args.data / settings.store_file)

    console.print(f"wavemap v{__version__}")
    console.print(f"Log file: {log_path}")
    console.print()

    try:
        if args.list:
            names = store.list_names()
            if not names:
                console.print("No saved maps.")
            for name in names:
                console.print(f"  {name}")
            return 0

        if args.load:
            config = store.load(args.load)
            if config.tiles is None:
                config = generate(config)
                if config is None:
                    return 1
        else:
            solver = settings.solver
            if args.uniform:
                solver = solver.model_copy(update={"selection": SelectionStrategy.UNIFORM})
            config = MapConfiguration(
                name=args.save or "unsaved",
                sample=load_sample(args, settings),
                width=args.width,
                height=args.height,
                seed=args.seed,
                solver=solver,
            )
            config = generate(config)
            if config is None:
                return 1
            if args.save:
                path = store.save(config)
                console.print(f"Saved {args.save!r} to {path}")

    except MapConfigStoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1
    except (KeyError, ValueError, OSError) as e:
        logger.error(f"Invalid input: {e}")
        console.print(f"[red]Error:[/red] {e}")
        return 1

    console.print(render_text(config.tiles))

    if args.rects is not None:
        try:
            write_rects(args.rects, config.tiles, args.tile_size)
        except (ValueError, OSError) as e:
            console.print(f"[red]Error:[/red] {e}")
            return 1
        console.print(f"Wrote tile rectangles to {args.rects}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
