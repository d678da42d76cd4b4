#!/usr/bin/env python3
"""Gridlock — slide the cars until the red one gets out.

Usage::

    python main.py                # resume the saved game (or start level 1)
    python main.py -l 12          # start at level 12
    python main.py -d 0.7 --new   # fresh puzzle at difficulty 0.7
    python main.py --show --seed 3  # print a puzzle and its solution
"""

import logging
import random
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import GameGenerator, difficulty_for_level  # noqa: E402

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    level: Optional[int] = typer.Option(
        None, "-l", "--level",
        min=1,
        help="Level to play. Higher levels generate harder puzzles.",
    ),
    difficulty: Optional[float] = typer.Option(
        None, "-d", "--difficulty",
        min=0.0, max=1.0,
        help="Generate the first puzzle at this difficulty instead of by level.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the puzzle generator for reproducible puzzles.",
    ),
    show: bool = typer.Option(
        False, "--show",
        help="Print a generated puzzle and its shortest solution, then exit.",
    ),
    new: bool = typer.Option(
        False, "--new",
        help="Ignore the saved game and start over.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log generator and solver progress.",
    ),
) -> None:
    """Gridlock sliding-car puzzle."""
    _configure_logging(verbose)
    generator = GameGenerator(rng=random.Random(seed))

    from frontend.cli.rich import app as rich_app

    puzzle = None
    if difficulty is not None or show:
        if difficulty is None:
            difficulty = difficulty_for_level(level or 1)
        logger.info("Generating a puzzle at difficulty %.2f", difficulty)
        puzzle = generator.generate(difficulty)

    if show:
        rich_app.show_puzzle(puzzle, puzzle.solve())
        return

    rich_app.run(
        data_dir=DATA_DIR,
        level=level,
        puzzle=puzzle,
        generator=generator,
        new_game=new,
    )


if __name__ == "__main__":
    app()
