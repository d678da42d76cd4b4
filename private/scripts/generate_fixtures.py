#!/usr/bin/env python3
"""Generate puzzle fixtures for the solver test suite.

Run from the project root::

    python private/scripts/generate_fixtures.py

Writes ``<project_root>/fixtures/generated.json``: for every difficulty in
``DIFFICULTIES`` a handful of seeded puzzles, each stored with the length
of its shortest solution. The test suite picks up every JSON file in the
fixtures directory, so the pinned lengths guard the solver (and the move
generator it relies on) against regressions.
"""

from __future__ import annotations

import json
import logging
import random
import sys
from pathlib import Path

from rich.logging import RichHandler

# Resolve paths: this script lives in <project_root>/private/scripts/
SCRIPT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = SCRIPT_DIR.parent.parent
PYTHON_ROOT = PROJECT_ROOT / "python"

if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from backend.engine.gamegenerator import GameGenerator  # noqa: E402
from backend.engine.gamesolver import Solver  # noqa: E402
from backend.models.puzzle import Puzzle  # noqa: E402

FIXTURES_DIR = PROJECT_ROOT / "fixtures"
OUTPUT = FIXTURES_DIR / "generated.json"
SEED = 42

# Puzzles per difficulty. Hard puzzles take a while to generate.
DIFFICULTIES: dict[float, int] = {
    0.1: 5,
    0.3: 5,
    0.5: 3,
    0.7: 2,
}

logger = logging.getLogger("generate_fixtures")


def _entry(puzzle: Puzzle, puzzle_id: str) -> dict:
    return {
        "id": puzzle_id,
        "expected_moves": Solver.solution_length(puzzle),
        "puzzle": puzzle.to_dict(),
    }


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler()],
    )
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    generator = GameGenerator(rng=random.Random(SEED))

    entries: list[dict] = []
    seen: set[Puzzle] = set()
    for difficulty, count in DIFFICULTIES.items():
        logger.info("Generating %d puzzles at difficulty %.1f …", count, difficulty)
        n = 0
        while n < count:
            puzzle = generator.generate(difficulty)
            if puzzle in seen:
                continue  # duplicate — regenerate
            seen.add(puzzle)
            entries.append(_entry(puzzle, f"generated_{difficulty:.1f}_{n:02d}"))
            n += 1

    with open(OUTPUT, "w") as f:
        json.dump(entries, f, indent=2)
        f.write("\n")
    logger.info("Wrote %d puzzles to %s", len(entries), OUTPUT)


if __name__ == "__main__":
    main()
