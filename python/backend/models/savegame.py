"""Save-game persistence for a session in progress."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from backend.models.puzzle import InvalidPuzzleError, Puzzle

if TYPE_CHECKING:
    from backend.engine.gameplay import GamePlay


@dataclass
class SavedGame:
    level: int
    cursor: int
    history: list[Puzzle]


class SaveGameManager:
    """Loads and saves the current session to a JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath

    # -- persistence ----------------------------------------------------------

    def load(self) -> SavedGame | None:
        """Return the saved session, or ``None`` if nothing has been saved."""
        if not self.filepath.exists():
            return None
        data = json.loads(self.filepath.read_text())
        try:
            level = int(data["level"])
            cursor = int(data["cursor"])
            history = [Puzzle.from_dict(p) for p in data["history"]]
        except InvalidPuzzleError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidPuzzleError(f"Malformed save file {self.filepath}: {exc!r}") from exc
        if not history or not 0 <= cursor < len(history):
            raise InvalidPuzzleError(f"Save file {self.filepath} has no valid current puzzle.")
        return SavedGame(level=level, cursor=cursor, history=history)

    def save(self, game: GamePlay) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "level": game.level,
            "cursor": game.state.cursor,
            "history": [p.to_dict() for p in game.state.history],
        }
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    def clear(self) -> None:
        self.filepath.unlink(missing_ok=True)
