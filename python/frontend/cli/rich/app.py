"""Rich terminal frontend — coloured grid, cursor driven play.

Move the cursor with the arrow keys or WASD, press space to pick up the
car under it, then slide that car with the same keys. The session is
saved after every change so it can be resumed later.
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay
from backend.engine.gamesolver import UnsolvableError
from backend.models.board import Board
from backend.models.puzzle import Move, Puzzle
from backend.models.savegame import SaveGameManager
from backend.models.vector import Direction, Vector2D
from frontend.cli.input_handler import get_key

logger = logging.getLogger(__name__)
console = Console()

_CAR_COLOURS = (
    "yellow", "green", "blue", "magenta", "cyan", "bright_green",
    "bright_blue", "bright_magenta", "bright_yellow", "bright_cyan",
    "dark_orange", "purple", "spring_green2", "deep_sky_blue1",
    "gold1", "orchid",
)
_GOAL_COLOUR = "red"

_DIRECTIONS = {d.value: d for d in Direction}


# -- helpers ------------------------------------------------------------------


def _format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


def car_label(puzzle: Puzzle, i: int) -> str:
    return "X" if i == puzzle.num_cars - 1 else chr(ord("A") + i)


def describe_move(puzzle: Puzzle, move: Move) -> str:
    """Human readable form of *move* made on *puzzle*, e.g. ``B 2 down``."""
    car = puzzle.car(move.car_index)
    if car.is_horizontal:
        way = "right" if move.delta > 0 else "left"
    else:
        way = "down" if move.delta > 0 else "up"
    return f"{car_label(puzzle, move.car_index)} {abs(move.delta)} {way}"


# -- board rendering ----------------------------------------------------------


def render_board(
    puzzle: Puzzle,
    cursor: Vector2D | None = None,
    selected: int | None = None,
    hint: Move | None = None,
) -> Table:
    """Return a Rich Table representing the grid."""
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    rect = puzzle.board_rect
    for _ in range(rect.w):
        table.add_column(width=1, justify="center")

    goal_rect = puzzle.goal_rect
    goal_index = puzzle.num_cars - 1
    hint_index = hint.car_index if hint is not None else None

    for y in range(rect.y, rect.y + rect.h):
        cells: list[Text] = []
        for x in range(rect.x, rect.x + rect.w):
            p = Vector2D(x, y)
            i = puzzle.board.get(p)
            if i == Board.EMPTY:
                glyph = "◦" if goal_rect.contains(p) else "·"
                style = "red" if goal_rect.contains(p) else "dim"
            else:
                glyph = car_label(puzzle, i)
                colour = _GOAL_COLOUR if i == goal_index else _CAR_COLOURS[i % len(_CAR_COLOURS)]
                style = f"bold {colour}"
                if i == selected:
                    style += " underline"
                if i == hint_index:
                    style += " blink"
            if p == cursor:
                style += " reverse"
            cells.append(Text(glyph, style=style))
        table.add_row(*cells)

    return table


def show_puzzle(puzzle: Puzzle, moves: list[Move] | None) -> None:
    """Print *puzzle* and its solution once, without the interactive loop."""
    console.print(Align.center(Panel(
        Align.center(render_board(puzzle)),
        title="[bold cyan]Gridlock[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )))
    if moves is None:
        console.print(Align.center(Text("No solution found.", style="bold red")))
        return

    table = Table(
        title=f"Shortest solution: {len(moves)} moves",
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Car", justify="center")
    table.add_column("Slide", justify="right", style="yellow")
    table.add_column("Direction")

    current = puzzle
    for n, move in enumerate(moves, 1):
        label, distance, way = describe_move(current, move).split()
        table.add_row(str(n), label, distance, way)
        current = move.puzzle
    console.print(Align.center(table))


# -- screens ------------------------------------------------------------------


def _controls() -> Text:
    controls = Text()
    for key, label in (
        ("↑↓←→", "move"),
        ("SPACE", "pick up"),
        ("U/Y", "undo/redo"),
        ("N", "hint"),
        ("V", "solve"),
        ("R", "new"),
        ("Q", "quit"),
    ):
        controls.append(f"  {key}", style="bold cyan")
        controls.append(f" {label} ", style="dim")
    return controls


def _draw_game(
    game: GamePlay, cursor: Vector2D, selected: int | None, status: str = ""
) -> None:
    console.clear()

    board_table = render_board(game.puzzle, cursor, selected, game.state.hint)

    stats = Text()
    stats.append("  Level: ", style="dim")
    stats.append(str(game.level), style="bold yellow")
    stats.append("    Moves: ", style="dim")
    stats.append(str(game.state.move_number), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    panel = Panel(
        Align.center(board_table),
        title=f"[bold cyan]Gridlock  level {game.level}[/bold cyan]",
        border_style="bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(stats))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls()))


def _draw_win(game: GamePlay) -> None:
    console.clear()

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("UNBLOCKED!", style="bold green")
    congrats.append(f"  Level {game.level} solved!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(game.state.move_number), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(_format_time(game.state.elapsed_time), style="bold yellow")

    panel = Panel(
        Group(
            Align.center(render_board(game.puzzle)),
            Align.center(congrats),
            Align.center(stats),
        ),
        title="[bold green]Gridlock[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text(
        "\n  Press SPACE for the next level, Q to quit.\n", style="dim"
    )))


def _draw_help() -> None:
    console.clear()
    body = Text.from_markup(
        "Slide the cars along their length until the [bold red]X[/bold red] car\n"
        "reaches the marked [red]◦[/red] cells.\n\n"
        "Move the cursor with the arrow keys or WASD. Press SPACE on a car\n"
        "to pick it up, then slide it with the same keys; SPACE again\n"
        "puts it down.\n\n"
        "U undoes, Y redoes, N shows a hint, V solves the puzzle for you\n"
        "and R deals a new puzzle of the same level."
    )
    console.print()
    console.print(Align.center(Panel(
        body, title="[bold]HOW TO PLAY[/bold]", border_style="bright_blue", padding=(1, 2)
    )))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- solver helpers -----------------------------------------------------------


def _show_hint(game: GamePlay) -> str:
    puzzle = game.puzzle
    try:
        hint = game.request_hint()
    except UnsolvableError:
        return "[red]No solution found.[/red]"
    if hint is None:
        return "[green]Already solved![/green]"
    return f"[cyan]Hint:[/cyan] slide [bold]{describe_move(puzzle, hint)}[/bold]"


def _auto_solve(game: GamePlay) -> str:
    moves = game.puzzle.solve()
    if moves is None:
        return "[red]No solution found.[/red]"
    if not moves:
        return "[green]Already solved![/green]"

    for i, move in enumerate(moves):
        game.state.push(move.puzzle)
        _draw_game(
            game, game.puzzle.goal_car.pos, move.car_index,
            f"[bold cyan]Solving… move {i + 1}/{len(moves)}[/bold cyan]",
        )
        sys.stdout.flush()
        time.sleep(0.3)

    return f"[bold green]Solved in {len(moves)} moves.[/bold green]"


# -- game loop ----------------------------------------------------------------


def _new_game(level: int, generator: GameGenerator) -> GamePlay:
    with console.status(f"[cyan]Generating level {level}…[/cyan]"):
        return GamePlay(level, generator)


def _play(game: GamePlay, manager: SaveGameManager) -> None:
    cursor = game.puzzle.goal_car.pos
    selected: int | None = None
    status = ""

    while True:
        while not game.is_won:
            manager.save(game)
            _draw_game(game, cursor, selected, status)
            status = ""
            key = get_key()
            rect = game.puzzle.board_rect

            if key in _DIRECTIONS:
                direction = _DIRECTIONS[key]
                if selected is None:
                    cursor = (cursor + direction.vector).clamp(rect.pos, rect.end - Vector2D(1, 1))
                elif game.move_car(cursor, direction):
                    cursor = cursor + direction.vector
                else:
                    status = "[yellow]Blocked.[/yellow]"
            elif key == "select":
                if selected is not None:
                    selected = None
                else:
                    selected = game.puzzle.car_index_at(cursor)
                    if selected is None:
                        status = "[yellow]No car here.[/yellow]"
            elif key in ("undo", "redo"):
                selected = None
                ok = game.undo() if key == "undo" else game.redo()
                if not ok:
                    status = f"[yellow]Nothing to {key}.[/yellow]"
            elif key == "hint":
                status = _show_hint(game)
            elif key == "solve":
                selected = None
                status = _auto_solve(game)
            elif key == "restart":
                game = _restart(game)
                cursor, selected = game.puzzle.goal_car.pos, None
                status = "[yellow]New puzzle![/yellow]"
            elif key == "help":
                _draw_help()
            elif key == "quit":
                manager.save(game)
                return

        # -- win ---------------------------------------------------------------
        game.state.pause()
        _draw_win(game)

        while True:
            key = get_key()
            if key in ("select", "restart"):
                break
            if key == "quit":
                manager.save(game)
                return

        with console.status(f"[cyan]Generating level {game.level + 1}…[/cyan]"):
            game.next_level()
        cursor, selected = game.puzzle.goal_car.pos, None


def _restart(game: GamePlay) -> GamePlay:
    with console.status(f"[cyan]Generating level {game.level}…[/cyan]"):
        game.restart()
    return game


# -- public entry point -------------------------------------------------------


def run(
    data_dir: Path,
    level: int | None = None,
    puzzle: Puzzle | None = None,
    generator: GameGenerator | None = None,
    new_game: bool = False,
) -> None:
    """Launch the Rich CLI, resuming the saved session unless told otherwise."""
    generator = generator or GameGenerator()
    manager = SaveGameManager(data_dir / "savegame.json")
    if new_game:
        manager.clear()

    saved = None
    if not (new_game or level is not None or puzzle is not None):
        try:
            saved = manager.load()
        except ValueError as exc:
            logger.warning("Ignoring unreadable save file: %s", exc)
    if saved is not None:
        game = GamePlay.from_saved(saved, generator)
    elif puzzle is not None:
        game = GamePlay.from_puzzle(puzzle, level or 1, generator)
    else:
        game = _new_game(level or 1, generator)

    _play(game, manager)
    console.clear()
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
