"""Pretty-print helpers for puzzles and generator output."""

from __future__ import annotations

import sys
from collections import Counter
from typing import TYPE_CHECKING

from ..core.constants import BLOCK_CHAR

if TYPE_CHECKING:
    from ..engine.generator import GeneratedPuzzle
    from ..engine.hexicon import HexiconSession
    from ..engine.letterhead import LetterheadRound
    from ..engine.mini_grid import MiniCrossword


def cell_symbol(cell, show_solution: bool) -> str:
    if cell.is_block:
        return BLOCK_CHAR
    value = cell.solution if show_solution else cell.entry
    return value or "."


def format_mini_grid(grid: MiniCrossword, *, show_solution: bool = False) -> str:
    """Render the grid with column headers; numbers are listed with the clues."""

    width = grid.size
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(width):
        row_cells = [cell_symbol(grid.cell(r * width + c), show_solution) for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_mini_clues(grid: MiniCrossword) -> str:
    lines = ["Across"]
    lines.extend(f"  {clue.number:>2}. {clue.text} ({clue.length})" for clue in grid.across)
    lines.append("Down")
    lines.extend(f"  {clue.number:>2}. {clue.text} ({clue.length})" for clue in grid.down)
    return "\n".join(lines)


def format_letterhead_board(game: LetterheadRound) -> str:
    rows = []
    for row, tiles in zip(game.grid, game.share_rows()):
        letters = "".join(tile.ch or "." for tile in row)
        rows.append(f"{letters}  {tiles}")
    return "\n".join(rows)


def format_hexicon(session: HexiconSession) -> str:
    puzzle = session.puzzle
    ring = " ".join(letter.upper() for letter in session.letters[1:])
    lines = [
        f"[{puzzle.required.upper()}] {ring}",
        f"Score: {session.score}/{session.target_score} ({session.score_ratio * 100:.0f}%)",
        f"Found: {len(session.found)}/{len(puzzle.valid_words)}",
    ]
    buckets = " ".join(
        f"{bucket.letter.upper()}:{bucket.found}/{bucket.total}{'*' if bucket.cleared else ''}"
        for bucket in session.progress_buckets()
    )
    if buckets:
        lines.append(f"By letter: {buckets}")
    if session.title_revealed:
        lines.append(f"Title: {puzzle.pangram_title}")
    return "\n".join(lines)


def print_generated_puzzle(puzzle: GeneratedPuzzle, *, stream=None) -> None:
    """Print letters, target and word statistics for a generated puzzle."""

    stream = stream or sys.stdout
    ring = " ".join(letter.upper() for letter in puzzle.letters[1:])
    print(f"[{puzzle.required.upper()}] {ring}", file=stream)
    print(file=stream)
    print("--- Puzzle ---", file=stream)
    print(f"  Date:          {puzzle.date}", file=stream)
    print(f"  Seed:          {puzzle.seed}", file=stream)
    print(f"  Words:         {len(puzzle.words)}", file=stream)
    print(f"  Target score:  {puzzle.target_score}", file=stream)
    if puzzle.pangram:
        print(f"  Pangram:       {puzzle.pangram}", file=stream)

    lengths = Counter(len(word) for word in puzzle.words)
    if lengths:
        dist_parts = [f"{length}:{count}" for length, count in sorted(lengths.items())]
        print(f"  Distribution:  {' '.join(dist_parts)}", file=stream)
