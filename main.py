"""CLI entrypoint for generating, checking and previewing puzzle documents."""

from __future__ import annotations

import argparse
import json
import sys
from datetime import date as Date
from pathlib import Path
from typing import List, Optional

from gamecorner.core.constants import Game
from gamecorner.core.exceptions import DictionaryLoadError, GameCornerError, GenerationExhaustedError
from gamecorner.core.models import HexiconDocument, LetterheadDocument, MiniDocument
from gamecorner.data.dictionary import DictionaryConfig, WordDictionary
from gamecorner.engine.generator import GeneratorConfig, PuzzleGenerator
from gamecorner.engine.sessions import SessionFactory
from gamecorner.engine.validator import PuzzleValidator, ValidationResult
from gamecorner.io.dates import FixedDateProvider, SystemDateProvider, parse_date
from gamecorner.io.loader import DirectoryPuzzleSource, HttpPuzzleSource, PuzzleLoader
from gamecorner.io.persistence import MemoryKeyValueStore, SnapshotStore
from gamecorner.io.puzzle_store import DEFAULT_ARCHIVE_DIR, PuzzleArchive
from gamecorner.utils.logger import configure_logging, get_logger, resolve_level
from gamecorner.utils.pretty import (
    format_hexicon,
    format_letterhead_board,
    format_mini_clues,
    format_mini_grid,
    print_generated_puzzle,
)


LOGGER = get_logger("gamecorner.cli")


def date_arg(text: str) -> Date:
    parsed = parse_date(text)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {text!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Daily word-game puzzle tools")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate a bee puzzle for a date")
    generate.add_argument("--dictionary", type=Path, required=True, help="Word list, one word per line")
    generate.add_argument("--date", type=date_arg, default=None, help="Puzzle date (default: today)")
    generate.add_argument("--salt", type=str, default=None, help="Optional seed salt")
    generate.add_argument("--min-words", type=int, default=10, help="Smallest playable word count")
    generate.add_argument("--max-words", type=int, default=250, help="Largest playable word count")
    generate.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_ARCHIVE_DIR,
        help="Puzzle root the document is written under",
    )
    generate.add_argument("--overwrite", action="store_true", help="Replace an existing document")
    generate.add_argument("--dry-run", action="store_true", help="Print the puzzle without saving")

    check = commands.add_parser("check", help="Validate every document under a puzzle root")
    check.add_argument("root", type=Path, help="Puzzle root directory")

    show = commands.add_parser("show", help="Print one day's puzzle")
    show.add_argument("game", choices=[game.value for game in Game])
    show.add_argument("--date", type=date_arg, default=None, help="Puzzle date (default: today)")
    show.add_argument("--slug", type=str, default=None, help="Special letterhead slug")
    source = show.add_mutually_exclusive_group()
    source.add_argument("--root", type=Path, default=None, help="Puzzle root directory")
    source.add_argument("--url", type=str, default=None, help="Puzzle base URL")
    show.add_argument("--solution", action="store_true", help="Show the mini solution")
    return parser


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------
def run_generate(args: argparse.Namespace) -> int:
    try:
        dictionary = WordDictionary(DictionaryConfig(path=args.dictionary))
    except DictionaryLoadError as exc:
        LOGGER.error("Cannot load dictionary: %s", exc)
        return 1

    config = GeneratorConfig(
        min_valid_words=args.min_words,
        max_valid_words=args.max_words,
        salt=args.salt,
    )
    day = args.date or Date.today()
    try:
        puzzle = PuzzleGenerator(dictionary, config).generate_for_date(day)
    except GenerationExhaustedError as exc:
        LOGGER.error("%s", exc)
        return 2

    print_generated_puzzle(puzzle)
    if args.dry_run:
        return 0
    try:
        PuzzleArchive(args.output_dir).save_hexicon(puzzle, config, overwrite=args.overwrite)
    except FileExistsError as exc:
        LOGGER.error("%s (use --overwrite to replace it)", exc)
        return 1
    return 0


def validate_file(validator: PuzzleValidator, game: Game, path: Path) -> ValidationResult:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        if game == Game.HEXICON:
            return validator.validate_hexicon(HexiconDocument.from_json(payload))
        if game == Game.LUNAMINI:
            return validator.validate_mini(MiniDocument.from_json(payload))
        return validator.validate_letterhead(LetterheadDocument.from_json(payload))
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
        return ValidationResult(ok=False, messages=[f"unreadable document: {exc}"])


def run_check(args: argparse.Namespace) -> int:
    validator = PuzzleValidator()
    checked = failed = 0
    for game in (Game.HEXICON, Game.LUNAMINI, Game.LETTERHEAD):
        folder = args.root / game.value
        if not folder.is_dir():
            continue
        for path in sorted(folder.rglob("*.json")):
            checked += 1
            result = validate_file(validator, game, path)
            if result.ok:
                continue
            failed += 1
            for message in result.messages:
                print(f"{path}: {message}")
    print(f"Checked {checked} documents, {failed} failed")
    return 1 if failed else 0


def run_show(args: argparse.Namespace) -> int:
    source = HttpPuzzleSource(args.url) if args.url else DirectoryPuzzleSource(args.root or DEFAULT_ARCHIVE_DIR)
    dates = FixedDateProvider(args.date) if args.date else SystemDateProvider()
    factory = SessionFactory(PuzzleLoader(source), SnapshotStore(MemoryKeyValueStore()), dates)
    game = Game(args.game)
    try:
        if game == Game.HEXICON:
            session = factory.open_hexicon()
            print(format_hexicon(session.engine))
        elif game == Game.LUNAMINI:
            grid = factory.open_mini().engine
            if grid.title:
                print(grid.title)
            print(format_mini_grid(grid, show_solution=args.solution))
            print(format_mini_clues(grid))
        elif game == Game.LETTERHEAD:
            board = factory.open_letterhead(slug=args.slug).engine
            print(f"Letterhead {board.date or args.slug} ({board.word_length} letters)")
            print(format_letterhead_board(board))
        else:
            cryptic = factory.open_cryptini().engine
            enumeration = f" ({cryptic.enumeration})" if cryptic.enumeration else ""
            print(f"{cryptic.clue}{enumeration}")
    except GameCornerError as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(resolve_level(args.log_level))

    handlers = {"generate": run_generate, "check": run_check, "show": run_show}
    return handlers[args.command](args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
