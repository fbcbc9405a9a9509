"""
Command-line driver for the word-search engine.

Usage:
    python -m scripts.solve_board <dictionary_path> [--tiles T ...] [--min-length N]

Examples:
    python -m scripts.solve_board words.txt
    python -m scripts.solve_board words.txt --tiles H E B E Z K T S T --word ZEKS
    python -m scripts.solve_board words.txt --tiles QU I T E S A N D R --min-length 4 --timings

This will:
  1. Load the dictionary (first word of every line)
  2. Print the board
  3. For each --word, print its path on the board and whether it is a dictionary word
  4. Print every dictionary word found on the board and the total score
"""
import argparse
import logging
import sys

from wordsearch.engine import DEFAULT_TILES, GameEngine
from wordsearch.errors import InvalidArgumentError, InvalidStateError
from wordsearch.metrics import StageTimer
from wordsearch.settings import settings

logger = logging.getLogger("wordsearch")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Word Search Solver")
    parser.add_argument("dictionary", help="Path to a word list, one word per line")
    parser.add_argument("--tiles", nargs="+", default=list(DEFAULT_TILES),
                        help="Board tiles in row-major order; the count must be a perfect square")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Minimum word length (default: {settings.MIN_WORD_LENGTH})")
    parser.add_argument("--word", action="append", default=[],
                        help="Check a single word (repeatable)")
    parser.add_argument("--paths", action="store_true",
                        help="Print the cell path of every found word")
    parser.add_argument("--timings", action="store_true",
                        help="Print per-stage timings")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Debug logging")
    return parser


def run(args: argparse.Namespace, out=sys.stdout) -> int:
    timer = StageTimer("cli")

    with timer.stage("load"):
        engine = GameEngine(args.tiles)
        engine.load_lexicon(args.dictionary)

    print(engine.get_board(), file=out)
    print(file=out)

    for word in args.word:
        path = engine.is_on_board(word)
        valid = engine.is_valid_word(word)
        print(f"{word.upper()}: on_board={bool(path)} path={path} in_dictionary={valid}", file=out)

    with timer.stage("search"):
        paths = engine.find_all_paths(args.min_length)
    score = engine.get_score_for_words(paths, args.min_length)

    print(f"Found {len(paths)} words (min length {args.min_length}), score {score}", file=out)
    for word, path in paths.items():
        if args.paths:
            print(f"  {word}\t{path}", file=out)
        else:
            print(f"  {word}", file=out)

    if args.timings:
        for name, ms in timer.summary().items():
            print(f"  {name}: {ms}ms", file=out)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else settings.LOG_LEVEL,
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        return run(args)
    except (InvalidArgumentError, InvalidStateError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
