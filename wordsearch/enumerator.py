from __future__ import annotations

import logging
from typing import Iterable, Iterator

from sortedcontainers import SortedSet

from wordsearch.board import Board, VisitState
from wordsearch.errors import InvalidArgumentError
from wordsearch.lexicon import Lexicon
from wordsearch.pathfinder import find_path

logger = logging.getLogger("wordsearch")


def _check_min_length(minimum_length: int):
    if minimum_length is None or minimum_length < 1:
        raise InvalidArgumentError(f"minimum length must be >= 1, got {minimum_length!r}")


def iter_found(board: Board, lexicon: Lexicon, minimum_length: int,
               visits: VisitState) -> Iterator[tuple[str, list[int]]]:
    """Yield (word, path) for every lexicon word long enough and on the board.

    Runs one full path search per candidate word, in lexicon order.
    """
    _check_min_length(minimum_length)
    lexicon.require_loaded()
    try:
        for word in lexicon.words(minimum_length):
            path = find_path(board, word, visits)
            if path:
                yield word, path
    finally:
        visits.reset()


def scorable_words(board: Board, lexicon: Lexicon, minimum_length: int,
                   visits: VisitState) -> SortedSet:
    found = SortedSet(word for word, _ in iter_found(board, lexicon, minimum_length, visits))
    logger.info("Found %d words of length >= %d on %dx%d board",
                len(found), minimum_length, board.num_rows, board.num_cols)
    return found


def scorable_paths(board: Board, lexicon: Lexicon, minimum_length: int,
                   visits: VisitState) -> dict[str, list[int]]:
    return dict(iter_found(board, lexicon, minimum_length, visits))


def score_word(word: str, minimum_length: int) -> int:
    return 1 + (len(word) - minimum_length)


def score_words(words: Iterable[str], minimum_length: int) -> int:
    """Sum of per-word scores. Words are taken as given, not checked against the board."""
    _check_min_length(minimum_length)
    if words is None:
        raise InvalidArgumentError("words must not be None")
    return sum(score_word(w, minimum_length) for w in words)
