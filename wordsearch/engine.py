from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from sortedcontainers import SortedSet

from wordsearch.board import Board, VisitState
from wordsearch.enumerator import scorable_paths, scorable_words, score_words
from wordsearch.errors import InvalidArgumentError
from wordsearch.lexicon import Lexicon, WordSource
from wordsearch.pathfinder import find_path

logger = logging.getLogger("wordsearch")

DEFAULT_TILES = (
    "E", "E", "C", "A",
    "A", "L", "E", "P",
    "H", "N", "B", "O",
    "Q", "T", "T", "Y",
)


class GameEngine:
    """One word-search game: a board, its visit marks and a lexicon.

    An engine is not safe to share between threads since every search writes
    to its VisitState. The lexicon may be shared between engines once loaded.
    """

    def __init__(self, tiles: Sequence[str] = DEFAULT_TILES, lexicon: Optional[Lexicon] = None):
        self._lexicon = lexicon if lexicon is not None else Lexicon()
        self.set_board(tiles)

    @property
    def board(self) -> Board:
        return self._board

    @property
    def lexicon(self) -> Lexicon:
        return self._lexicon

    @property
    def visit_state(self) -> VisitState:
        return self._visits

    def set_board(self, tiles: Sequence[str]):
        board = Board(tiles)
        self._board = board
        self._visits = VisitState.for_board(board)
        logger.debug("Board set to %dx%d: %s", board.num_rows, board.num_cols, " ".join(board.tiles))

    def mark_all_unvisited(self):
        self._visits.reset()

    def load_lexicon(self, source: WordSource):
        self._lexicon.load(source)

    def get_board(self) -> str:
        return self._board.render()

    def is_valid_word(self, word: str) -> bool:
        return self._lexicon.is_valid_word(word)

    def is_valid_prefix(self, prefix: str) -> bool:
        return self._lexicon.is_valid_prefix(prefix)

    def is_on_board(self, word: str) -> list[int]:
        """Path of linear cell indices spelling word, or [] if it can't be traced.

        Does not check that word is in the lexicon.
        """
        if word is None:
            raise InvalidArgumentError("word must not be None")
        self._lexicon.require_loaded()
        return find_path(self._board, word, self._visits)

    def get_all_scorable_words(self, minimum_length: int) -> SortedSet:
        return scorable_words(self._board, self._lexicon, minimum_length, self._visits)

    def find_all_paths(self, minimum_length: int) -> dict[str, list[int]]:
        return scorable_paths(self._board, self._lexicon, minimum_length, self._visits)

    def get_score_for_words(self, words: Iterable[str], minimum_length: int) -> int:
        if minimum_length is None or minimum_length < 1:
            raise InvalidArgumentError(f"minimum length must be >= 1, got {minimum_length!r}")
        self._lexicon.require_loaded()
        return score_words(words, minimum_length)
