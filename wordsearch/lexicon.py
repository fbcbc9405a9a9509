from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator, Union

from sortedcontainers import SortedSet

from wordsearch.errors import InvalidArgumentError, InvalidStateError

logger = logging.getLogger("wordsearch")

WordSource = Union[str, "os.PathLike[str]", Iterable[str]]


def _first_tokens(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        parts = line.split(None, 1)
        if parts:
            yield parts[0].upper()


class Lexicon:
    """Uppercase word list kept in sorted order.

    Sorted order is what makes prefix queries cheap: the first word that is
    >= a prefix is the only candidate that needs checking.
    """

    def __init__(self, words: Iterable[str] = ()):
        """Each item is read like a word list line: only its first token is kept."""
        self._words: SortedSet = SortedSet(_first_tokens(words))

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.upper() in self._words

    def load(self, source: WordSource):
        """Replace the contents with the first token of every line in source.

        source is a file path or an iterable of lines. Anything after the
        first whitespace-delimited token on a line is ignored. An unreadable
        or empty source leaves the lexicon empty.
        """
        self._words = SortedSet()
        if source is None:
            raise InvalidArgumentError("word source must not be None")

        if isinstance(source, (str, os.PathLike)):
            try:
                with open(source, "r", encoding="utf-8") as f:
                    words = SortedSet(_first_tokens(f))
            except (OSError, UnicodeDecodeError) as e:
                raise InvalidArgumentError(f"cannot read word list {source}: {e}") from e
        else:
            words = SortedSet(_first_tokens(source))

        if not words:
            raise InvalidArgumentError("word source produced no words")
        self._words = words
        logger.info("Lexicon loaded: %d words", len(words))

    def require_loaded(self):
        if not self._words:
            raise InvalidStateError("no lexicon loaded")

    def is_valid_word(self, word: str) -> bool:
        if word is None:
            raise InvalidArgumentError("word must not be None")
        self.require_loaded()
        return word.upper() in self._words

    def is_valid_prefix(self, prefix: str) -> bool:
        if prefix is None:
            raise InvalidArgumentError("prefix must not be None")
        self.require_loaded()
        prefix = prefix.upper()
        i = self._words.bisect_left(prefix)
        if i == len(self._words):
            return False
        return self._words[i].startswith(prefix)

    def words(self, min_length: int = 1) -> Iterator[str]:
        """Words of at least min_length characters, in sorted order."""
        return (w for w in self._words if len(w) >= min_length)


def load_lexicon(source: WordSource) -> Lexicon:
    lexicon = Lexicon()
    lexicon.load(source)
    return lexicon
