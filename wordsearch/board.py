from __future__ import annotations

import math
from typing import NamedTuple, Sequence

from wordsearch.errors import InvalidArgumentError


class Position(NamedTuple):
    row: int
    col: int


def grid_size_for(n: int) -> int:
    """Return the side length of a square grid holding n tiles."""
    size = math.isqrt(n)
    if size * size != n:
        raise InvalidArgumentError(f"{n} tiles do not form a square grid")
    return size


class Board:
    """Square grid of tiles, stored row-major.

    Tiles are upper-cased on the way in and may hold more than one character
    ("QU"). Cells are addressed either by Position or by linear index
    ``row * num_rows + col``.
    """

    __slots__ = ("tiles", "num_rows", "num_cols", "_neighbors")

    def __init__(self, tiles: Sequence[str]):
        if tiles is None:
            raise InvalidArgumentError("tiles must not be None")
        tiles = list(tiles)
        if not tiles:
            raise InvalidArgumentError("board needs at least one tile")
        for t in tiles:
            if not isinstance(t, str) or not t:
                raise InvalidArgumentError(f"invalid tile: {t!r}")

        size = grid_size_for(len(tiles))
        self.num_rows: int = size
        self.num_cols: int = size
        self.tiles: tuple[str, ...] = tuple(t.upper() for t in tiles)

        # Precompute adjacency lists, scanned row-then-column around each cell
        neighbors: list[tuple[int, ...]] = []
        for idx in range(len(self.tiles)):
            r, c = divmod(idx, self.num_cols)
            adj = []
            for dr in (-1, 0, 1):
                for dc in (-1, 0, 1):
                    if dr == 0 and dc == 0:
                        continue
                    nr, nc = r + dr, c + dc
                    if 0 <= nr < self.num_rows and 0 <= nc < self.num_cols:
                        adj.append(nr * self.num_rows + nc)
            neighbors.append(tuple(adj))
        self._neighbors = neighbors

    def __len__(self) -> int:
        return len(self.tiles)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board({list(self.tiles)!r})"

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.row < self.num_rows and 0 <= pos.col < self.num_cols

    def index_of(self, pos: Position) -> int:
        return pos.row * self.num_rows + pos.col

    def position_of(self, idx: int) -> Position:
        return Position(*divmod(idx, self.num_cols))

    def tile(self, pos: Position) -> str:
        if not self.in_bounds(pos):
            raise IndexError(f"{pos} is off the board")
        return self.tiles[self.index_of(pos)]

    def tile_at(self, idx: int) -> str:
        return self.tiles[idx]

    def neighbors(self, idx: int) -> tuple[int, ...]:
        """Linear indices of the in-bounds cells surrounding idx."""
        return self._neighbors[idx]

    def rows(self) -> list[list[str]]:
        n = self.num_cols
        return [list(self.tiles[r * n:(r + 1) * n]) for r in range(self.num_rows)]

    def render(self) -> str:
        """Tab-separated rows, one line per row, each tile followed by a tab."""
        return "\n".join("".join(t + "\t" for t in row) for row in self.rows())


class VisitState:
    """Per-cell marks for the path currently being traced."""

    __slots__ = ("num_rows", "num_cols", "_marks")

    def __init__(self, num_rows: int, num_cols: int):
        self.num_rows = num_rows
        self.num_cols = num_cols
        self._marks: list[bool] = [False] * (num_rows * num_cols)

    @classmethod
    def for_board(cls, board: Board) -> VisitState:
        return cls(board.num_rows, board.num_cols)

    def visit(self, idx: int):
        self._marks[idx] = True

    def unvisit(self, idx: int):
        self._marks[idx] = False

    def is_visited(self, idx: int) -> bool:
        return self._marks[idx]

    def reset(self):
        self._marks = [False] * (self.num_rows * self.num_cols)

    def is_clear(self) -> bool:
        return not any(self._marks)

    def visited(self) -> list[int]:
        return [i for i, marked in enumerate(self._marks) if marked]
