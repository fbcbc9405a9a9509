from __future__ import annotations

from wordsearch.board import Board, VisitState


def find_path(board: Board, word: str, visits: VisitState) -> list[int]:
    """Trace word on the board and return the linear indices of its tiles.

    Start cells are tried in row-major order and neighbours in the board's
    fixed scan order, so the first path found is always the same one. Returns
    [] when the word cannot be traced; visits is then clear. On success the
    cells of the returned path stay marked until the next search.
    """
    word = word.upper()
    visits.reset()
    for start in range(len(board)):
        if word.startswith(board.tile_at(start)):
            path = _trace(board, word, start, visits)
            if path:
                return path
    return []


def _trace(board: Board, word: str, start: int, visits: VisitState) -> list[int]:
    """Depth-first search from start using an explicit stack.

    stack[i] holds the untried neighbours of path[i]. A tile is only entered
    when it matches the word at the current offset, and is consumed whole.
    """
    target = len(word)
    path = [start]
    visits.visit(start)
    consumed = len(board.tile_at(start))
    if consumed == target:
        return path

    stack = [iter(board.neighbors(start))]
    while stack:
        for nxt in stack[-1]:
            if visits.is_visited(nxt):
                continue
            tile = board.tile_at(nxt)
            if not word.startswith(tile, consumed):
                continue
            visits.visit(nxt)
            path.append(nxt)
            consumed += len(tile)
            if consumed == target:
                return path
            stack.append(iter(board.neighbors(nxt)))
            break
        else:
            # Dead end: undo this cell and resume its parent's neighbours
            stack.pop()
            last = path.pop()
            visits.unvisit(last)
            consumed -= len(board.tile_at(last))

    return path
