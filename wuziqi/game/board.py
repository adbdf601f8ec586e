from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, NamedTuple, Optional, Sequence

from .types import DIRECTIONS, Player, Point

BOARD_SIZE = 15
WIN_LENGTH = 5

# Column labels: A-O (skipping no letters for 15x15)
COL_LABELS = "ABCDEFGHIJKLMNO"


class InvalidBoardError(ValueError):
    """Raised when a board snapshot is malformed."""


def parse_coordinate(text: str, size: int = BOARD_SIZE) -> Optional[Point]:
    """Parse a coordinate string like 'E5' or 'H12' into a Point.

    Column is a letter A-O, row is a number 1-15 counted from the top.
    Returns None if the string is invalid.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS[:size]:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= size):
        return None
    return Point(row - 1, COL_LABELS.index(col_char))


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'E5'."""
    return f"{COL_LABELS[point.col]}{point.row + 1}"


@dataclass
class Move:
    point: Point
    player: Player
    elapsed: Optional[float] = None

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


class WinResult(NamedTuple):
    won: bool
    line: tuple[Point, ...] = ()


class Board:
    """Square Gomoku grid. Tracks stone placement.

    ``place`` and ``remove`` are the make/unmake pair used by the search, so
    a single private copy can be reused for every trial placement.
    """

    def __init__(self, size: int = BOARD_SIZE) -> None:
        assert size >= 1, "Board size must be positive"
        self._size = size
        self._grid: list[list[Optional[Player]]] = [[None] * size for _ in range(size)]
        self._count = 0

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Optional[Player]]]) -> Board:
        """Build a board from a nested row-major snapshot."""
        size = len(rows)
        if size == 0:
            raise InvalidBoardError("Board snapshot is empty")
        board = cls(size)
        for r, row in enumerate(rows):
            if len(row) != size:
                raise InvalidBoardError(
                    f"Row {r} has {len(row)} cells, expected {size}"
                )
            for c, value in enumerate(row):
                if value is None:
                    continue
                if not isinstance(value, Player):
                    raise InvalidBoardError(f"Unknown cell value {value!r} at ({r}, {c})")
                board.place(Point(r, c), value)
        return board

    @property
    def size(self) -> int:
        return self._size

    @property
    def center(self) -> Point:
        return Point(self._size // 2, self._size // 2)

    def place(self, point: Point, player: Player) -> None:
        assert self.is_empty(point), f"{format_point(point)} is occupied"
        self._grid[point.row][point.col] = player
        self._count += 1

    def remove(self, point: Point) -> None:
        assert not self.is_empty(point), f"{format_point(point)} is already empty"
        self._grid[point.row][point.col] = None
        self._count -= 1

    def get(self, point: Point) -> Optional[Player]:
        if not self.is_on_grid(point):
            return None
        return self._grid[point.row][point.col]

    def is_empty(self, point: Point) -> bool:
        return self._grid[point.row][point.col] is None

    def is_on_grid(self, point: Point) -> bool:
        return 0 <= point.row < self._size and 0 <= point.col < self._size

    def is_full(self) -> bool:
        return self._count == self._size * self._size

    @property
    def occupied_count(self) -> int:
        return self._count

    def empty_points(self) -> Iterator[Point]:
        """Yield every empty cell in row-major order."""
        for r, row in enumerate(self._grid):
            for c, value in enumerate(row):
                if value is None:
                    yield Point(r, c)

    def stones(self) -> Iterator[tuple[Point, Player]]:
        """Yield (point, player) for every occupied cell in row-major order."""
        for r, row in enumerate(self._grid):
            for c, value in enumerate(row):
                if value is not None:
                    yield Point(r, c), value

    def rows(self) -> list[list[Optional[Player]]]:
        return [list(row) for row in self._grid]

    def copy(self) -> Board:
        clone = Board.__new__(Board)
        clone._size = self._size
        clone._grid = [list(row) for row in self._grid]
        clone._count = self._count
        return clone


def check_win(board: Board, point: Point, player: Player) -> WinResult:
    """Check if `player` at `point` makes 5-in-a-row.

    `point` is treated as holding `player` whatever the board has there, so
    the check works for hypothetical placements too. The first five found in
    scan order are returned.
    """
    for dr, dc in DIRECTIONS:
        run: list[Point] = []
        for step in range(-(WIN_LENGTH - 1), WIN_LENGTH):
            p = Point(point.row + dr * step, point.col + dc * step)
            if step == 0 or (board.is_on_grid(p) and board.get(p) is player):
                run.append(p)
                if len(run) == WIN_LENGTH:
                    return WinResult(True, tuple(run))
            else:
                run.clear()
    return WinResult(False)


class GomokuGameState:
    """Full game state for Gomoku (5-in-a-row): turns, history and result."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self.board = Board(size)
        self.current_player = Player.BLACK
        self.moves: list[Move] = []
        self._winner: Optional[Player] = None
        self._winning_line: tuple[Point, ...] = ()
        self._is_over = False

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def winning_line(self) -> tuple[Point, ...]:
        return self._winning_line

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    def legal_moves(self) -> list[Point]:
        if self._is_over:
            return []
        return list(self.board.empty_points())

    def apply_move(self, point: Point, elapsed: Optional[float] = None) -> None:
        """Place a stone for the current player and advance the turn."""
        assert not self._is_over, "Game is already over"
        assert self.board.is_on_grid(point), f"Point {point} is off the grid"
        assert self.board.is_empty(point), f"Point {format_point(point)} is occupied"

        player = self.current_player
        self.board.place(point, player)
        self.moves.append(Move(point=point, player=player, elapsed=elapsed))

        result = check_win(self.board, point, player)
        if result.won:
            self._winner = player
            self._winning_line = result.line
            self._is_over = True
        elif self.board.is_full():
            self._is_over = True

        self.current_player = self.current_player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.point)
        self.current_player = move.player
        self._winner = None
        self._winning_line = ()
        self._is_over = False
        return move

    def resign(self) -> None:
        """End the game with the current player's opponent as the winner."""
        assert not self._is_over, "Game is already over"
        self._winner = self.current_player.other
        self._is_over = True
