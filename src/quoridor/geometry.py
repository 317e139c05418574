"""
Board geometry: cells, walls, and which edges between cells a wall cuts.

(placed in its own module as every other module of the engine needs to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from src.core.exceptions import NotationError
from src.core.shared_types import Orientation, Side

# Quoridor board is always 9x9 cells. Walls are anchored on the 8x8 grid of inner intersections.
BOARD_SIZE = 9
WALL_SLOTS = BOARD_SIZE - 1

Vector = tuple[int, int]

# (d_row, d_col). Row 0 is the top of the board.
UP: Vector = (-1, 0)
DOWN: Vector = (1, 0)
LEFT: Vector = (0, -1)
RIGHT: Vector = (0, 1)
DIRECTIONS: tuple[Vector, ...] = (UP, DOWN, LEFT, RIGHT)

COLUMN_LETTERS = "abcdefghi"

# Where the pawns start, and the row each one has to reach.
START_POSITION: dict[Side, tuple[int, int]] = {Side.FIRST: (0, 4), Side.SECOND: (8, 4)}
GOAL_ROW: dict[Side, int] = {Side.FIRST: BOARD_SIZE - 1, Side.SECOND: 0}


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    @classmethod
    def from_notation(cls, text: str) -> Position:
        """'a1' - 'i9' get converted to (0,0) - (8,8). The letter is the column, the digit the row."""
        if len(text) != 2 or text[0] not in COLUMN_LETTERS or text[1] not in "123456789":
            raise NotationError(f"Cannot interpret {text!r} as a square.")
        return cls(row=int(text[1]) - 1, col=COLUMN_LETTERS.index(text[0]))

    def to_notation(self) -> str:
        if not in_bounds(self):
            raise NotationError(f"Square {(self.row, self.col)} is not on the board.")
        return f"{COLUMN_LETTERS[self.col]}{self.row + 1}"

    def is_within_bounds(self) -> bool:
        return in_bounds(self)


@dataclass(frozen=True)
class Wall:
    """
    A wall is two cells long and anchored at an intersection.

    * HORIZONTAL at (r, c) runs below cells (r, c) and (r, c+1): it cuts the vertical steps between row r and row r+1 in those two columns.
    * VERTICAL at (r, c) runs right of cells (r, c) and (r+1, c): it cuts the horizontal steps between column c and column c+1 in those two rows.
    """

    row: int
    col: int
    orientation: Orientation

    @classmethod
    def from_notation(cls, text: str) -> Wall:
        """ex. 'e3h': horizontal wall anchored at col 4, row 2"""
        if len(text) != 3 or text[2] not in (o.value for o in Orientation):
            raise NotationError(f"Cannot interpret {text!r} as a wall.")
        anchor = Position.from_notation(text[:2])
        return cls(anchor.row, anchor.col, Orientation(text[2]))

    def to_notation(self) -> str:
        if not wall_in_bounds(self):
            raise NotationError(f"Wall {(self.row, self.col)} is not on the wall grid.")
        return f"{Position(self.row, self.col).to_notation()}{self.orientation.value}"


def in_bounds(pos: Position) -> bool:
    return 0 <= pos.row < BOARD_SIZE and 0 <= pos.col < BOARD_SIZE


def wall_in_bounds(wall: Wall) -> bool:
    return 0 <= wall.row < WALL_SLOTS and 0 <= wall.col < WALL_SLOTS


def step(pos: Position, direction: Vector) -> Position:
    d_row, d_col = direction
    return Position(pos.row + d_row, pos.col + d_col)


def is_blocked(from_pos: Position, to_pos: Position, walls: Iterable[Wall]) -> bool:
    """
    Can a pawn NOT cross the edge between two cells?
    ----

    * sideways step (same row): cut by a vertical wall in the left column of the two, anchored on this row or the one above.
    * up/down step (same column): cut by a horizontal wall on the upper row of the two, anchored on this column or the one to the left.
    * anything else is not an edge of the grid at all, so it counts as blocked.
    """
    if from_pos.row == to_pos.row and abs(from_pos.col - to_pos.col) == 1:
        left_col = min(from_pos.col, to_pos.col)
        return any(
            wall.orientation == Orientation.VERTICAL
            and wall.col == left_col
            and wall.row in (from_pos.row, from_pos.row - 1)
            for wall in walls
        )

    if from_pos.col == to_pos.col and abs(from_pos.row - to_pos.row) == 1:
        top_row = min(from_pos.row, to_pos.row)
        return any(
            wall.orientation == Orientation.HORIZONTAL
            and wall.row == top_row
            and wall.col in (from_pos.col, from_pos.col - 1)
            for wall in walls
        )

    return True


def neighbours(pos: Position, walls: Iterable[Wall]) -> Iterator[Position]:
    """Cells reachable in one unobstructed step (ignores pawns)"""
    walls = tuple(walls)
    for direction in DIRECTIONS:
        target = step(pos, direction)
        if in_bounds(target) and not is_blocked(pos, target, walls):
            yield target
