"""
Wall placement rules.

A wall may be placed when it
* lies on the 8x8 grid of intersections,
* does not overlap (or cross at the same anchor) a wall already on the board,
* leaves BOTH pawns at least one path to their goal row.

The last check is a breadth-first search over the 81 cells, run from scratch for every query:
one wall can change reachability far away from where it is placed.
"""

from collections import deque
from typing import Iterable, Optional, Protocol

from src.core.shared_types import Orientation, Rejection, Side
from src.quoridor.geometry import GOAL_ROW, Position, Wall, neighbours, wall_in_bounds


class BoardView(Protocol):
    """Just the parts the wall validator needs"""

    @property
    def walls(self) -> tuple[Wall, ...]: ...

    def position_of(self, side: Side) -> Position: ...


def walls_overlap(a: Wall, b: Wall) -> bool:
    """
    Do two walls occupy (part of) the same groove?
    ----

    * different orientation: only when they cross at the very same anchor.
    * both horizontal: same row and anchors at most one column apart (each one spans col and col+1).
    * both vertical: same column and anchors at most one row apart.

    NOTE: perpendicular walls are only compared by anchor. That is the rule variant this game plays,
    not an oversight.
    """
    if a.orientation != b.orientation:
        return a.row == b.row and a.col == b.col

    if a.orientation == Orientation.HORIZONTAL:
        return a.row == b.row and abs(a.col - b.col) <= 1
    return a.col == b.col and abs(a.row - b.row) <= 1


def shortest_path_length(
    start: Position, goal_row: int, walls: Iterable[Wall]
) -> Optional[int]:
    """Number of steps from `start` to the nearest cell on `goal_row` (pawns ignored). None if there is no path."""
    walls = tuple(walls)
    distances: dict[Position, int] = {start: 0}
    queue: deque[Position] = deque([start])
    while queue:
        current = queue.popleft()
        if current.row == goal_row:
            return distances[current]
        for neighbour in neighbours(current, walls):
            if neighbour not in distances:
                distances[neighbour] = distances[current] + 1
                queue.append(neighbour)
    return None


def can_reach_goal(start: Position, goal_row: int, walls: Iterable[Wall]) -> bool:
    return shortest_path_length(start, goal_row, walls) is not None


def wall_rejection(state: BoardView, wall: Wall) -> Optional[Rejection]:
    """
    Geometry + connectivity checks for a proposed wall. Returns None if the wall may be placed.

    (Turn order / remaining wall count are not looked at here. That's part of applying the action.)
    """
    if not wall_in_bounds(wall):
        return Rejection.OUT_OF_BOUNDS

    if any(walls_overlap(existing, wall) for existing in state.walls):
        return Rejection.OVERLAP

    with_new_wall = (*state.walls, wall)
    for side in Side:
        if not can_reach_goal(state.position_of(side), GOAL_ROW[side], with_new_wall):
            return Rejection.DISCONNECTS

    return None


def is_legal_wall(state: BoardView, wall: Wall) -> bool:
    return wall_rejection(state, wall) is None
