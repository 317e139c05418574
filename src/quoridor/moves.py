"""
Pawn movement rules

A pawn steps one cell orthogonally. When the opponent stands on that cell it jumps over it,
or, if a wall or the board edge is behind the opponent, it side-steps diagonally next to it.
Jumps never chain.

Whose turn it is gets checked later by the transition functions in game.py
"""

from typing import Protocol

from src.core.shared_types import Side
from src.quoridor.geometry import (
    DIRECTIONS,
    Position,
    Vector,
    Wall,
    in_bounds,
    is_blocked,
    step,
)


class BoardView(Protocol):
    """Just the parts the move generator needs"""

    @property
    def walls(self) -> tuple[Wall, ...]: ...

    def position_of(self, side: Side) -> Position: ...


def perpendicular(direction: Vector) -> tuple[Vector, Vector]:
    """The two directions at right angles to the given one"""
    d_row, d_col = direction
    if d_row == 0:
        return (1, 0), (-1, 0)
    return (0, 1), (0, -1)


def jump_moves(
    me: Position, opp: Position, direction: Vector, walls: tuple[Wall, ...]
) -> list[Position]:
    """
    Destinations when the opponent occupies the cell next to us in `direction`.
    ----

    1. straight over the opponent if the cell behind it is on the board and no wall is in between
    2. otherwise the cells left and right of the opponent (seen from us), each only if reachable from the opponent's cell
    """
    behind = step(opp, direction)
    if in_bounds(behind) and not is_blocked(opp, behind, walls):
        return [behind]

    diagonals: list[Position] = []
    for side_step in perpendicular(direction):
        diagonal = step(opp, side_step)
        # NOTE: me -> opp is already known to be open, otherwise we would not get here
        if in_bounds(diagonal) and not is_blocked(opp, diagonal, walls):
            diagonals.append(diagonal)
    return diagonals


def legal_moves(state: BoardView, side: Side) -> set[Position]:
    """
    All cells the pawn of `side` can move to.
    ----

    Works for either side, regardless of whose turn it is (so a client can show a preview).
    """
    walls = state.walls
    me = state.position_of(side)
    opp = state.position_of(side.opponent)

    destinations: set[Position] = set()
    for direction in DIRECTIONS:
        target = step(me, direction)
        if not in_bounds(target) or is_blocked(me, target, walls):
            continue

        if target != opp:
            destinations.add(target)
        else:
            destinations.update(jump_moves(me, opp, direction, walls))
    return destinations
