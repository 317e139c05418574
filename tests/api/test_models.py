from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from src.api.models import CreateRoomRequest, MoveRequest, WallRequest
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Orientation


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - CreateRoomRequest --
def test_player_name_is_optional() -> None:
    """No name given: the game falls back to a default name later on."""
    assert CreateRoomRequest().player_name == ""


# -- Validation - MoveRequest --
def test_valid_cell(mock_id: UUID) -> None:
    request = MoveRequest(game_id=mock_id, player_id="bladiblidiboo", row=8, col=0)
    assert (request.row, request.col) == (8, 0)


@pytest.mark.parametrize(
    "row, col",
    [
        (-1, 4),  # above the board
        (9, 4),  # below the board
        (4, 9),  # right of the board
    ],
)
def test_invalid_cell(mock_id: UUID, row: int, col: int) -> None:
    """Test that an exception is raised when the cell is not on the board."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(game_id=mock_id, player_id="bladiblidiboo", row=row, col=col)


# -- Validation - WallRequest --
def test_wall_orientation_from_text(mock_id: UUID) -> None:
    request = WallRequest(
        game_id=mock_id, player_id="bladiblidiboo", row=3, col=3, orientation="v"
    )
    assert request.orientation == Orientation.VERTICAL


def test_wall_out_of_range_is_left_to_the_rules(mock_id: UUID) -> None:
    """Off-grid walls pass validation: the game itself reports them as out of bounds."""
    request = WallRequest(
        game_id=mock_id, player_id="bladiblidiboo", row=8, col=8, orientation="h"
    )
    assert request.row == 8


def test_wall_unknown_orientation(mock_id: UUID) -> None:
    with pytest.raises(ValidationError):
        _ = WallRequest(
            game_id=mock_id,
            player_id="bladiblidiboo",
            row=3,
            col=3,
            orientation="diagonal",
        )
