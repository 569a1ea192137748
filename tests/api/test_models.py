from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from chessroom.api.models import MoveRequest, RoomResponse
from chessroom.core.exceptions import InvalidRequestError
from chessroom.core.shared_types import Color, PieceType, Status


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - MoveRequest --
def test_valid_square_names(mock_id: UUID) -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(
        room_id=mock_id,
        player_name="bladiblidiboo",
        piece_type=PieceType.PAWN,
        from_square="e2",
        to_square="e4",
    )
    assert request.from_square == "e2"
    assert request.to_square == "e4"
    assert request.promote_to is None


def test_from_square_is_optional(mock_id: UUID) -> None:
    request = MoveRequest(
        room_id=mock_id, player_name="bladiblidiboo", piece_type="knight", to_square="c3"
    )
    assert request.from_square is None
    assert request.piece_type == PieceType.KNIGHT


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "i1",  # off the board
        "a9",
        "a0",
    ],
)
def test_invalid_square(mock_id: UUID, square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        MoveRequest(
            room_id=mock_id, player_name="bladiblidiboo", piece_type=PieceType.ROOK, to_square=square
        )
    with pytest.raises(InvalidRequestError):
        MoveRequest(
            room_id=mock_id,
            player_name="bladiblidiboo",
            piece_type=PieceType.ROOK,
            from_square=square,
            to_square="a1",
        )


def test_unknown_piece_type(mock_id: UUID) -> None:
    with pytest.raises(ValidationError):
        MoveRequest(room_id=mock_id, player_name="bladiblidiboo", piece_type="wizard", to_square="a1")


def test_room_response_defaults(mock_id: UUID) -> None:
    response = RoomResponse(
        room_id=mock_id,
        players={"white": "alice"},
        player_count=1,
        game_started=False,
        status=Status.WAITING_FOR_PLAYERS,
    )
    assert response.fen_state is None
    assert response.move_history == []
    assert not response.is_check
    assert response.model_dump(mode="json")["status"] == "waiting for players"


def test_room_response_colors(mock_id: UUID) -> None:
    response = RoomResponse(
        room_id=mock_id,
        players={"white": "alice", "black": "bob"},
        player_count=2,
        game_started=True,
        status="in progress",
        active_color="black",
    )
    assert response.status == Status.IN_PROGRESS
    assert response.active_color == Color.BLACK
