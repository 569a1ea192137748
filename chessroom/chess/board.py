"""The Game board implements all rules that effect the `position` (in chess: the configuration of pieces on the board)"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from chessroom.chess.pieces import Color, Piece, PieceType
from chessroom.chess.position import BOARD_DIMENSIONS, Position, all_positions
from chessroom.core.exceptions import InvalidFENError, InvalidPositionError

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass
class Board:
    """Sparse occupancy: a square without an entry is empty."""

    squares: dict[Position, Piece] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_fen(cls, fen_str: str) -> Board:
        """Construct a board using the placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (y = 7), starting with the rook on a8
        * pawns cover the 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (y = 0) are the white pieces, again read from the a-file to the h-file
        """
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[1]:
            raise InvalidFENError(
                f"Expected {BOARD_DIMENSIONS[1]} ranks separated by '/', got {fen_str!r}"
            )

        board = cls()
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            y = BOARD_DIMENSIONS[1] - 1 - rank_idx
            x = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    x += int(character)
                    continue
                try:
                    position = Position(x, y)
                except InvalidPositionError as e:
                    raise InvalidFENError(f"Rank {fen_one_rank!r} is too long.") from e
                board.place_piece(Piece.from_fen(character, position))
                x += 1
            if x != BOARD_DIMENSIONS[0]:
                raise InvalidFENError(
                    f"Rank {fen_one_rank!r} does not describe {BOARD_DIMENSIONS[0]} squares."
                )
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(y) for y in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, y: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for x in range(BOARD_DIMENSIONS[0]):
            piece = self.piece_at(Position(x, y))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # --- LOOKUP ---
    def piece_at(self, position: Position) -> Optional[Piece]:
        return self.squares.get(position)

    def is_occupied(self, position: Position) -> bool:
        return position in self.squares

    def locate(self, piece_type: PieceType, color: Color) -> Optional[Position]:
        """
        First square (in board-index order, a1 up to h8) holding a piece of this type and color.

        Deliberately a plain scan over all 64 squares: the board is the only record of where pieces stand.
        """
        for position in all_positions():
            piece = self.squares.get(position)
            if piece is not None and piece.type == piece_type and piece.color == color:
                return position
        return None

    def locate_all(self, piece_type: PieceType, color: Color) -> list[Position]:
        return [
            position
            for position in all_positions()
            if (piece := self.squares.get(position)) is not None
            and piece.type == piece_type
            and piece.color == color
        ]

    def pieces(self, color: Color) -> list[Piece]:
        """All pieces of a given color, in board-index order"""
        return [
            piece
            for position in all_positions()
            if (piece := self.squares.get(position)) is not None and piece.color == color
        ]

    def king_position(self, color: Color) -> Optional[Position]:
        return self.locate(PieceType.KING, color)

    # --- MUTATION ---
    def place_piece(self, piece: Piece) -> None:
        """Put a piece on the square stored in the piece itself (replacing whatever stood there)."""
        self.squares[piece.position] = piece

    def remove_piece(self, position: Position) -> Optional[Piece]:
        return self.squares.pop(position, None)

    def move_piece(self, from_position: Position, to_position: Position) -> Optional[Piece]:
        """
        Transfer the piece from one slot to another.

        The previous occupant of the destination is dropped from the board and returned,
        so the caller can record it as captured.
        """
        moving_piece = self.squares.pop(from_position)
        captured = self.squares.pop(to_position, None)
        self.squares[to_position] = moving_piece.moved_to(to_position)
        return captured

    def copy(self) -> Board:
        # Pieces are immutable, so a shallow copy of the mapping is a full copy of the board
        return Board(dict(self.squares))

    # --- PERSISTENCE HELPERS ---
    def moved_squares(self) -> list[str]:
        """FEN has no notion of `has_moved`. Store the squares whose pieces have moved alongside it."""
        return [
            position.to_algebraic()
            for position in all_positions()
            if (piece := self.squares.get(position)) is not None and piece.has_moved
        ]

    def mark_moved(self, squares: list[str]) -> None:
        for algebraic in squares:
            position = Position.from_algebraic(algebraic)
            piece = self.piece_at(position)
            if piece is None:
                raise InvalidFENError(f"No piece on {algebraic} to mark as moved.")
            self.squares[position] = piece.moved_to(position)


def initial_layout() -> Board:
    """
    The standard starting position.
    Back rank R N B Q K B N R on row 0 (White) and row 7 (Black), pawns on rows 1 and 6.
    """
    board = Board()
    for color, back_row, pawn_row in ((Color.WHITE, 0, 1), (Color.BLACK, 7, 6)):
        for x, piece_type in enumerate(BACK_RANK):
            board.place_piece(Piece(piece_type, color, Position(x, back_row)))
            board.place_piece(Piece(PieceType.PAWN, color, Position(x, pawn_row)))
    return board
