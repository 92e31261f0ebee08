"""
Win detection for a 3x3 board.
Board: sequence of 9 cells, row-major, each None (empty) or a Player.
"""
from dataclasses import dataclass

BOARD_SIZE = 9

# Table order matters: the first complete line found is reported
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)


@dataclass(frozen=True)
class WinResult:
    """Outcome of evaluating a board. line is empty when there is no winner."""
    winner: object = None
    line: tuple = ()

    @property
    def has_winner(self) -> bool:
        return self.winner is not None


NO_WINNER = WinResult()


def _check_board(board):
    if len(board) != BOARD_SIZE:
        raise ValueError(f"Board must have {BOARD_SIZE} cells, got {len(board)}")


def evaluate(board) -> WinResult:
    """Return the winner and winning line, or NO_WINNER."""
    _check_board(board)
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return WinResult(winner=board[a], line=(a, b, c))
    return NO_WINNER
