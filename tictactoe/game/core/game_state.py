"""
Tic-Tac-Toe game state with time travel.

A GameState is an immutable value: every transition (apply_move, jump_to,
toggle_move_order) returns a new state. Only the history, the current step
and the display order are stored; the board, whose turn it is and the
outcome are always derived from them.
"""
import enum
import logging
from dataclasses import dataclass, replace

from tictactoe.game.core.win_detector import BOARD_SIZE, evaluate

logger = logging.getLogger(__name__)

# History length once all 9 cells are filled (empty board + 9 moves)
FULL_HISTORY_LENGTH = BOARD_SIZE + 1


class Player(enum.Enum):
    X = "X"
    O = "O"


class Outcome(enum.Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAWN = "drawn"


EMPTY_BOARD = (None,) * BOARD_SIZE


@dataclass(frozen=True)
class Snapshot:
    """Board recorded after a move, plus the row/col of the cell just filled."""
    board: tuple
    row: int = 0
    col: int = 0


@dataclass(frozen=True)
class StepDescriptor:
    """One entry of the move list shown next to the board."""
    step: int
    row: int
    col: int
    is_current: bool

    @property
    def label(self) -> str:
        if self.step == 0:
            return "Go to game start"
        return f"Go to step #{self.step + 1}({self.col + 1},{self.row + 1})"


@dataclass(frozen=True)
class GameState:
    history: tuple = (Snapshot(EMPTY_BOARD),)
    current_step: int = 0
    display_reversed: bool = False

    @property
    def current_board(self) -> tuple:
        return self.history[self.current_step].board

    @property
    def x_is_next(self) -> bool:
        # Turn order follows step parity, so it can never drift from history
        return self.current_step % 2 == 0

    @property
    def current_player(self) -> Player:
        return Player.X if self.x_is_next else Player.O

    @property
    def win_result(self):
        return evaluate(self.current_board)

    @property
    def outcome(self) -> Outcome:
        if self.win_result.has_winner:
            return Outcome.WON
        if len(self.history) >= FULL_HISTORY_LENGTH:
            return Outcome.DRAWN
        return Outcome.IN_PROGRESS


def new_game() -> GameState:
    return GameState()


def _check_index(value, upper, name):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not 0 <= value < upper:
        raise ValueError(f"{name} must be between 0 and {upper - 1}, got {value}")


def apply_move(state: GameState, cell_index: int) -> GameState:
    """
    Place the current player's mark at cell_index.

    Any snapshots after the current step (left over from a jump) are
    discarded before the new one is appended.

    Args:
        state: The game to move in.
        cell_index: Board cell, 0-8 in row-major order.

    Returns:
        The new GameState, or `state` itself when the move is illegal
        (cell occupied or the game already has a winner).

    Raises:
        ValueError: cell_index is not an integer in 0-8.
    """
    _check_index(cell_index, BOARD_SIZE, "cell_index")

    board = state.current_board
    if evaluate(board).has_winner or board[cell_index] is not None:
        logger.debug(f"Ignoring move at cell {cell_index} on step {state.current_step}")
        return state

    squares = list(board)
    squares[cell_index] = state.current_player
    row, col = divmod(cell_index, 3)

    history = state.history[:state.current_step + 1] + (
        Snapshot(board=tuple(squares), row=row, col=col),
    )
    return replace(state, history=history, current_step=len(history) - 1)


def jump_to(state: GameState, step: int) -> GameState:
    """Move the step pointer to a recorded step. History is kept intact."""
    _check_index(step, len(state.history), "step")
    return replace(state, current_step=step)


def toggle_move_order(state: GameState) -> GameState:
    return replace(state, display_reversed=not state.display_reversed)


def step_descriptors(state: GameState) -> list:
    """Move list entries in display order (newest first when reversed)."""
    moves = [
        StepDescriptor(
            step=step,
            row=snapshot.row,
            col=snapshot.col,
            is_current=step == state.current_step,
        )
        for step, snapshot in enumerate(state.history)
    ]
    if state.display_reversed:
        moves.reverse()
    return moves


def status_text(state: GameState) -> str:
    result = state.win_result
    if result.has_winner:
        return f"Winner: {result.winner.value}"
    if len(state.history) < FULL_HISTORY_LENGTH:
        return f"Next player: {state.current_player.value}"
    return "Draw"


# --- Session serialization ---

def _cell_to_str(cell):
    return cell.value if cell is not None else ""


def _cell_from_str(value):
    if value == "":
        return None
    try:
        return Player(value)
    except ValueError:
        raise ValueError(f"Invalid cell value {value!r}") from None


def to_dict(state: GameState) -> dict:
    """JSON-safe form of a GameState, suitable for the Flask session."""
    return {
        "history": [
            {
                "squares": [_cell_to_str(cell) for cell in snapshot.board],
                "row": snapshot.row,
                "col": snapshot.col,
            }
            for snapshot in state.history
        ],
        "step": state.current_step,
        "reversed": state.display_reversed,
    }


def _snapshot_from_dict(item) -> Snapshot:
    if not isinstance(item, dict):
        raise ValueError("Snapshot must be an object")
    squares = item.get("squares")
    if not isinstance(squares, list) or len(squares) != BOARD_SIZE:
        raise ValueError(f"Snapshot must have {BOARD_SIZE} squares")
    row, col = item.get("row", 0), item.get("col", 0)
    _check_index(row, 3, "row")
    _check_index(col, 3, "col")
    return Snapshot(
        board=tuple(_cell_from_str(value) for value in squares),
        row=row,
        col=col,
    )


def _check_history(history):
    if history[0].board != EMPTY_BOARD:
        raise ValueError("History must start with an empty board")

    for step in range(1, len(history)):
        previous, snapshot = history[step - 1], history[step]
        if evaluate(previous.board).has_winner:
            raise ValueError(f"Step {step} was played after the game was won")

        changed = [
            i for i in range(BOARD_SIZE) if previous.board[i] != snapshot.board[i]
        ]
        if len(changed) != 1 or previous.board[changed[0]] is not None:
            raise ValueError(f"Step {step} must fill exactly one empty cell")

        cell = changed[0]
        expected = Player.X if step % 2 == 1 else Player.O
        if snapshot.board[cell] is not expected:
            raise ValueError(f"Step {step} should be played by {expected.value}")
        if (snapshot.row, snapshot.col) != divmod(cell, 3):
            raise ValueError(f"Step {step} has the wrong row/col for cell {cell}")


def from_dict(data) -> GameState:
    """
    Rebuild a GameState from to_dict() output.

    Raises:
        ValueError: the data is malformed or describes an impossible history.
    """
    if not isinstance(data, dict):
        raise ValueError("Game state must be an object")

    raw_history = data.get("history")
    if not isinstance(raw_history, list) or not raw_history:
        raise ValueError("Game state must have a non-empty history")
    if len(raw_history) > FULL_HISTORY_LENGTH:
        raise ValueError(f"History cannot exceed {FULL_HISTORY_LENGTH} steps")

    history = tuple(_snapshot_from_dict(item) for item in raw_history)
    _check_history(history)

    step = data.get("step")
    _check_index(step, len(history), "step")

    display_reversed = data.get("reversed", False)
    if not isinstance(display_reversed, bool):
        raise ValueError("reversed must be a boolean")

    return GameState(
        history=history,
        current_step=step,
        display_reversed=display_reversed,
    )
