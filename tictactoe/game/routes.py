"""
Tic-Tac-Toe - browser game with a move list for jumping back in time.
The current game lives in the session cookie; nothing is stored server-side
except the activity log.
"""

import logging

from flask import jsonify, render_template, request, session

from tictactoe.game import tic_tac_toe_bp
from tictactoe.game.core.game_state import (
    Outcome,
    apply_move,
    from_dict,
    jump_to,
    new_game,
    status_text,
    step_descriptors,
    to_dict,
    toggle_move_order,
)
from tictactoe.utils.logging import log_game_event, log_project_visit

logger = logging.getLogger(__name__)

PROJECT_NAME = "tic_tac_toe"
SESSION_KEY = "tic_tac_toe_game"


def _load_game():
    """Current session game, or a new one if missing or unreadable."""
    data = session.get(SESSION_KEY)
    if data is None:
        return new_game()
    try:
        return from_dict(data)
    except ValueError as e:
        logger.warning(f"Discarding invalid game in session: {e}")
        return new_game()


def _save_game(state):
    session[SESSION_KEY] = to_dict(state)


def _json_param(name):
    """Value from the JSON body, or None when the body is missing or not an object."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data.get(name)


def _game_payload(state):
    """Everything the page needs to draw the board, status and move list."""
    result = state.win_result
    return {
        "board": [cell.value if cell is not None else "" for cell in state.current_board],
        "winner": result.winner.value if result.has_winner else None,
        "line": list(result.line),
        "status": status_text(state),
        "outcome": state.outcome.value,
        "x_is_next": state.x_is_next,
        "current_step": state.current_step,
        "history_length": len(state.history),
        "display_reversed": state.display_reversed,
        "moves": [
            {
                "step": move.step,
                "row": move.row,
                "col": move.col,
                "is_current": move.is_current,
                "label": move.label,
            }
            for move in step_descriptors(state)
        ],
    }


def _log_if_finished(state):
    if state.outcome is Outcome.IN_PROGRESS:
        return
    status = status_text(state)
    logger.info(f"Game finished after {state.current_step} moves: {status}")
    log_game_event(
        PROJECT_NAME,
        "Game Over",
        f"{status} after {state.current_step} moves",
    )


@tic_tac_toe_bp.route("/")
def index():
    """Display the Tic-Tac-Toe game - self-contained HTML with inline CSS/JS"""
    log_project_visit(PROJECT_NAME, "Tic-Tac-Toe")
    return render_template("tic_tac_toe.html", game=_game_payload(_load_game()))


@tic_tac_toe_bp.route("/api/state")
def api_state():
    return jsonify(_game_payload(_load_game()))


@tic_tac_toe_bp.route("/api/move", methods=["POST"])
def api_move():
    """Play {cell}. Illegal moves leave the game unchanged and still return 200."""
    state = _load_game()
    try:
        updated = apply_move(state, _json_param("cell"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    if updated is not state:
        _save_game(updated)
        _log_if_finished(updated)
    return jsonify(_game_payload(updated))


@tic_tac_toe_bp.route("/api/jump", methods=["POST"])
def api_jump():
    """Jump to a recorded {step}."""
    try:
        state = jump_to(_load_game(), _json_param("step"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    _save_game(state)
    return jsonify(_game_payload(state))


@tic_tac_toe_bp.route("/api/toggle-order", methods=["POST"])
def api_toggle_order():
    state = toggle_move_order(_load_game())
    _save_game(state)
    return jsonify(_game_payload(state))


@tic_tac_toe_bp.route("/api/new-game", methods=["POST"])
def api_new_game():
    state = new_game()
    _save_game(state)
    return jsonify(_game_payload(state))
