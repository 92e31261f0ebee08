from flask import Blueprint

tic_tac_toe_bp = Blueprint(
    "tic_tac_toe",
    __name__,
    template_folder="templates",
)

from tictactoe.game import routes
