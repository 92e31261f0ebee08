"""
Logging utilities for tracking activity on the game.
"""

from tictactoe.models import LogEntry
from tictactoe import db


def log_project_visit(project_name, project_display_name=None):
    """
    Log a visit to a project/page.
    
    Args:
        project_name (str): The project identifier (e.g., 'tic_tac_toe')
        project_display_name (str, optional): Human-readable name for the description.
                                              Defaults to project_name if not provided.
    """
    display_name = project_display_name or project_name
    log_game_event(project_name, 'Visit', f"Anonymous user visited {display_name}")


def log_game_event(project_name, category, description):
    """Record one activity row (e.g. a finished game) in the log table."""
    log_entry = LogEntry(
        project=project_name,
        category=category,
        description=description
    )
    db.session.add(log_entry)
    db.session.commit()
