"""
Simon System - rule engine for the Simon memory game

The engine grows a random button pattern one press per round, hands it
to a controller for display, collects the replayed presses within an
input deadline and ends the game on the first mistake or on timeout.
"""

from .states import SimonState
from .errors import (
    SimonError,
    InvalidConfigurationError,
    ControllerNotAttachedError,
    ControllerAlreadyAttachedError,
)
from .config import SimonConfig, MIN_BUTTONS, MIN_INPUT_TIMEOUT_MS
from .interfaces import ISimonController
from .simon_game import SimonGame
from .console_controller import ConsoleSimonController

__all__ = [
    # State machine
    "SimonState",
    "SimonGame",
    # Controllers
    "ISimonController",
    "ConsoleSimonController",
    # Configuration
    "SimonConfig",
    "MIN_BUTTONS",
    "MIN_INPUT_TIMEOUT_MS",
    # Errors
    "SimonError",
    "InvalidConfigurationError",
    "ControllerNotAttachedError",
    "ControllerAlreadyAttachedError",
]
