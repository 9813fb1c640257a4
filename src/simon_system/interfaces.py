"""
Abstract interface between the Simon engine and whatever presents it
"""

from abc import ABC, abstractmethod
from typing import Tuple


class ISimonController(ABC):
    """
    Receives the two callbacks emitted by SimonGame.

    Implementations render the pattern (console, LEDs, GUI...), read the
    player's presses and forward them with SimonGame.button_pressed().

    Both callbacks run synchronously with the engine lock held. The lock
    is reentrant, so calling back into the engine from the same thread
    is fine (e.g. listen_for_input() at the end of display_pattern()).
    Handing work to another thread and blocking on it until that thread
    calls the engine will deadlock.
    """

    @abstractmethod
    def display_pattern(self, pattern: Tuple[int, ...]) -> None:
        """
        Show the pattern to the player.

        The engine does not start the input deadline by itself: call
        SimonGame.listen_for_input() once the pattern has been shown.

        Args:
            pattern: Snapshot of the full pattern, oldest press first
        """
        pass

    @abstractmethod
    def game_over(self) -> None:
        """
        The game ended in failure (wrong button or input timeout).

        The engine is already back in OFF when this is called; start()
        begins a new game.
        """
        pass
