"""
Simon game configuration
"""

from dataclasses import dataclass

from .errors import InvalidConfigurationError

MIN_BUTTONS = 2
MIN_INPUT_TIMEOUT_MS = 5000

DEFAULT_BUTTONS = 4
DEFAULT_INPUT_TIMEOUT_MS = 30000


@dataclass(frozen=True)
class SimonConfig:
    """Immutable engine configuration"""

    number_of_buttons: int = DEFAULT_BUTTONS
    input_timeout_ms: int = DEFAULT_INPUT_TIMEOUT_MS

    @property
    def input_timeout_s(self) -> float:
        """Input deadline in seconds, as threading.Timer expects it"""
        return self.input_timeout_ms / 1000.0

    def validate(self) -> None:
        """Raise InvalidConfigurationError if the game would be unplayable"""
        if isinstance(self.number_of_buttons, bool) or not isinstance(self.number_of_buttons, int):
            raise InvalidConfigurationError(
                f"Button count must be an integer, got {self.number_of_buttons!r}"
            )
        if self.number_of_buttons < MIN_BUTTONS:
            raise InvalidConfigurationError(
                f"Must have at least {MIN_BUTTONS} buttons to play Simon, got {self.number_of_buttons}"
            )

        if isinstance(self.input_timeout_ms, bool) or not isinstance(self.input_timeout_ms, (int, float)):
            raise InvalidConfigurationError(
                f"Input timeout must be a number of milliseconds, got {self.input_timeout_ms!r}"
            )
        # Written so NaN fails too
        if not self.input_timeout_ms >= MIN_INPUT_TIMEOUT_MS:
            raise InvalidConfigurationError(
                f"Player needs at least {MIN_INPUT_TIMEOUT_MS}ms to enter input, got {self.input_timeout_ms}ms"
            )
