"""
Simon rule engine - pattern generation, input deadline and validation
"""

import random
import threading
from typing import Callable, List, Optional, Tuple, TYPE_CHECKING

from utils import DeadlineTimer
from .config import SimonConfig
from .errors import ControllerAlreadyAttachedError, ControllerNotAttachedError
from .states import SimonState

if TYPE_CHECKING:
    from hybridLogger import ClassLogger
    from .interfaces import ISimonController


class SimonGame:
    """
    State machine holding the rules of Simon.

    Owns the pattern, the input collected during the current round,
    the current SimonState and the input deadline. A controller
    (ISimonController) is attached once and receives display_pattern()
    and game_over() callbacks.

    Two threads touch the engine: the one forwarding player presses and
    the deadline timer thread. Every mutation happens under a single
    reentrant lock, and callbacks are delivered inside it once the
    engine state is consistent.

    Example:
        game = SimonGame(number_of_buttons=4, input_timeout_ms=30000, logger=logger)
        game.attach_controller(controller)
        game.start()                # controller.display_pattern((2,))
        game.listen_for_input()     # deadline armed
        game.button_pressed(2)      # round won → display_pattern((2, 0))
    """

    def __init__(self,
                 number_of_buttons: int,
                 input_timeout_ms: int,
                 logger: 'ClassLogger',
                 rng: Optional[random.Random] = None,
                 timer_factory: Callable[..., threading.Timer] = threading.Timer):
        """
        Initialize the engine in the OFF state.

        Args:
            number_of_buttons: Buttons on the board (ids 0..n-1), at least 2
            input_timeout_ms: Time allowed to replay a pattern, at least 5000
            logger: Logger for round and state reporting
            rng: Random source for new pattern elements (seed it for reproducible games)
            timer_factory: threading.Timer compatible constructor for the input deadline

        Raises:
            InvalidConfigurationError: If either setting is out of range
        """
        self.config = SimonConfig(number_of_buttons, input_timeout_ms)
        self.config.validate()

        self.logger = logger
        self._rng = rng if rng is not None else random.Random()
        self._controller: Optional['ISimonController'] = None

        self._state = SimonState.OFF
        self._pattern: List[int] = []
        self._collected_input: List[int] = []

        self._lock = threading.RLock()
        self._deadline = DeadlineTimer(self._on_deadline_expired, timer_factory=timer_factory)

        self.logger.info(
            f"SimonGame initialized: {number_of_buttons} buttons, {input_timeout_ms}ms input timeout"
        )

    @classmethod
    def from_config(cls,
                    config: SimonConfig,
                    logger: 'ClassLogger',
                    rng: Optional[random.Random] = None,
                    timer_factory: Callable[..., threading.Timer] = threading.Timer) -> 'SimonGame':
        """Build an engine from a SimonConfig"""
        return cls(config.number_of_buttons, config.input_timeout_ms, logger,
                   rng=rng, timer_factory=timer_factory)

    @property
    def number_of_buttons(self) -> int:
        return self.config.number_of_buttons

    @property
    def input_timeout_ms(self) -> int:
        return self.config.input_timeout_ms

    def attach_controller(self, controller: 'ISimonController') -> None:
        """
        Connect the controller that receives the engine callbacks.

        Raises:
            ControllerAlreadyAttachedError: If a controller is already attached
        """
        with self._lock:
            if self._controller is not None:
                raise ControllerAlreadyAttachedError(
                    f"{type(self._controller).__name__} is already attached to this game"
                )
            self._controller = controller
        self.logger.debug(f"Controller attached: {type(controller).__name__}")

    # ------------------------------------------------------------------
    # Controller → engine
    # ------------------------------------------------------------------

    def start(self) -> None:
        """
        Start a round: extend the pattern by one random button and show it.

        Used both for the first round of a game and for every following
        round, so the pattern keeps growing until the game is over.

        Raises:
            ControllerNotAttachedError: If no controller was attached
        """
        with self._lock:
            controller = self._require_controller()

            # The previous round's deadline must not fire into this one
            self._deadline.cancel()

            self._state = SimonState.DISPLAYING_PATTERN
            self._collected_input.clear()
            self._pattern.append(self._rng.randrange(self.config.number_of_buttons))
            snapshot = tuple(self._pattern)

            self.logger.info(f"Round {len(snapshot)} started")
            self.logger.debug(f"Pattern: {list(snapshot)}")

            controller.display_pattern(snapshot)

    def listen_for_input(self) -> None:
        """
        Accept player input and arm the input deadline.

        Call once the pattern has been shown. Re-arms (restarts) the
        deadline if already listening. Ignored while OFF, there is no
        pattern to replay.
        """
        with self._lock:
            if self._state is SimonState.OFF:
                self.logger.warning("listen_for_input() called with no game running, ignoring")
                return

            self._state = SimonState.WAITING_FOR_INPUT
            self._deadline.arm(self.config.input_timeout_s)

            self.logger.debug(
                f"Waiting for {len(self._pattern)} presses ({self.config.input_timeout_ms}ms deadline)"
            )

    def button_pressed(self, button_id: int) -> None:
        """
        Feed one player press into the engine.

        Wrong presses end the game immediately, even before the full
        pattern length is reached. A correct full replay starts the
        next round. Presses outside WAITING_FOR_INPUT are ignored.

        Args:
            button_id: Pressed button (0-based). Ids outside the board
                simply never match the pattern.
        """
        with self._lock:
            if self._state is not SimonState.WAITING_FOR_INPUT:
                self.logger.debug(f"Ignoring button {button_id} in state {self._state}")
                return

            self._collected_input.append(button_id)
            self.logger.debug(
                f"Button {button_id} pressed ({len(self._collected_input)}/{len(self._pattern)})"
            )

            mismatch = self._first_mismatch()
            if mismatch is not None:
                self._game_over(
                    f"wrong button at position {mismatch}: "
                    f"expected {self._pattern[mismatch]}, got {self._collected_input[mismatch]}"
                )
                return

            if len(self._collected_input) == len(self._pattern):
                self.logger.info(f"Round {len(self._pattern)} completed")
                self.start()

    def get_current_state(self) -> SimonState:
        """Current state of the game (no side effects)"""
        return self._state

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def get_pattern(self) -> Tuple[int, ...]:
        """Snapshot of the current pattern (empty while OFF)"""
        with self._lock:
            return tuple(self._pattern)

    def get_collected_input(self) -> Tuple[int, ...]:
        """Snapshot of the presses collected in the current round"""
        with self._lock:
            return tuple(self._collected_input)

    def get_round(self) -> int:
        """Current round number, i.e. the pattern length (0 while OFF)"""
        with self._lock:
            return len(self._pattern)

    def cleanup(self) -> None:
        """Cancel the deadline and drop all game data without calling the controller"""
        with self._lock:
            self._deadline.cancel()
            self._pattern.clear()
            self._collected_input.clear()
            self._state = SimonState.OFF
        self.logger.debug("SimonGame cleaned up")

    # ------------------------------------------------------------------
    # Internals (caller holds self._lock unless stated otherwise)
    # ------------------------------------------------------------------

    def _require_controller(self) -> 'ISimonController':
        if self._controller is None:
            raise ControllerNotAttachedError("attach_controller() must be called before start()")
        return self._controller

    def _first_mismatch(self) -> Optional[int]:
        """Index of the first collected press that differs from the pattern, or None"""
        assert len(self._collected_input) <= len(self._pattern), \
            "collected input is longer than the pattern"
        for index, (pressed, expected) in enumerate(zip(self._collected_input, self._pattern)):
            if pressed != expected:
                return index
        return None

    def _on_deadline_expired(self, generation: int) -> None:
        """Deadline timer callback, runs on the timer thread"""
        try:
            with self._lock:
                # Cancelled or replaced after it started firing
                if not self._deadline.is_current(generation):
                    return
                # Game already over, or a new round is on display
                if self._state is not SimonState.WAITING_FOR_INPUT:
                    return

                collected = len(self._collected_input)
                expected = len(self._pattern)
                if collected < expected:
                    self._game_over(f"input deadline expired after {collected}/{expected} presses")
                    return

                mismatch = self._first_mismatch()
                if mismatch is not None:
                    self._game_over(f"input deadline expired with wrong button at position {mismatch}")
        except Exception as e:
            self.logger.error(f"Input deadline handler failed: {e}", exception=e)
            raise

    def _game_over(self, reason: str) -> None:
        """End the game: clear everything, go OFF, then notify the controller"""
        if self._state is SimonState.OFF:
            return

        self._deadline.cancel()
        reached_round = len(self._pattern)
        self._pattern.clear()
        self._collected_input.clear()
        self._state = SimonState.OFF

        self.logger.info(f"Game over in round {reached_round}: {reason}")

        self._require_controller().game_over()

    def __str__(self) -> str:
        with self._lock:
            return (
                f"SimonGame(state={self._state}, round={len(self._pattern)}, "
                f"collected={len(self._collected_input)}, buttons={self.config.number_of_buttons})"
            )
