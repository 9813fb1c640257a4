"""
Line-mode console controller for playing Simon in a terminal
"""

import sys
import threading
from typing import Optional, TextIO, Tuple, TYPE_CHECKING

from .interfaces import ISimonController

if TYPE_CHECKING:
    from hybridLogger import ClassLogger
    from .simon_game import SimonGame


class ConsoleSimonController(ISimonController):
    """
    Console front end for SimonGame.

    Prints each pattern as space separated button ids and reads one
    button id per line (press Enter after each number). Works over SSH
    and with redirected stdin since it only needs line-buffered input.

    Presses are read on a daemon thread while the calling thread waits
    for the game to end, so an input timeout ends run() even though the
    reader is still blocked on readline().

    Example:
        game = SimonGame(4, 30000, logger=game_logger)
        console = ConsoleSimonController(game, logger=console_logger)
        console.run()   # returns once the game is over
    """

    PATTERN_PREFIX = "Pattern to repeat:  "
    START_PROMPT = "Press Enter to start game: "
    GAME_OVER_MESSAGE = "Game over!"
    NOT_A_NUMBER_MESSAGE = "Can only provide numbered input"

    def __init__(self,
                 game: 'SimonGame',
                 logger: 'ClassLogger',
                 input_stream: Optional[TextIO] = None,
                 output_stream: Optional[TextIO] = None):
        """
        Create the controller and attach it to the game.

        Args:
            game: Engine to drive
            logger: ClassLogger instance
            input_stream: Where presses are read from (defaults to stdin)
            output_stream: Where patterns and messages go (defaults to stdout)
        """
        self._game = game
        self._logger = logger
        self._input = input_stream if input_stream is not None else sys.stdin
        self._output = output_stream if output_stream is not None else sys.stdout

        self._finished = threading.Event()
        self._lost = False
        self._best_round = 0
        self._reader: Optional[threading.Thread] = None

        game.attach_controller(self)

    @property
    def best_round(self) -> int:
        """Longest pattern shown during this session"""
        return self._best_round

    @property
    def is_finished(self) -> bool:
        return self._finished.is_set()

    # ISimonController

    def display_pattern(self, pattern: Tuple[int, ...]) -> None:
        self._best_round = max(self._best_round, len(pattern))
        self._write(self.PATTERN_PREFIX + " ".join(str(button) for button in pattern))

        # Shown all at once, so listening starts right away
        self._game.listen_for_input()

    def game_over(self) -> None:
        self._lost = True
        self._write(self.GAME_OVER_MESSAGE)
        self._logger.info(f"Game over, best round: {self._best_round}")
        self._finished.set()

    # Game loop

    def run(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for Enter, start the game and play until it is over.

        Args:
            timeout: Give up waiting after this many seconds (None waits forever)

        Returns:
            True if the game ended with a game over, False if input ran out first

        Raises:
            RuntimeError: If the reader of a previous run() is still waiting on the
                input stream (a deadline ended that game while it was blocked)
        """
        if self._reader is not None and self._reader.is_alive():
            raise RuntimeError("Previous game's input reader is still active on this stream")

        self._output.write(self.START_PROMPT)
        self._output.flush()
        if not self._input.readline():
            self._logger.info("Input closed before the game started")
            return False

        self._finished.clear()
        self._lost = False
        self._game.start()

        self._reader = threading.Thread(target=self._read_presses, name="SimonConsoleInput", daemon=True)
        self._reader.start()

        if not self._finished.wait(timeout):
            self._logger.warning(f"No game over within {timeout}s, stopping")
        return self._lost

    def handle_line(self, line: str) -> None:
        """Parse one input line and forward it as a button press"""
        text = line.strip()
        try:
            button_id = int(text)
        except ValueError:
            self._write(self.NOT_A_NUMBER_MESSAGE)
            self._logger.debug(f"Rejected non-numeric input: {text!r}")
            return

        self._game.button_pressed(button_id)

    def _read_presses(self) -> None:
        """Reader thread: forward lines until game over or end of input"""
        try:
            while not self._finished.is_set():
                line = self._input.readline()
                if not line:
                    self._logger.info("Input closed, ending game loop")
                    break
                # A deadline may have ended the game while we were blocked
                if self._finished.is_set():
                    break
                self.handle_line(line)
        except Exception as e:
            self._logger.error(f"Console input error: {e}", exception=e)
            raise
        finally:
            self._finished.set()

    def _write(self, text: str) -> None:
        self._output.write(text + "\n")
        self._output.flush()
