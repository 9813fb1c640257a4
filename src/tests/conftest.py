# src/tests/conftest.py
import io
import itertools
import logging
import os
import random
import sys

import pytest

src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from hybridLogger import HybridLogger
from simon_system import ISimonController, SimonGame

_logger_ids = itertools.count()


class FakeTimer:
    """threading.Timer stand-in that only fires when the test says so"""

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = tuple(args or ())
        self.kwargs = dict(kwargs or {})
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Run the callback as the timer thread would, even if cancelled (simulates a race)"""
        self.function(*self.args, **self.kwargs)


class FakeTimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function, args=None, kwargs=None):
        timer = FakeTimer(interval, function, args=args, kwargs=kwargs)
        self.timers.append(timer)
        return timer

    @property
    def latest(self):
        return self.timers[-1]

    @property
    def live(self):
        return [t for t in self.timers if t.started and not t.cancelled]


class ScriptedRandom(random.Random):
    """Random whose randrange() replays a fixed script, then cycles it"""

    def __init__(self, values):
        super().__init__(0)
        self._values = itertools.cycle(values)
        self.calls = []

    def randrange(self, start, stop=None, step=1):
        self.calls.append((start, stop))
        return next(self._values)


class RecordingController(ISimonController):
    """Controller that remembers every callback"""

    def __init__(self, game=None, listen_on_display=False):
        self.game = game
        self.listen_on_display = listen_on_display
        self.patterns = []
        self.game_over_calls = 0
        self.states_seen_on_game_over = []
        if game is not None:
            game.attach_controller(self)

    def display_pattern(self, pattern):
        self.patterns.append(pattern)
        if self.listen_on_display:
            self.game.listen_for_input()

    def game_over(self):
        self.game_over_calls += 1
        if self.game is not None:
            self.states_seen_on_game_over.append(self.game.get_current_state())


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def main_logger(log_stream):
    hybrid = HybridLogger(f"simon_test_{next(_logger_ids)}", log_dir=None, stream=log_stream, use_colors=False)
    yield hybrid
    hybrid.cleanup()


@pytest.fixture
def logger(main_logger):
    return main_logger.get_class_logger("SimonGame", logging.DEBUG)


@pytest.fixture
def timers():
    return FakeTimerFactory()


@pytest.fixture
def make_game(logger, timers):
    """Build a SimonGame on fake timers with a scripted pattern"""
    games = []

    def _make(script=(0, 1, 2, 3), number_of_buttons=4, input_timeout_ms=5000):
        game = SimonGame(number_of_buttons, input_timeout_ms, logger,
                         rng=ScriptedRandom(script), timer_factory=timers)
        games.append(game)
        return game

    yield _make
    for game in games:
        game.cleanup()
