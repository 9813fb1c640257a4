"""
Simon game states
"""

from enum import Enum


class SimonState(Enum):
    """
    States of the Simon rule engine.

    Transitions:
    - OFF → DISPLAYING_PATTERN: start()
    - DISPLAYING_PATTERN → WAITING_FOR_INPUT: listen_for_input()
    - WAITING_FOR_INPUT → DISPLAYING_PATTERN: full pattern replayed correctly
    - WAITING_FOR_INPUT → OFF: wrong button or input deadline expired
    """
    OFF = "off"
    DISPLAYING_PATTERN = "displaying_pattern"
    WAITING_FOR_INPUT = "waiting_for_input"

    def __str__(self) -> str:
        return self.name
