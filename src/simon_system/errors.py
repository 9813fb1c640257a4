"""
Exceptions raised by the Simon game system
"""


class SimonError(Exception):
    """Base class for all Simon game errors"""


class InvalidConfigurationError(SimonError, ValueError):
    """Button count or input timeout outside the playable range"""


class ControllerNotAttachedError(SimonError, RuntimeError):
    """An engine operation needed a controller but none was attached"""


class ControllerAlreadyAttachedError(SimonError, RuntimeError):
    """attach_controller() was called a second time"""
