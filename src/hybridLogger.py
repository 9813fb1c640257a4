import logging
from datetime import datetime
import sys
import traceback
from pathlib import Path
from contextlib import suppress
from typing import Optional, Dict, TextIO

class ColoredFormatter(logging.Formatter):
    """Bracket formatter, with ANSI colors for interactive consoles"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[94m',    # Blue
        'INFO': '\033[92m',     # Green
        'WARNING': '\033[93m',  # Yellow
        'ERROR': '\033[91m',    # Red
        'CRITICAL': '\033[95m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def __init__(self, use_colors: bool = False):
        self.use_colors = use_colors
        # Format: [time] [level] [class] message
        super().__init__('[%(asctime)s] [%(levelname)s] [%(class_name)s] %(message)s')

    def format(self, record: logging.LogRecord) -> str:
        # Records from plain stdlib loggers carry no class name
        if not hasattr(record, 'class_name'):
            record.class_name = 'Main'

        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            formatted = f"{color}{formatted}{self.COLORS['RESET']}"

        return formatted

class ClassLogger:
    """Per-class logger wrapper with its own level threshold"""

    def __init__(self, main_logger: logging.Logger, class_name: str, level: int):
        self.main_logger = main_logger
        self.class_name = class_name
        self.level = level

    def _log(self, level: int, message: str, exc_info=None) -> None:
        """Build a record tagged with the class name and hand it to the main logger"""
        if level < self.level:
            return
        record = self.main_logger.makeRecord(
            self.main_logger.name, level, "", 0, message, (), exc_info
        )
        record.class_name = self.class_name
        self.main_logger.handle(record)

    def is_enabled_for(self, level: int) -> bool:
        """True if a message at this level would be emitted"""
        return level >= self.level

    def debug(self, message: str) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: str, exception: Optional[BaseException] = None) -> None:
        """Log error message, appending type/file/line when an exception is given"""
        if exception is None:
            self._log(logging.ERROR, message)
            return

        exc_type = type(exception).__name__
        tb = traceback.extract_tb(exception.__traceback__)
        filename, lineno = (tb[-1].filename, tb[-1].lineno) if tb else ("unknown", 0)
        enhanced_message = f"{message} | Type: {exc_type} | File: {filename} | Line: {lineno}"
        self._log(
            logging.ERROR,
            enhanced_message,
            exc_info=(type(exception), exception, exception.__traceback__)
        )

    def critical(self, message: str) -> None:
        self._log(logging.CRITICAL, message)

    def flush(self) -> None:
        """Flush every handler of the underlying logger"""
        for handler in self.main_logger.handlers:
            with suppress(OSError, ValueError):
                handler.flush()

class HybridLogger:
    """
    Logger factory with per-class loggers, colored console output
    and an optional timestamped log file.

    Usage:
        with HybridLogger("Simon") as main_logger:
            logger = main_logger.get_class_logger("SimonGame", logging.DEBUG)
            logger.info("Round 1 started")
    """

    def __init__(self,
                 name: str = "app",
                 log_dir: Optional[str] = "logs",
                 stream: Optional[TextIO] = None,
                 use_colors: Optional[bool] = None):
        """
        Args:
            name: Logger name, also used as the log file prefix
            log_dir: Directory for the log file, None for console only
            stream: Console stream (defaults to stdout)
            use_colors: Force colors on/off (defaults to stream.isatty())
        """
        self.name = name
        self.log_dir = log_dir
        self.stream = stream if stream is not None else sys.stdout
        if use_colors is None:
            use_colors = hasattr(self.stream, "isatty") and self.stream.isatty()
        self.use_colors = use_colors
        self.log_file: Optional[Path] = None
        self.main_logger: Optional[logging.Logger] = None
        self.class_loggers: Dict[str, ClassLogger] = {}
        self._setup_main_logger()

    def _setup_main_logger(self) -> None:
        """Create main logger with console and (optionally) file handlers"""
        self.main_logger = logging.getLogger(self.name)
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False

        # Drop handlers left by a previous instance with the same name
        self.main_logger.handlers.clear()

        console_handler = logging.StreamHandler(self.stream)
        console_handler.setFormatter(ColoredFormatter(use_colors=self.use_colors))
        self.main_logger.addHandler(console_handler)

        if self.log_dir is None:
            return

        Path(self.log_dir).mkdir(parents=True, exist_ok=True)
        self.log_file = Path(self.log_dir) / f"{self.name}_{datetime.now().strftime('%Y-%m-%d_%H-%M-%S')}.log"

        file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        file_handler.setFormatter(ColoredFormatter(use_colors=False))
        self.main_logger.addHandler(file_handler)

    def get_class_logger(self, class_name: str, level: int = logging.INFO) -> ClassLogger:
        """
        Get a logger for a specific class with custom log level

        Args:
            class_name: Name of the class for log identification
            level: Minimum log level (logging.DEBUG, INFO, WARNING, ERROR, CRITICAL)

        Returns:
            ClassLogger: Logger instance for the specified class
        """
        if class_name not in self.class_loggers:
            self.class_loggers[class_name] = ClassLogger(
                self.main_logger, class_name, level
            )
        return self.class_loggers[class_name]

    def get_main_logger(self, level: int = logging.INFO) -> ClassLogger:
        """Convenience accessor for the "Main" class logger"""
        return self.get_class_logger("Main", level)

    def cleanup(self) -> None:
        """Flush and close every handler"""
        if self.main_logger:
            for handler in self.main_logger.handlers:
                with suppress(OSError, ValueError):
                    handler.flush()
                    handler.close()
            self.main_logger.handlers.clear()

    def __enter__(self) -> "HybridLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()
