#!/usr/bin/env python3
"""
Play Simon in the terminal.

    python src/main.py --buttons 4 --timeout-ms 30000
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import hybridLogger
from simon_system import ConsoleSimonController, InvalidConfigurationError, SimonConfig, SimonGame
from simon_system.config import DEFAULT_BUTTONS, DEFAULT_INPUT_TIMEOUT_MS


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Simon memory game (console)')
    parser.add_argument(
        '--buttons',
        type=int,
        default=DEFAULT_BUTTONS,
        help=f'Number of buttons, ids 0..N-1 (default: {DEFAULT_BUTTONS})'
    )
    parser.add_argument(
        '--timeout-ms',
        type=int,
        default=DEFAULT_INPUT_TIMEOUT_MS,
        help=f'Time allowed to replay each pattern in ms (default: {DEFAULT_INPUT_TIMEOUT_MS})'
    )
    parser.add_argument(
        '--log-dir',
        default='logs',
        help='Directory for log files, "" to log to the console only (default: logs)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Log every press and state change'
    )
    return parser.parse_args(argv)


def runMain(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    level = logging.DEBUG if args.debug else logging.INFO

    # Logs go to stderr so they don't interleave with the game prompts
    with hybridLogger.HybridLogger("Simon", log_dir=args.log_dir or None, stream=sys.stderr) as main_logger:
        logger = main_logger.get_main_logger(level)

        config = SimonConfig(number_of_buttons=args.buttons, input_timeout_ms=args.timeout_ms)
        try:
            config.validate()
        except InvalidConfigurationError as e:
            logger.error(f"Invalid configuration: {e}")
            return 2

        game = SimonGame.from_config(config, logger=main_logger.get_class_logger("SimonGame", level))
        console = ConsoleSimonController(game, logger=main_logger.get_class_logger("Console", level))

        try:
            logger.info("Simon started")
            console.run()
        except KeyboardInterrupt:
            logger.info("Received shutdown signal (Ctrl+C)")
        finally:
            game.cleanup()
            logger.info(f"Simon stopped, best round: {console.best_round}")

    return 0


if __name__ == "__main__":
    sys.exit(runMain())
