# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs exactly one command and prints its reply.

Exit status:
- 0: command ran, including usage / validation / not-found replies
- 1: the tasks file could not be read or written, or is malformed
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry as command_registry
from ..config import get_settings
from ..errors import StoreError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

FILE_OPTION = "--file"


def _split_file_option(argv: list[str]) -> tuple[str | None, list[str]] | None:
    """Pull a leading `--file PATH` (or `--file=PATH`) off argv. None means malformed."""
    if not argv:
        return None, argv
    head = argv[0]
    if head == FILE_OPTION:
        if len(argv) < 2 or not argv[1]:
            return None
        return argv[1], argv[2:]
    if head.startswith(FILE_OPTION + "="):
        value = head[len(FILE_OPTION) + 1 :]
        if not value:
            return None
        return value, argv[1:]
    return None, argv


def main(argv: list[str] | None = None, *, settings=None) -> int:
    if settings is None:
        settings = get_settings()
    if argv is None:
        argv = sys.argv[1:]

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    log_dir = settings.data_dir if getattr(settings, "log_to_file", False) else None
    try:
        setup_logging(console_level=console_level, log_dir=log_dir)
    except OSError as e:
        # The log file is optional; keep going with console logging only.
        setup_logging(console_level=console_level)
        logger.warning("File logging disabled, cannot write to %s: %s", log_dir, e)

    split = _split_file_option(list(argv))
    if split is None:
        print(f"Usage: {command_registry.prog} [{FILE_OPTION} PATH] <command> [args...]")
        return 0
    tasks_path, command_argv = split

    logger.debug("Starting %s argv=%s", getattr(settings, "app_name", "task-tracker"), command_argv)

    try:
        state = create_initial_state(settings=settings, tasks_path=tasks_path)
        reply = command_registry.handle(state, command_argv)
    except StoreError as e:
        logger.debug("Fatal store error.", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(reply)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
