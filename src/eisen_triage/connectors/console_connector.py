# src/eisen_triage/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import format_card, registry as command_registry
from ..core.state import AppState
from ..triage.models import TaskInput
from ..triage.pipeline import build_record, classify_task

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def parse_task_line(line: str) -> TaskInput:
    """
    Turn a console line into a TaskInput.

    "#word" tokens become tags (without the '#'); everything else is the task text.
    """
    words: list[str] = []
    tags: list[str] = []
    for token in line.split():
        if token.startswith("#") and len(token) > 1:
            tags.append(token[1:])
        else:
            words.append(token)
    return TaskInput(text=" ".join(words), tags=tuple(tags))


def add_task(state: AppState, line: str) -> str:
    """Classify a console line, put it on the board and return its card."""
    task = parse_task_line(line)
    result = asyncio.run(
        classify_task(task, refine_enabled=state.refine_enabled, refiner=state.refiner)
    )
    record = build_record(task, result)
    state.tasks.insert(0, record)
    logger.debug(
        "Added task id=%s quadrant=%s borderline=%s", record.id, record.quadrant.value, result.borderline
    )

    position = next(i for i, t in enumerate(state.board_order(), start=1) if t.id == record.id)
    return f"-> {record.quadrant.value}: {format_card(position, record)}"


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (refine=%s).", state.refine_enabled)
    _print_ts("[CONSOLE] Type a task and press Enter. Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(">>> Task: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            _print_ts(cmd_response)
            continue

        try:
            _print_ts(add_task(state, user_input))
        except Exception:
            logger.exception("Classification crashed.")
            _print_ts("Internal error while classifying the task.")

    logger.info("Console connector finished.")
