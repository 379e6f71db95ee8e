# src/eisen_triage/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from pathlib import Path
from typing import cast

from ..core.state import AppState
from ..triage.board import card_badges, eliminate, group_by_quadrant, move_to_quadrant, toggle_done
from ..triage.legacy import import_legacy_payload
from ..triage.models import Quadrant, TaskRecord

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

COLUMN_TITLES = {
    Quadrant.DO: "Do (Urgent & Important)",
    Quadrant.SCHEDULE: "Schedule (Important)",
    Quadrant.DELEGATE: "Delegate (Urgent)",
    Quadrant.ELIMINATE: "Eliminate",
}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /board, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_card(index: int, task: TaskRecord) -> str:
    done = "x" if task.done_at else " "
    parts = [f"{index}. [{done}] {task.text}", f"U:{task.urgency} I:{task.importance}"]
    badges = card_badges(task)
    if badges:
        parts.append(" ".join(f"({b})" for b in badges))
    if task.ai_suggestion:
        parts.append(f"AI:{task.ai_suggestion.value}")
    return "  ".join(parts)


def render_board(state: AppState) -> str:
    columns = group_by_quadrant(state.tasks)
    lines: list[str] = []
    n = 0
    for quadrant, tasks in columns.items():
        lines.append(f"== {COLUMN_TITLES[quadrant]} ==")
        if not tasks:
            lines.append("  No tasks")
        for task in tasks:
            n += 1
            lines.append("  " + format_card(n, task))
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    s = state.settings
    refine = "ON" if state.refine_enabled else "OFF"
    return (
        "Status:\n"
        f"  Local refine: {refine}\n"
        f"  Refiner: {state.refiner.__class__.__name__}\n"
        f"  Endpoint: {getattr(s, 'refine_endpoint', '') or '(none)'}\n"
        f"  Model: {getattr(s, 'refine_model', '')} (timeout {getattr(s, 'refine_timeout_ms', 0)} ms)\n"
        f"  Tasks on board: {len(state.tasks)}"
    )


def cmd_refine(state: AppState, args: list[str]) -> str:
    """
    /refine       -> show status
    /refine on    -> ask the local model about borderline tasks
    /refine off   -> heuristics only
    """
    if not args:
        return f"Local refine is currently {'ON' if state.refine_enabled else 'OFF'}. Use /refine on or /refine off."

    arg = args[0].lower()
    if arg in ("on", "1", "true", "yes"):
        if state.refine_enabled:
            return "Local refine is already ON."
        state.refine_enabled = True
        return "Local refine enabled. Borderline tasks will get an AI suggestion."

    if arg in ("off", "0", "false", "no"):
        if not state.refine_enabled:
            return "Local refine is already OFF."
        state.refine_enabled = False
        return "Local refine disabled. Heuristics only."

    return "Usage: /refine on or /refine off."


def cmd_board(state: AppState, args: list[str]) -> str:
    return render_board(state)


def _resolve(state: AppState, args: list[str], usage: str) -> TaskRecord | str:
    if not args:
        return usage
    task = state.find_task(args[0])
    if task is None:
        return f"No task {args[0]!r}. Use /board to see task numbers."
    return task


def cmd_move(state: AppState, args: list[str]) -> str:
    usage = "Usage: /move <n> do|schedule|delegate|eliminate"
    found = _resolve(state, args, usage)
    if isinstance(found, str):
        return found
    quadrant = Quadrant.parse(args[1]) if len(args) > 1 else None
    if quadrant is None:
        return usage
    state.replace_task(move_to_quadrant(found, quadrant))
    return f"Moved to {quadrant.value}: {found.text}"


def cmd_done(state: AppState, args: list[str]) -> str:
    found = _resolve(state, args, "Usage: /done <n>")
    if isinstance(found, str):
        return found
    updated = toggle_done(found)
    state.replace_task(updated)
    return f"{'Done' if updated.done_at else 'Reopened'}: {found.text}"


def cmd_drop(state: AppState, args: list[str]) -> str:
    found = _resolve(state, args, "Usage: /drop <n>")
    if isinstance(found, str):
        return found
    state.replace_task(eliminate(found))
    return f"Eliminated: {found.text}"


def cmd_import(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/import <path> -> load tasks saved in the old JSON format."""
    if not args:
        return "Usage: /import <path-to-json>"

    path = Path(" ".join(args)).expanduser()
    if not path.exists():
        return f"File not found: {path}"

    if emit:
        with contextlib.suppress(Exception):
            emit(f"[IMPORT] Reading {path}...")

    try:
        raw = path.read_text("utf-8")
    except (OSError, UnicodeDecodeError):
        logger.exception("Failed to read legacy payload from %s", path)
        return f"Could not read {path}."

    known = {t.id for t in state.tasks}
    imported = [t for t in import_legacy_payload(raw) if t.id not in known]
    state.tasks.extend(imported)
    return f"Imported {len(imported)} task(s)."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show refinement settings and board size.")
registry.register("refine", cmd_refine, help_text="Enable/disable local refine: /refine on | /refine off.")
registry.register("board", cmd_board, help_text="Show the four quadrant columns.", aliases=["b"])
registry.register("move", cmd_move, help_text="Move a task: /move <n> <quadrant>.")
registry.register("done", cmd_done, help_text="Toggle done: /done <n>.")
registry.register("drop", cmd_drop, help_text="Eliminate a task: /drop <n>.")
registry.register("import", cmd_import, help_text="Import tasks from the old JSON format: /import <path>.")
