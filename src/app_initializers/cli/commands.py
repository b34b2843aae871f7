# src/app_initializers/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.models import ScenePhase
from ..manager import InitManager

CommandHandler = Callable[[InitManager, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the demo console (/help, /fg, ...)."""

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

    def handle(self, manager: InitManager, line: str) -> str | None:
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

        return handler(manager, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(manager: InitManager, args: list[str]) -> str:
    return registry.build_help()


def cmd_foreground(manager: InitManager, args: list[str]) -> str:
    manager.on_foreground()
    return "App entered foreground; active initializers scheduled."


def cmd_background(manager: InitManager, args: list[str]) -> str:
    manager.on_background()
    return "App left foreground; running active initializers (if any) cancelled."


def cmd_scene(manager: InitManager, args: list[str]) -> str:
    """
    /scene active      -> same as /fg
    /scene inactive    -> same as /bg
    /scene background  -> same as /bg
    """
    usage = "Usage: /scene active | inactive | background"
    if not args:
        return usage
    try:
        phase = ScenePhase(args[0].lower())
    except ValueError:
        return usage
    manager.on_scene_phase_change(phase)
    return f"Scene phase -> {phase.value}."


def cmd_state(manager: InitManager, args: list[str]) -> str:
    lines = [
        "Initialization state:",
        f"  Launch: {manager.launch_state.value}",
        f"  Active: {manager.active_state.value}",
        f"  Overall: {manager.state.value}",
    ]
    for label, st in (("Launch", manager.launch_state.value), ("Active", manager.active_state.value)):
        if st.is_failed and st.error is not None:
            lines.append(f"  {label} error: {st.error}")
    done = ", ".join(sorted(str(i) for i in manager.completed_ids)) or "-"
    lines.append(f"  Completed: {done}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("fg", cmd_foreground, help_text="Simulate the app entering the foreground.", aliases=["foreground"])
registry.register("bg", cmd_background, help_text="Simulate the app leaving the foreground.", aliases=["background"])
registry.register("scene", cmd_scene, help_text="Report a scene phase: /scene active | inactive | background.")
registry.register("state", cmd_state, help_text="Show launch/active/overall state.", aliases=["status"])
