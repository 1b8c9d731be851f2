"""Command registry and dispatcher for the interactive console."""

from __future__ import annotations

import shlex
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog


logger = structlog.get_logger(__name__)

Handler = Callable[..., str]
Availability = Callable[[], bool]


def always() -> bool:
    return True


@dataclass(frozen=True)
class Option:
    """A ``--key value`` option accepted by a command."""

    key: str
    help: str = ""
    mandatory: bool = False
    default: str | None = None
    dest: str = ""

    @property
    def target(self) -> str:
        return self.dest or self.key


@dataclass(frozen=True)
class Command:
    name: str
    help: str
    handler: Handler
    available: Availability = always
    options: tuple[Option, ...] = field(default_factory=tuple)


class CommandRegistry:
    """Maps multi-word command names to handlers and availability checks."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        help: str,  # noqa: A002
        handler: Handler,
        available: Availability = always,
        options: tuple[Option, ...] = (),
    ) -> Command:
        if name in self._commands:
            raise ValueError(f"Command '{name}' is already registered")
        command = Command(name=name, help=help, handler=handler, available=available, options=options)
        self._commands[name] = command
        return command

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    @property
    def commands(self) -> list[Command]:
        return sorted(self._commands.values(), key=lambda c: c.name)

    def available_commands(self) -> list[Command]:
        return [c for c in self.commands if c.available()]

    def match(self, words: list[str]) -> tuple[Command | None, list[str]]:
        """Longest command name that prefixes ``words``, plus the remaining words."""
        for length in range(len(words), 0, -1):
            command = self._commands.get(" ".join(words[:length]))
            if command is not None:
                return command, words[length:]
        return None, words

    def dispatch(self, line: str) -> str:
        """Parse and run one console line; never raises for command errors."""
        try:
            words = shlex.split(line)
        except ValueError as e:
            return f"Cannot parse command: {e}"
        if not words:
            return ""

        command, rest = self.match(words)
        if command is None:
            return f"Command '{' '.join(words)}' not found"
        if not command.available():
            return f"Command '{command.name}' is not available in this context"

        try:
            kwargs = _parse_options(command, rest)
        except CommandSyntaxError as e:
            return str(e)

        try:
            return command.handler(**kwargs)
        except Exception as e:
            logger.exception("command_failed", command=command.name)
            return f"Command failed: {e}"


def _parse_options(command: Command, args: list[str]) -> dict[str, str]:
    known = {option.key: option for option in command.options}
    values: dict[str, str] = {}
    position = 0
    while position < len(args):
        token = args[position]
        if not token.startswith("--"):
            raise CommandSyntaxError(f"Unexpected argument '{token}' for '{command.name}'")
        key = token[2:]
        option = known.get(key)
        if option is None:
            raise CommandSyntaxError(f"Unknown option '--{key}' for '{command.name}'")
        if position + 1 >= len(args):
            raise CommandSyntaxError(f"Option '--{key}' requires a value")
        values[option.target] = args[position + 1]
        position += 2

    for option in command.options:
        if option.target in values:
            continue
        if option.mandatory:
            raise CommandSyntaxError(f"Missing mandatory option '--{option.key}'")
        if option.default is not None:
            values[option.target] = option.default
    return values


class CommandSyntaxError(Exception):
    """Raised when a command line does not match the command's options."""
