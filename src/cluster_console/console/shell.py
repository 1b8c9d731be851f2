"""Interactive read-eval-print loop."""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import TextIO

import structlog

from cluster_console.config import Settings
from cluster_console.console.commands import build_registry
from cluster_console.console.registry import CommandRegistry
from cluster_console.domain.models.session import ConsoleSession
from cluster_console.domain.ports.services import ClusterManagementApi, EventPublisher
from cluster_console.domain.services.provisioning_service import ProvisioningOrchestrator
from cluster_console.domain.services.service_operations import ServiceOperations


logger = structlog.get_logger(__name__)

EXIT_COMMANDS = frozenset({"exit", "quit"})


class ConsoleShell:
    """Reads command lines, dispatches them and prints the result."""

    def __init__(
        self,
        registry: CommandRegistry,
        prompt: str = "ambari-shell>",
        read_line: Callable[[str], str] = input,
        output: TextIO | None = None,
    ) -> None:
        self._registry = registry
        self._prompt = prompt
        self._read_line = read_line
        self._output = output or sys.stdout

    def execute(self, line: str) -> str:
        return self._registry.dispatch(line)

    def run(self) -> None:
        logger.debug("console_started")
        while True:
            try:
                line = self._read_line(f"{self._prompt} ").strip()
            except (EOFError, KeyboardInterrupt):
                self._output.write("\n")
                break
            if line in EXIT_COMMANDS:
                break
            try:
                result = self.execute(line)
            except KeyboardInterrupt:
                self._output.write("\n")
                logger.info("command_interrupted", line=line)
                continue
            if result:
                self._output.write(f"{result}\n")
                self._output.flush()
        logger.debug("console_stopped")


def create_shell(
    settings: Settings,
    api: ClusterManagementApi,
    event_publisher: EventPublisher | None = None,
    read_line: Callable[[str], str] = input,
    output: TextIO | None = None,
) -> ConsoleShell:
    """Wire one operator session into a ready-to-run shell."""
    stream = output or sys.stdout
    session = ConsoleSession.open()
    orchestrator = ProvisioningOrchestrator(api, session, event_publisher)
    orchestrator.detect_cluster()
    registry = build_registry(
        orchestrator,
        ServiceOperations(api),
        api,
        progress_stream=stream,
        progress_interval=settings.console.progress_interval,
        progress_max_frames=settings.console.progress_max_frames,
    )
    return ConsoleShell(registry, prompt=settings.console.prompt, read_line=read_line, output=stream)
