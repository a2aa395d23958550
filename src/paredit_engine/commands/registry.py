"""Command registry: owns command references and runs them against buffers."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from paredit_engine.buffer import Buffer
from paredit_engine.runtime.telemetry import span

from .models import CommandRef


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    command_count: int
    execution_count: int
    namespaces: tuple[str, ...]


class CommandConflictError(RuntimeError):
    """Raised when a command id is registered twice without ``replace``."""

    def __init__(self, command: CommandRef, existing: CommandRef):
        super().__init__(f"Command '{command.id}' is already registered")
        self.command = command
        self.existing = existing


class CommandRegistry:
    """Maps command ids to handlers and executes them with telemetry."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, CommandRef] = {}
        self._executions: Counter[str] = Counter()
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def __contains__(self, command_id: object) -> bool:
        return command_id in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def get(self, command_id: str) -> CommandRef:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def register(self, command: CommandRef, *, replace: bool = False) -> CommandRef:
        with span(
            "commands::register",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command.id},
        ) as handle:
            existing = self._commands.get(command.id)
            if existing is not None and not replace:
                handle.add_metadata("conflict", existing.id)
                raise CommandConflictError(command, existing)
            self._commands[command.id] = command
            self._revision += 1
            return command

    def unregister(self, command_id: str) -> Optional[CommandRef]:
        with span(
            "commands::unregister",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command_id},
        ):
            command = self._commands.pop(command_id, None)
            if command is not None:
                self._revision += 1
            return command

    def iter_commands(self, namespace: Optional[str] = None) -> Iterator[CommandRef]:
        for command in self._commands.values():
            if namespace is None or command.namespace == namespace:
                yield command

    def execute(
        self, command_id: str, buffer: Buffer, *args: object, **kwargs: object
    ) -> object:
        """Run ``command_id`` against ``buffer``; extra arguments go to the handler."""

        command = self.get(command_id)
        with span(
            "commands::execute",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command_id": command.telemetry_name, "buffer": buffer.name},
        ) as handle:
            version_before = buffer.version
            result = command.handler(buffer, *args, **kwargs)
            self._executions[command.id] += 1
            handle.add_metadata("changed", buffer.version != version_before)
            return result

    def execution_count(self, command_id: str) -> int:
        return self._executions[command_id]

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            execution_count=sum(self._executions.values()),
            namespaces=tuple(
                sorted({command.namespace for command in self._commands.values()})
            ),
        )


__all__ = ["CommandConflictError", "CommandRegistry", "RegistryStats"]
