"""Output sink used to talk to the person running the package manager."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

__all__ = ["OutputSink", "LoggingOutput", "BufferedOutput"]


@runtime_checkable
class OutputSink(Protocol):
    """Console-like channel supplied by the host package manager."""

    def write(self, messages: str | list[str]) -> None: ...

    def is_verbose(self) -> bool: ...


class LoggingOutput:
    """Output sink that forwards every line to a :mod:`logging` logger.

    Verbosity follows the logger's effective level: DEBUG or lower counts
    as verbose.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._logger = logger or logging.getLogger("nova_installer")
        self._level = level

    def write(self, messages: str | list[str]) -> None:
        lines = [messages] if isinstance(messages, str) else messages
        for line in lines:
            self._logger.log(self._level, "%s", line)

    def is_verbose(self) -> bool:
        return self._logger.isEnabledFor(logging.DEBUG)


class BufferedOutput:
    """Output sink that keeps written lines in memory."""

    def __init__(self, verbose: bool = False) -> None:
        self.lines: list[str] = []
        self.verbose = verbose

    def write(self, messages: str | list[str]) -> None:
        if isinstance(messages, str):
            self.lines.append(messages)
        else:
            self.lines.extend(messages)

    def is_verbose(self) -> bool:
        return self.verbose
