"""Diagnostic sinks receiving diagnostics from the rule engine."""

import logging
import threading
from typing import Protocol

from ..rules.base import Diagnostic

logger = logging.getLogger(__name__)


class DiagnosticSink(Protocol):
    """Protocol for anything that records diagnostics.

    Implement this protocol to receive diagnostics from the engine as
    they are produced.
    """

    def add(self, diagnostic: Diagnostic) -> None:
        """Record one diagnostic.

        Args:
            diagnostic: Diagnostic produced by a rule
        """
        ...


class CollectingSink:
    """Sink that keeps diagnostics in arrival order."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []
        self._lock = threading.Lock()

    def add(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        with self._lock:
            return self._diagnostics.copy()

    def __len__(self) -> int:
        return len(self._diagnostics)


class LoggingSink:
    """Sink that writes each diagnostic to a logger as a warning."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self.logger = target or logger

    def add(self, diagnostic: Diagnostic) -> None:
        self.logger.warning(
            f"{diagnostic.position}: {diagnostic.text} [{diagnostic.rule_id}]"
        )
